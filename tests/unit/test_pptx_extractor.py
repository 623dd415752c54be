import pytest

from charcount.extractors.pptx_extractor import PptxExtractor
from charcount.processor.exceptions import DocumentParseError


class TestPptxExtractor:
    def test_one_unit_per_slide_in_order(self, pptx_bytes: bytes) -> None:
        units = PptxExtractor().extract_units(pptx_bytes)
        assert [u.label for u in units] == ["Slide 1", "Slide 2"]
        assert units[0].native_text == "Hello slide"
        assert units[1].native_text == "Second slide"

    def test_collects_slide_images(self, pptx_bytes: bytes) -> None:
        units = PptxExtractor().extract_units(pptx_bytes)
        assert [len(u.images) for u in units] == [1, 1]
        assert units[0].images[0].mime_type == "image/png"
        assert units[0].images[0].data == units[1].images[0].data

    def test_invalid_bytes_raise_parse_error(self) -> None:
        with pytest.raises(DocumentParseError):
            PptxExtractor().extract_units(b"not a deck")
