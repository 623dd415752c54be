from unittest.mock import patch

import pytest

from charcount.extractors.docx_extractor import DocxExtractor
from charcount.extractors.factory import ExtractorFactory
from charcount.extractors.image_extractor import ImageExtractor
from charcount.extractors.pptx_extractor import PptxExtractor
from charcount.extractors.text_extractor import TextExtractor
from charcount.extractors.xlsx_extractor import XlsxExtractor
from charcount.pdf.pymupdf_adapter import PyMuPdfAdapter
from charcount.processor.exceptions import LegacyFormatError, UnsupportedFormatError


def _make_settings():  # type: ignore[no-untyped-def]
    with patch("charcount.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = "pymupdf"
        settings.min_pdf_image_px = 10
        settings.lazy_object_max_attempts = 40
        settings.lazy_object_poll_interval_seconds = 0.05
        return settings


class TestExtractorFactory:
    @pytest.mark.parametrize(
        ("file_name", "expected"),
        [
            ("deck.pptx", PptxExtractor),
            ("REPORT.DOCX", DocxExtractor),
            ("book.xlsx", XlsxExtractor),
            ("notes.txt", TextExtractor),
            ("paper.pdf", PyMuPdfAdapter),
            ("scan.tiff", ImageExtractor),
            ("photo.webp", ImageExtractor),
        ],
    )
    def test_selects_by_extension(self, file_name: str, expected: type) -> None:
        assert isinstance(ExtractorFactory.for_filename(file_name, _make_settings()), expected)

    @pytest.mark.parametrize("file_name", ["old.ppt", "old.DOC", "old.xls"])
    def test_rejects_legacy_formats(self, file_name: str) -> None:
        with pytest.raises(LegacyFormatError, match="Legacy .* Convert the file to .*X"):
            ExtractorFactory.for_filename(file_name, _make_settings())

    def test_legacy_message_names_target_format(self) -> None:
        with pytest.raises(LegacyFormatError) as exc_info:
            ExtractorFactory.validate("slides.ppt")
        assert str(exc_info.value) == (
            "Legacy PPT files cannot be processed directly. "
            "Convert the file to PPTX and try again."
        )

    @pytest.mark.parametrize("file_name", ["archive.zip", "noextension", "page.html"])
    def test_rejects_unknown_formats(self, file_name: str) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ExtractorFactory.for_filename(file_name, _make_settings())
        assert not isinstance(exc_info.value, LegacyFormatError)
        assert exc_info.value.file_name == file_name
