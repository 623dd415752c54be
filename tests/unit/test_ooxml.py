import zipfile
from io import BytesIO
from xml.etree import ElementTree as ET

from charcount.counting.counter import count_chars
from charcount.extractors.ooxml import paragraph_text, sorted_parts

NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


class TestParagraphText:
    def test_nested_paragraphs_are_counted_once(self) -> None:
        root = ET.fromstring(
            f'<w:body xmlns:w="{NS}"><w:p><w:r><w:t>outer</w:t></w:r>'
            "<w:r><w:pict><w:txbxContent><w:p><w:r><w:t>inner</w:t></w:r></w:p>"
            "</w:txbxContent></w:pict></w:r></w:p></w:body>"
        )
        text = paragraph_text(root, NS)
        assert sorted(text.splitlines()) == ["inner", "outer"]
        assert count_chars(text) == 10

    def test_empty_paragraphs_are_skipped(self) -> None:
        root = ET.fromstring(f'<w:body xmlns:w="{NS}"><w:p/><w:p><w:r><w:t>x</w:t></w:r></w:p></w:body>')
        assert paragraph_text(root, NS) == "x"


class TestSortedParts:
    def test_sorts_numerically(self, build_zip) -> None:  # type: ignore[no-untyped-def]
        data = build_zip({f"ppt/slides/slide{n}.xml": "<x/>" for n in (10, 2, 1)})
        with zipfile.ZipFile(BytesIO(data)) as package:
            parts = sorted_parts(package, r"slide(\d+)\.xml$")
        assert parts == ["ppt/slides/slide1.xml", "ppt/slides/slide2.xml", "ppt/slides/slide10.xml"]
