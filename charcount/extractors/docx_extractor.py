from charcount.extractors.base import BaseUnitExtractor, ExtractedUnit
from charcount.extractors.ooxml import media_images, open_package, paragraph_text, read_xml
from charcount.logging.logger import Log

WORDML_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


class DocxExtractor(BaseUnitExtractor):
    """Body text of ``word/document.xml`` plus every image in ``word/media``."""

    kind = "docx"
    section_title = "Document details"

    BODY_PART = "word/document.xml"
    MEDIA_FOLDER = "word/media/"

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        units: list[ExtractedUnit] = []
        with open_package(data) as package:
            root = read_xml(package, self.BODY_PART)
            if root is not None:
                units.append(ExtractedUnit(label="Body", native_text=paragraph_text(root, WORDML_NS)))
            images = media_images(package, self.MEDIA_FOLDER)
        if images:
            units.append(ExtractedUnit(label="Text in images", images=images, optional=True))
        Log.info(f"Extracted DOCX body and {len(images)} images")
        return units
