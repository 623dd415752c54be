from io import BytesIO

from pptx import Presentation
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.slide import Slide

from charcount.extractors.base import BaseUnitExtractor, ExtractedUnit
from charcount.extractors.ooxml import paragraph_text
from charcount.imaging.models import IMAGE_EXTENSIONS, RawImage, mime_type_for
from charcount.logging.logger import Log
from charcount.processor.exceptions import DocumentParseError

DRAWINGML_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"


class PptxExtractor(BaseUnitExtractor):
    """One unit per slide: DrawingML text runs plus the slide's images."""

    kind = "pptx"
    section_title = "Per-slide details"

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        try:
            presentation = Presentation(BytesIO(data))
            units = [
                ExtractedUnit(
                    label=f"Slide {number}",
                    native_text=paragraph_text(slide.element, DRAWINGML_NS),
                    images=self._slide_images(slide),
                )
                for number, slide in enumerate(presentation.slides, start=1)
            ]
        except DocumentParseError:
            raise
        except Exception as exc:
            raise DocumentParseError(f"PPTX parsing failed: {exc}") from exc
        Log.info(f"Extracted {len(units)} slides")
        return units

    @staticmethod
    def _slide_images(slide: Slide) -> list[RawImage]:
        """Images related to *slide*, each media part at most once."""
        images: list[RawImage] = []
        added: set[str] = set()
        for rel in slide.part.rels.values():
            if rel.is_external or rel.reltype != RT.IMAGE:
                continue
            part = rel.target_part
            name = part.partname.filename
            ext = part.partname.ext.lower()
            if name in added or ext not in IMAGE_EXTENSIONS:
                continue
            added.add(name)
            images.append(RawImage(name=name, data=part.blob, mime_type=mime_type_for(ext)))
        return images
