from pathlib import PurePath

from charcount.extractors.base import BaseUnitExtractor, ExtractedUnit
from charcount.imaging.models import RawImage, mime_type_for


class ImageExtractor(BaseUnitExtractor):
    """A raster image file is a single unit whose only image is itself."""

    kind = "image"
    section_title = "Image analysis"

    def __init__(self, file_name: str = "image.png") -> None:
        self._file_name = file_name

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        image = RawImage(
            name=PurePath(self._file_name).name,
            data=data,
            mime_type=mime_type_for(PurePath(self._file_name).suffix),
        )
        return [ExtractedUnit(label="Image", images=[image])]
