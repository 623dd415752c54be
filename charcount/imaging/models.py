from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class RawImage:
    """Encoded image produced by an extractor.

    ``name`` is unique within its document (e.g. the media part name).
    """

    name: str
    data: bytes
    mime_type: str = "image/png"

    def with_data(self, data: bytes, mime_type: str = "image/png") -> "RawImage":
        """Return a copy carrying new encoded bytes under the same name."""
        return RawImage(name=self.name, data=data, mime_type=mime_type)


class PreprocessingOption(str, Enum):
    GRAYSCALE = "grayscale"
    DENOISE = "denoise"
    BINARIZE = "binarize"
    MORPHOLOGY = "morphology"
    DESKEW = "deskew"


# Later stages rely on invariants of earlier ones (binarize expects one channel).
PIPELINE_ORDER: tuple[PreprocessingOption, ...] = (
    PreprocessingOption.GRAYSCALE,
    PreprocessingOption.DENOISE,
    PreprocessingOption.BINARIZE,
    PreprocessingOption.MORPHOLOGY,
    PreprocessingOption.DESKEW,
)

IMAGE_MIME_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "tif": "image/tiff",
    "webp": "image/webp",
}

IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {"png", "jpg", "jpeg", "gif", "bmp", "tiff", "webp"}
)


def mime_type_for(extension: str) -> str:
    """Map an image file extension (with or without dot) to a MIME type."""
    return IMAGE_MIME_TYPES.get(extension.lower().lstrip("."), "image/png")


def ordered_options(options: Iterable[PreprocessingOption]) -> list[PreprocessingOption]:
    """Return *options* sorted into pipeline order."""
    selected = set(options)
    return [option for option in PIPELINE_ORDER if option in selected]
