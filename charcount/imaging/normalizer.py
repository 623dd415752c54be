from PIL import Image

from charcount.imaging import codec
from charcount.imaging.exceptions import ImageDecodeError
from charcount.imaging.models import RawImage
from charcount.logging.logger import Log


class ImageNormalizer:
    """Rescales images so that their long edge equals a fixed pixel count.

    Recognition quality depends on absolute pixel density, so a PDF page
    render and a small embedded photo are both brought to the same long
    edge before preprocessing. Images are scaled up as well as down.
    """

    DEFAULT_TARGET_LONG_EDGE = 3000

    def __init__(self, target_long_edge: int = DEFAULT_TARGET_LONG_EDGE) -> None:
        if target_long_edge <= 0:
            raise ValueError("target_long_edge must be positive")
        self._target = target_long_edge

    @property
    def target_long_edge(self) -> int:
        return self._target

    def target_size(self, width: int, height: int) -> tuple[int, int]:
        """Return the resampled ``(width, height)`` for a source size."""
        scale = self._target / max(width, height)
        return max(1, round(width * scale)), max(1, round(height * scale))

    def normalize(self, image: RawImage) -> RawImage:
        """Return *image* resampled to the target long edge as PNG.

        Undecodable input is returned unchanged.
        """
        try:
            decoded = codec.decode_on_white(image.data)
        except ImageDecodeError as exc:
            Log.warning(f"Normalization skipped for {image.name}: {exc}")
            return image

        size = self.target_size(*decoded.size)
        if size != decoded.size:
            decoded = decoded.resize(size, Image.Resampling.LANCZOS)
        return image.with_data(codec.encode_png(decoded))
