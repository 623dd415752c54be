"""Resolution-invariant content fingerprints used to skip repeated OCR.

The fingerprint is lossy: two images that look the same once squeezed to a
32x32 thumbnail share a key. Collisions only cost a skipped recognition, so
no cryptographic strength is needed.
"""

from PIL import Image

from charcount.imaging import codec
from charcount.imaging.exceptions import ImageDecodeError
from charcount.imaging.models import RawImage

ERROR_PREFIX = "err_"


class PerceptualHasher:
    """Computes a fixed-width hex key from a thumbnail of the image."""

    # Red channel of every 4th RGBA pixel.
    SAMPLE_STRIDE = 16

    def __init__(self, size: int = 32) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self._size = size

    def fingerprint(self, image: RawImage) -> str:
        """Return the content key of *image*.

        Undecodable bytes fall back to ``err_<byte length>`` so that the
        batch always has a usable cache key.
        """
        try:
            decoded = codec.decode_on_white(image.data)
        except ImageDecodeError:
            return f"{ERROR_PREFIX}{len(image.data)}"

        thumb = decoded.resize((self._size, self._size), Image.Resampling.BOX)
        samples = thumb.convert("RGBA").tobytes()[:: self.SAMPLE_STRIDE]
        return samples.hex()
