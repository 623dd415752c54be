"""Decoding and encoding helpers shared by the imaging stages."""

import io

from PIL import Image, ImageOps, UnidentifiedImageError

from charcount.imaging.exceptions import ImageDecodeError

WHITE = (255, 255, 255)


def decode(data: bytes) -> Image.Image:
    """Decode *data* into a fully loaded Pillow image (first frame only).

    Raises:
        ImageDecodeError: if Pillow cannot identify or load the bytes.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.seek(0)
        image.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
        EOFError,
    ) as exc:
        raise ImageDecodeError(f"cannot decode image: {exc}") from exc
    return ImageOps.exif_transpose(image) or image


def flatten_to_white(image: Image.Image) -> Image.Image:
    """Composite any transparency onto a white canvas and return RGB."""
    if image.mode == "P":
        image = image.convert("RGBA")
    if image.mode in ("RGBA", "LA", "PA"):
        rgba = image.convert("RGBA")
        canvas = Image.new("RGBA", rgba.size, WHITE + (255,))
        canvas.alpha_composite(rgba)
        return canvas.convert("RGB")
    if image.mode == "RGB":
        return image
    return image.convert("RGB")


def decode_on_white(data: bytes) -> Image.Image:
    """Decode *data* and return it as an opaque RGB image on white."""
    return flatten_to_white(decode(data))


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
