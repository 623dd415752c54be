import io

import pytest
from PIL import Image

from charcount.imaging.hasher import PerceptualHasher
from charcount.imaging.models import RawImage


def _quadrants(size: int) -> bytes:
    image = Image.new("RGB", (size, size), "white")
    half = size // 2
    image.paste((255, 0, 0), (0, 0, half, half))
    image.paste((0, 0, 255), (half, 0, size, half))
    image.paste((0, 128, 0), (0, half, half, size))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


class TestPerceptualHasher:
    def test_fingerprint_has_fixed_width(self, make_png) -> None:  # type: ignore[no-untyped-def]
        key = PerceptualHasher().fingerprint(RawImage("a.png", make_png((50, 20), "red")))
        assert len(key) == 512
        int(key, 16)

    def test_solid_colour_is_scale_invariant(self, make_png) -> None:  # type: ignore[no-untyped-def]
        hasher = PerceptualHasher()
        small = hasher.fingerprint(RawImage("s.png", make_png((64, 64), (200, 30, 30))))
        large = hasher.fingerprint(RawImage("l.png", make_png((640, 640), (200, 30, 30))))
        assert small == large

    def test_simple_pattern_is_scale_invariant(self) -> None:
        hasher = PerceptualHasher()
        assert hasher.fingerprint(RawImage("a", _quadrants(64))) == hasher.fingerprint(
            RawImage("b", _quadrants(128))
        )

    def test_different_content_differs(self, make_png) -> None:  # type: ignore[no-untyped-def]
        hasher = PerceptualHasher()
        assert hasher.fingerprint(RawImage("a", make_png((32, 32), "white"))) != (
            hasher.fingerprint(RawImage("b", _quadrants(64)))
        )

    def test_transparency_is_flattened_onto_white(self, make_png) -> None:  # type: ignore[no-untyped-def]
        hasher = PerceptualHasher()
        clear = make_png((40, 40), (0, 0, 0, 0), mode="RGBA")
        white = make_png((40, 40), "white")
        assert hasher.fingerprint(RawImage("a", clear)) == hasher.fingerprint(RawImage("b", white))

    def test_undecodable_bytes_use_length_key(self) -> None:
        assert PerceptualHasher().fingerprint(RawImage("x.png", b"junk")) == "err_4"

    def test_rejects_non_positive_size(self) -> None:
        with pytest.raises(ValueError):
            PerceptualHasher(size=0)

    def test_oversized_image_uses_length_key(self, oversized_png_bytes: bytes) -> None:
        key = PerceptualHasher().fingerprint(RawImage("huge.png", oversized_png_bytes))
        assert key == f"err_{len(oversized_png_bytes)}"
