import io

import pytest
from PIL import Image

from charcount.imaging.models import RawImage
from charcount.imaging.normalizer import ImageNormalizer


def _size(data: bytes) -> tuple[int, int]:
    return Image.open(io.BytesIO(data)).size


class TestTargetSize:
    def test_upscales_small_images(self) -> None:
        assert ImageNormalizer().target_size(100, 50) == (3000, 1500)

    def test_downscales_large_images(self) -> None:
        assert ImageNormalizer().target_size(6000, 4000) == (3000, 2000)

    def test_portrait_uses_height_as_long_edge(self) -> None:
        assert ImageNormalizer(target_long_edge=300).target_size(30, 90) == (100, 300)

    def test_never_collapses_to_zero(self) -> None:
        assert ImageNormalizer(target_long_edge=10).target_size(1000, 1) == (10, 1)


class TestNormalize:
    def test_resamples_to_target_long_edge(self, make_png) -> None:  # type: ignore[no-untyped-def]
        image = RawImage("a.jpg", make_png((40, 20), "blue"), "image/jpeg")
        result = ImageNormalizer(target_long_edge=200).normalize(image)
        assert _size(result.data) == (200, 100)
        assert result.mime_type == "image/png"
        assert result.name == "a.jpg"

    def test_undecodable_image_is_returned_unchanged(self) -> None:
        image = RawImage("bad.png", b"not an image")
        assert ImageNormalizer().normalize(image) is image

    def test_rejects_non_positive_target(self) -> None:
        with pytest.raises(ValueError):
            ImageNormalizer(target_long_edge=0)
