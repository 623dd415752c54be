import io
from typing import Any

import pdfplumber

from charcount.extractors.base import ExtractedUnit
from charcount.imaging import codec
from charcount.imaging.models import RawImage
from charcount.logging.logger import Log
from charcount.pdf.base import BasePdfExtractor, optimal_render_scale
from charcount.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts page text with pdfplumber and renders each image region."""

    def __init__(self, min_image_px: int = 10, resolution: int = 200) -> None:
        super().__init__(min_image_px)
        self._resolution = resolution

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                units = [
                    self._page_unit(page, number)
                    for number, page in enumerate(pdf.pages, start=1)
                ]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        Log.info(f"Extracted {len(units)} PDF pages")
        return units

    def _page_unit(self, page: Any, number: int) -> ExtractedUnit:
        images: list[RawImage] = []
        for index, meta in enumerate(page.images, start=1):
            width, height = meta.get("srcsize") or (
                meta["x1"] - meta["x0"],
                meta["bottom"] - meta["top"],
            )
            if self._is_too_small(width, height):
                continue
            region = self._region(page, meta)
            if region is None:
                continue
            rendered = page.crop(region).to_image(resolution=self._resolution).original
            images.append(
                RawImage(name=f"page{number}-image{index}.png", data=codec.encode_png(rendered))
            )
        if page.images and not images:
            scale = optimal_render_scale(page.width, page.height)
            rendered = page.to_image(resolution=72 * scale).original
            images.append(RawImage(name=f"page{number}-render.png", data=codec.encode_png(rendered)))
        return ExtractedUnit(
            label=f"Page {number}",
            native_text=page.extract_text() or "",
            images=images,
        )

    @staticmethod
    def _region(page: Any, meta: dict[str, Any]) -> tuple[float, float, float, float] | None:
        """Clip an image's bounding box to the page, or None if nothing is left."""
        x0, top, x1, bottom = page.bbox
        box = (
            max(meta["x0"], x0),
            max(meta["top"], top),
            min(meta["x1"], x1),
            min(meta["bottom"], bottom),
        )
        if box[2] <= box[0] or box[3] <= box[1]:
            Log.debug(f"Page image outside page bounds: {meta.get('name')}")
            return None
        return box
