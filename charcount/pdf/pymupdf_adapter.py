from typing import Any

import pymupdf

from charcount.extractors.base import ExtractedUnit
from charcount.extractors.lazy import wait_for_object
from charcount.imaging.models import RawImage, mime_type_for
from charcount.logging.logger import Log
from charcount.pdf.base import BasePdfExtractor, optimal_render_scale
from charcount.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts page text and embedded image objects using PyMuPDF."""

    def __init__(
        self,
        min_image_px: int = 10,
        max_attempts: int = 40,
        poll_interval_seconds: float = 0.05,
    ) -> None:
        super().__init__(min_image_px)
        self._max_attempts = max_attempts
        self._poll_interval = poll_interval_seconds

    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                units = [
                    self._page_unit(doc, page, number)
                    for number, page in enumerate(doc, start=1)
                ]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        Log.info(f"Extracted {len(units)} PDF pages")
        return units

    def _page_unit(self, doc: Any, page: Any, number: int) -> ExtractedUnit:
        xrefs = list(dict.fromkeys(info[0] for info in page.get_images(full=True)))
        images: list[RawImage] = []
        for xref in xrefs:
            obj = wait_for_object(
                lambda: self._image_object(doc, xref),
                self._max_attempts,
                self._poll_interval,
            )
            if obj is None:
                Log.warning(f"Page {number}: image object {xref} never materialized, skipped")
                continue
            if self._is_too_small(obj.get("width", 0), obj.get("height", 0)):
                continue
            ext = str(obj.get("ext") or "png")
            images.append(
                RawImage(
                    name=f"page{number}-xref{xref}.{ext}",
                    data=obj["image"],
                    mime_type=mime_type_for(ext),
                )
            )
        if xrefs and not images:
            images.append(self._render_page(page, number))
        return ExtractedUnit(label=f"Page {number}", native_text=page.get_text(), images=images)

    @staticmethod
    def _image_object(doc: Any, xref: int) -> dict[str, Any] | None:
        try:
            info = doc.extract_image(xref)
        except (RuntimeError, ValueError) as exc:
            Log.debug(f"extract_image({xref}) failed: {exc}")
            return None
        if not info or not info.get("image"):
            return None
        return dict(info)

    @staticmethod
    def _render_page(page: Any, number: int) -> RawImage:
        scale = optimal_render_scale(page.rect.width, page.rect.height)
        pixmap = page.get_pixmap(matrix=pymupdf.Matrix(scale, scale), alpha=False)
        return RawImage(name=f"page{number}-render.png", data=pixmap.tobytes("png"))
