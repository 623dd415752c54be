from charcount.extractors.base import BaseUnitExtractor

RENDER_TARGET_PX = 2000
MIN_RENDER_SCALE = 2.0
MAX_RENDER_SCALE = 4.0


def optimal_render_scale(width: float, height: float) -> float:
    """Zoom factor for rendering a page of ``width`` x ``height`` points.

    Aims at a long edge of about 2000 px, clamped to 2x..4x so small pages
    are still rendered sharply and huge ones stay bounded.
    """
    longest = max(width, height)
    if longest <= 0:
        return MIN_RENDER_SCALE
    return max(MIN_RENDER_SCALE, min(MAX_RENDER_SCALE, RENDER_TARGET_PX / longest))


class BasePdfExtractor(BaseUnitExtractor):
    """Contract for all PDF adapters: one unit per page.

    Each unit carries the page's native text and the images painted on it.
    Images of ``min_image_px`` or less in either dimension are ignored. When
    a page references images but none of them can be extracted, a render of
    the whole page on a white background stands in for them.

    Raises:
        PdfExtractionError: if the PDF cannot be opened or read.
    """

    kind = "pdf"
    section_title = "Per-page details"

    def __init__(self, min_image_px: int = 10) -> None:
        self._min_image_px = min_image_px

    def _is_too_small(self, width: float, height: float) -> bool:
        return width <= self._min_image_px or height <= self._min_image_px
