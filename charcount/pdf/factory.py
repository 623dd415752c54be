from charcount.config.settings import Settings
from charcount.pdf.base import BasePdfExtractor
from charcount.pdf.pdfplumber_adapter import PdfPlumberAdapter
from charcount.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the correct PDF extractor based on settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        if adapter_cls is PyMuPdfAdapter:
            return PyMuPdfAdapter(
                min_image_px=settings.min_pdf_image_px,
                max_attempts=settings.lazy_object_max_attempts,
                poll_interval_seconds=settings.lazy_object_poll_interval_seconds,
            )
        return adapter_cls(min_image_px=settings.min_pdf_image_px)
