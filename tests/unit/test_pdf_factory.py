from unittest.mock import patch

import pytest

from charcount.pdf.factory import PdfExtractorFactory
from charcount.pdf.pdfplumber_adapter import PdfPlumberAdapter
from charcount.pdf.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(pdf_engine: str):  # type: ignore[no-untyped-def]
    """Create a minimal Settings-like object with the PDF options."""
    with patch("charcount.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.pdf_engine = pdf_engine
        settings.min_pdf_image_px = 10
        settings.lazy_object_max_attempts = 40
        settings.lazy_object_poll_interval_seconds = 0.05
        return settings


class TestPdfExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("PdfPlumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_adapters_report_pdf_kind(self) -> None:
        adapter = PdfExtractorFactory.create(_make_settings("pymupdf"))
        assert (adapter.kind, adapter.section_title) == ("pdf", "Per-page details")

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfExtractorFactory.create(_make_settings("unknown"))
