from charcount.config.preferences import QualityTier
from charcount.config.settings import Settings
from charcount.ocr.base import BaseRecognizer
from charcount.ocr.static_adapter import StaticRecognizer


class RecognizerFactory:
    """Creates the configured recognition adapter for a quality tier."""

    ENGINES: tuple[str, ...] = ("tesseract", "static")

    @classmethod
    def create(
        cls,
        settings: Settings,
        quality_tier: QualityTier = QualityTier.BALANCED,
    ) -> BaseRecognizer:
        engine = settings.ocr_engine.lower()
        if engine == "static":
            return StaticRecognizer(text=settings.static_ocr_text)
        if engine == "tesseract":
            from charcount.ocr.tesseract_adapter import TesseractRecognizer

            return TesseractRecognizer(
                tesseract_cmd=settings.tesseract_cmd,
                tessdata_dir=cls.tessdata_dir(settings, quality_tier),
                psm=settings.tesseract_psm,
            )
        raise ValueError(
            f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )

    @classmethod
    def tessdata_dir(cls, settings: Settings, quality_tier: QualityTier) -> str:
        """Return the language-data directory of *quality_tier* ("" = engine default)."""
        key_map = {
            QualityTier.FAST: settings.tessdata_fast_dir,
            QualityTier.BALANCED: settings.tessdata_balanced_dir,
            QualityTier.ACCURATE: settings.tessdata_best_dir,
        }
        return key_map.get(quality_tier, "") or ""
