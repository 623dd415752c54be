from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_file: Path | None = None

    pdf_engine: str = "pymupdf"
    ocr_engine: str = "tesseract"
    static_ocr_text: str = ""

    tesseract_cmd: str = ""
    tesseract_psm: int = Field(default=3, ge=0, le=13)
    tessdata_fast_dir: str = ""
    tessdata_balanced_dir: str = ""
    tessdata_best_dir: str = ""
    primary_language: str = "kor"

    target_long_edge_px: int = Field(default=3000, gt=0)
    fingerprint_size_px: int = Field(default=32, gt=0)
    min_pdf_image_px: int = Field(default=10, ge=0)
    lazy_object_max_attempts: int = Field(default=40, ge=1)
    lazy_object_poll_interval_seconds: float = Field(default=0.05, ge=0.0)

    preferences_path: Path = Path.home() / ".charcount" / "preferences.json"
