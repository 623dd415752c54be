"""User-facing analysis options and their persistence between sessions."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from charcount.imaging.models import PreprocessingOption
from charcount.logging.logger import Log

ENGLISH = "eng"


class QualityTier(str, Enum):
    FAST = "fast"
    BALANCED = "balanced"
    ACCURATE = "accurate"


DEFAULT_PREPROCESSING: frozenset[PreprocessingOption] = frozenset(
    {PreprocessingOption.GRAYSCALE, PreprocessingOption.BINARIZE}
)


class AnalysisConfig(BaseModel):
    """Immutable snapshot of the options one analysis run is executed with."""

    model_config = ConfigDict(frozen=True)

    recognition_languages: tuple[str, ...] = ()
    quality_tier: QualityTier = QualityTier.BALANCED
    preprocessing_options: frozenset[PreprocessingOption] = DEFAULT_PREPROCESSING
    include_whitespace_in_totals: bool = False

    @field_validator("recognition_languages", mode="before")
    @classmethod
    def _dedupe_languages(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            seen: dict[str, None] = {}
            for code in value:
                code = str(code).strip()
                if code:
                    seen.setdefault(code, None)
            return tuple(seen)
        return value

    def languages(self, primary_language: str) -> tuple[str, ...]:
        """Return the configured languages, or ``(primary, eng)`` when empty."""
        if self.recognition_languages:
            return self.recognition_languages
        if primary_language and primary_language != ENGLISH:
            return (primary_language, ENGLISH)
        return (ENGLISH,)


class PreferencesStore:
    """Persists an :class:`AnalysisConfig` snapshot as JSON on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AnalysisConfig:
        """Load the stored snapshot, falling back to defaults.

        A missing file is silent; an unreadable or invalid one is logged.
        """
        if not self._path.exists():
            return AnalysisConfig()
        try:
            return AnalysisConfig.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            Log.warning(f"Ignoring unreadable preferences at {self._path}: {exc}")
            return AnalysisConfig()

    def save(self, config: AnalysisConfig) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = config.model_dump(mode="json")
        payload["preprocessing_options"] = sorted(payload["preprocessing_options"])
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        Log.info(f"Saved preferences to {self._path}")
