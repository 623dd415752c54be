from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from charcount.config.preferences import AnalysisConfig
from charcount.extractors.base import BaseUnitExtractor, ExtractedUnit
from charcount.ocr.cache import RecognitionCache
from charcount.ocr.progress import ProgressScope, null_scope
from charcount.processor.models import DocumentAnalysis, UnitResult


@dataclass(slots=True)
class PipelineContext:
    file_name: str
    config: AnalysisConfig
    path: Path | None = None
    raw_bytes: bytes = b""
    progress: ProgressScope = field(default_factory=null_scope)
    extractor: BaseUnitExtractor | None = None
    units: list[ExtractedUnit] = field(default_factory=list)
    cache: RecognitionCache = field(default_factory=RecognitionCache)
    results: list[UnitResult] = field(default_factory=list)
    analysis: DocumentAnalysis | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
