from charcount.config.preferences import QualityTier
from charcount.config.settings import Settings
from charcount.counting.counter import count_chars, count_whitespace
from charcount.extractors.factory import ExtractorFactory
from charcount.imaging.hasher import PerceptualHasher
from charcount.imaging.normalizer import ImageNormalizer
from charcount.logging.logger import Log
from charcount.ocr.base import BaseRecognizer
from charcount.ocr.factory import RecognizerFactory
from charcount.ocr.orchestrator import BatchRecognition, OcrOrchestrator
from charcount.processor.file_loader import FileLoader
from charcount.processor.models import DocumentAnalysis, UnitResult
from charcount.processor.pipeline import PipelineContext, PipelineStep

LOADED_FRACTION = 0.05
EXTRACTED_FRACTION = 0.10
UNITS_END_FRACTION = 0.95


class ValidateFormatStep(PipelineStep):
    """Rejects unsupported and legacy formats before anything is read."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extractor = ExtractorFactory.for_filename(context.file_name, self._settings)
        Log.info(f"{context.file_name}: using {type(context.extractor).__name__}")
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_loader: FileLoader) -> None:
        self._file_loader = file_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.path is not None:
            context.raw_bytes = self._file_loader.load(context.path)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for {context.file_name}")
        context.progress.report(LOADED_FRACTION, "File loaded")
        return context


class ExtractUnitsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extractor is None:
            raise ValueError("PipelineContext.extractor must be set before extraction")
        context.units = context.extractor.extract_units(context.raw_bytes)
        images = sum(len(unit.images) for unit in context.units)
        Log.info(
            f"Extracted {len(context.units)} units with {images} images "
            f"from {context.file_name}"
        )
        context.progress.report(EXTRACTED_FRACTION, "Structure extracted")
        return context


class RecognizeUnitsStep(PipelineStep):
    """Counts native text and recognizes the images of every unit in order.

    All units share the run's recognition cache, so an image repeated on
    several slides, pages or sheets is recognized once per run.
    """

    def __init__(self, settings: Settings, recognizer: BaseRecognizer | None = None) -> None:
        self._settings = settings
        self._recognizer = recognizer
        self._recognizers: dict[QualityTier, BaseRecognizer] = {}

    def run(self, context: PipelineContext) -> PipelineContext:
        orchestrator = self._orchestrator(context)
        total = len(context.units)
        share = (UNITS_END_FRACTION - EXTRACTED_FRACTION) / total if total else 0.0

        for index, unit in enumerate(context.units):
            scope = context.progress.child(EXTRACTED_FRACTION + index * share, share)
            if unit.images:
                batch = orchestrator.recognize_batch(unit.images, context.cache, scope)
            else:
                batch = BatchRecognition(text="", char_count=0)
            scope.report(1.0, f"{unit.label} analyzed ({index + 1}/{total})")

            if unit.optional and batch.char_count == 0:
                Log.info(f"{context.file_name}: no text found in '{unit.label}', dropped")
                continue
            context.results.append(
                UnitResult(
                    label=unit.label,
                    native_char_count=count_chars(unit.native_text),
                    recognized_text=batch.text,
                    recognized_char_count=batch.char_count,
                    image_count=len(unit.images),
                    whitespace_count=count_whitespace(unit.native_text)
                    + count_whitespace(batch.text),
                )
            )

        Log.info(
            f"Recognition cache for {context.file_name}: {len(context.cache)} entries, "
            f"{context.cache.hits} hits, {context.cache.misses} misses"
        )
        return context

    def _orchestrator(self, context: PipelineContext) -> OcrOrchestrator:
        config = context.config
        return OcrOrchestrator(
            recognizer=self._recognizer_for(config.quality_tier),
            languages=config.languages(self._settings.primary_language),
            preprocessing_options=config.preprocessing_options,
            normalizer=ImageNormalizer(self._settings.target_long_edge_px),
            hasher=PerceptualHasher(self._settings.fingerprint_size_px),
        )

    def _recognizer_for(self, tier: QualityTier) -> BaseRecognizer:
        if self._recognizer is not None:
            return self._recognizer
        if tier not in self._recognizers:
            self._recognizers[tier] = RecognizerFactory.create(self._settings, tier)
        return self._recognizers[tier]


class AggregateStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extractor is None:
            raise ValueError("PipelineContext.extractor must be set before aggregation")
        analysis = DocumentAnalysis(
            file_name=context.file_name,
            kind=context.extractor.kind,
            section_title=context.extractor.section_title,
            units=tuple(context.results),
            include_whitespace=context.config.include_whitespace_in_totals,
        )
        context.analysis = analysis
        Log.info(
            f"{context.file_name}: {analysis.total_chars} chars "
            f"({analysis.total_native_chars} text, {analysis.total_recognized_chars} OCR)"
        )
        context.progress.report(1.0, "Analysis complete")
        return context


class LogFailureStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(f"Analysis of {context.file_name} failed: {context.error_message}")
        return context
