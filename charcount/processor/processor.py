from pathlib import Path

from charcount.config.preferences import AnalysisConfig
from charcount.config.settings import Settings
from charcount.logging.logger import Log
from charcount.ocr.base import BaseRecognizer
from charcount.ocr.progress import ProgressScope, null_scope
from charcount.processor.exceptions import ProcessorError
from charcount.processor.file_loader import FileLoader
from charcount.processor.models import DocumentAnalysis
from charcount.processor.pipeline import PipelineContext, PipelineStep
from charcount.processor.steps import (
    AggregateStep,
    ExtractUnitsStep,
    LoadDocumentStep,
    LogFailureStep,
    RecognizeUnitsStep,
    ValidateFormatStep,
)


class Processor:
    """Runs the analysis pipeline for one document.

    Pipeline: validate -> load -> extract units -> recognize -> aggregate.
    On failure the failure step runs and the error propagates; no partial
    analysis is returned.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(
        self,
        path: Path,
        config: AnalysisConfig,
        progress: ProgressScope | None = None,
    ) -> DocumentAnalysis:
        context = PipelineContext(
            file_name=path.name,
            config=config,
            path=path,
            progress=progress if progress is not None else null_scope(),
        )
        return self._run(context)

    def process_bytes(
        self,
        file_name: str,
        data: bytes,
        config: AnalysisConfig,
        progress: ProgressScope | None = None,
    ) -> DocumentAnalysis:
        context = PipelineContext(
            file_name=file_name,
            config=config,
            raw_bytes=data,
            progress=progress if progress is not None else null_scope(),
        )
        return self._run(context)

    def _run(self, context: PipelineContext) -> DocumentAnalysis:
        Log.info(f"Analyzing {context.file_name}")
        context.progress.report(0.0, f"Analyzing {context.file_name}")
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
            raise
        if context.analysis is None:
            raise ProcessorError(f"No analysis produced for {context.file_name}")
        return context.analysis


def build_processor(
    settings: Settings,
    recognizer: BaseRecognizer | None = None,
) -> Processor:
    """Build a Processor with all required steps.

    ``recognizer`` overrides the engine chosen by ``settings.ocr_engine``.
    """
    steps: list[PipelineStep] = [
        ValidateFormatStep(settings),
        LoadDocumentStep(FileLoader()),
        ExtractUnitsStep(),
        RecognizeUnitsStep(settings, recognizer=recognizer),
        AggregateStep(),
    ]
    return Processor(steps=steps, failed_step=LogFailureStep())
