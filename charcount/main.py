import argparse
import json
import sys
from pathlib import Path

from charcount.config.preferences import AnalysisConfig, PreferencesStore, QualityTier
from charcount.config.settings import Settings
from charcount.imaging.models import PIPELINE_ORDER, PreprocessingOption
from charcount.logging.logger import Log
from charcount.ocr.progress import ProgressEvent, ProgressReporter
from charcount.processor.exceptions import (
    FileReadError,
    ProcessorError,
    UnsupportedFormatError,
)
from charcount.processor.processor import build_processor
from charcount.processor.report import ReportBuilder

EXIT_OK = 0
EXIT_PARSE_FAILURE = 1
EXIT_REJECTED = 2


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="charcount",
        description="Count the characters of a document, including text found in its images.",
    )
    p.add_argument("file", type=Path, help="PPTX, DOCX, XLSX, PDF, TXT or image file.")
    p.add_argument(
        "--lang",
        action="append",
        dest="languages",
        metavar="LANG",
        help="Recognition language code (repeatable, e.g. --lang kor --lang eng).",
    )
    p.add_argument(
        "--quality",
        choices=[tier.value for tier in QualityTier],
        help="Recognition quality tier.",
    )
    group = p.add_mutually_exclusive_group()
    group.add_argument(
        "--preprocess",
        action="append",
        choices=[option.value for option in PIPELINE_ORDER],
        metavar="OPT",
        help="Preprocessing stage to enable (repeatable): "
        + ", ".join(option.value for option in PIPELINE_ORDER),
    )
    group.add_argument(
        "--no-preprocess",
        action="store_true",
        help="Disable all preprocessing stages.",
    )
    p.add_argument(
        "--include-whitespace",
        action="store_true",
        default=None,
        help="Add whitespace characters to the reported total.",
    )
    p.add_argument("--show-text", action="store_true", help="Print recognized text per unit.")
    p.add_argument("--json", action="store_true", help="Print the report as JSON.")
    p.add_argument(
        "--save-preferences",
        action="store_true",
        help="Store the effective options as defaults for later runs.",
    )
    return p


def resolve_config(args: argparse.Namespace, stored: AnalysisConfig) -> AnalysisConfig:
    """Apply command-line overrides on top of the stored preferences."""
    overrides: dict[str, object] = {}
    if args.languages:
        overrides["recognition_languages"] = tuple(args.languages)
    if args.quality:
        overrides["quality_tier"] = QualityTier(args.quality)
    if args.no_preprocess:
        overrides["preprocessing_options"] = frozenset()
    elif args.preprocess:
        overrides["preprocessing_options"] = frozenset(
            PreprocessingOption(value) for value in args.preprocess
        )
    if args.include_whitespace is not None:
        overrides["include_whitespace_in_totals"] = args.include_whitespace
    if not overrides:
        return stored
    return AnalysisConfig.model_validate({**stored.model_dump(), **overrides})


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> preferences -> analysis -> report."""
    args = build_arg_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.log_file)

    store = PreferencesStore(settings.preferences_path)
    config = resolve_config(args, store.load())
    if args.save_preferences:
        store.save(config)

    reporter = ProgressReporter(_log_progress)
    processor = build_processor(settings)
    try:
        analysis = processor.process(args.file, config, reporter.scope())
    except (UnsupportedFormatError, FileReadError) as exc:
        print(f"charcount: {exc}", file=sys.stderr)
        return EXIT_REJECTED
    except ProcessorError as exc:
        print(f"charcount: {exc}", file=sys.stderr)
        return EXIT_PARSE_FAILURE

    builder = ReportBuilder()
    if args.json:
        print(json.dumps(builder.build(analysis), ensure_ascii=False, indent=2))
    else:
        print(builder.render_text(analysis, show_text=args.show_text))
    return EXIT_OK


def _log_progress(event: ProgressEvent) -> None:
    Log.progress(event.percent, event.message)


if __name__ == "__main__":
    sys.exit(main())
