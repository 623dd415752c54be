from charcount.ocr.base import BaseRecognizer
from charcount.ocr.cache import RecognitionCache
from charcount.ocr.factory import RecognizerFactory
from charcount.ocr.orchestrator import BatchRecognition, OcrOrchestrator
from charcount.ocr.progress import ProgressEvent, ProgressReporter, ProgressScope
from charcount.ocr.static_adapter import StaticRecognizer

__all__ = [
    "BaseRecognizer",
    "BatchRecognition",
    "OcrOrchestrator",
    "ProgressEvent",
    "ProgressReporter",
    "ProgressScope",
    "RecognitionCache",
    "RecognizerFactory",
    "StaticRecognizer",
]
