class RecognitionError(Exception):
    """Raised by recognizer adapters when an image cannot be recognized."""


class RecognizerUnavailableError(RecognitionError):
    """Raised when the configured recognition engine cannot be used at all."""
