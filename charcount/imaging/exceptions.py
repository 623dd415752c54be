class ImageDecodeError(Exception):
    """Raised when encoded image bytes cannot be decoded into pixels."""
