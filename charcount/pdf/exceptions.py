from charcount.processor.exceptions import DocumentParseError


class PdfExtractionError(DocumentParseError):
    """Raised when a PDF cannot be opened or its pages cannot be read."""
