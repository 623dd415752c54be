class ProcessorError(Exception):
    """Base exception for all errors surfaced to the caller of an analysis."""


class UnsupportedFormatError(ProcessorError):
    """Raised when a file's format cannot be analyzed."""

    MESSAGE = (
        "Unsupported file format. Choose a PPTX, DOCX, XLSX, PDF, TXT "
        "or image file."
    )

    def __init__(self, file_name: str, message: str | None = None) -> None:
        super().__init__(message or self.MESSAGE)
        self.file_name = file_name


class LegacyFormatError(UnsupportedFormatError):
    """Raised for pre-XML office formats that must be converted first."""

    def __init__(self, file_name: str, extension: str) -> None:
        ext = extension.upper()
        super().__init__(
            file_name,
            f"Legacy {ext} files cannot be processed directly. "
            f"Convert the file to {ext}X and try again.",
        )
        self.extension = extension


class DocumentParseError(ProcessorError):
    """Raised when a container or its structure cannot be parsed."""


class FileReadError(ProcessorError):
    """Raised when a file cannot be read from disk."""
