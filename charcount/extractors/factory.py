from pathlib import PurePath

from charcount.config.settings import Settings
from charcount.extractors.base import BaseUnitExtractor
from charcount.extractors.docx_extractor import DocxExtractor
from charcount.extractors.image_extractor import ImageExtractor
from charcount.extractors.pptx_extractor import PptxExtractor
from charcount.extractors.text_extractor import TextExtractor
from charcount.extractors.xlsx_extractor import XlsxExtractor
from charcount.imaging.models import IMAGE_EXTENSIONS
from charcount.pdf.factory import PdfExtractorFactory
from charcount.processor.exceptions import LegacyFormatError, UnsupportedFormatError


def file_extension(file_name: str) -> str:
    """Lower-case extension of *file_name* without the dot ("" if none)."""
    return PurePath(file_name).suffix.lower().lstrip(".")


class ExtractorFactory:
    """Chooses the unit extractor for a file by its extension."""

    LEGACY_EXTENSIONS: frozenset[str] = frozenset({"ppt", "doc", "xls"})
    OFFICE_EXTRACTORS: dict[str, type[BaseUnitExtractor]] = {
        "pptx": PptxExtractor,
        "docx": DocxExtractor,
        "xlsx": XlsxExtractor,
        "txt": TextExtractor,
    }

    @classmethod
    def supported_extensions(cls) -> list[str]:
        return sorted({*cls.OFFICE_EXTRACTORS, "pdf", *IMAGE_EXTENSIONS})

    @classmethod
    def validate(cls, file_name: str) -> str:
        """Return the extension of a supported file.

        Raises:
            LegacyFormatError: for ``.ppt``, ``.doc`` and ``.xls`` files.
            UnsupportedFormatError: for any other unknown extension.
        """
        extension = file_extension(file_name)
        if extension in cls.LEGACY_EXTENSIONS:
            raise LegacyFormatError(file_name, extension)
        if extension not in cls.supported_extensions():
            raise UnsupportedFormatError(file_name)
        return extension

    @classmethod
    def for_filename(cls, file_name: str, settings: Settings) -> BaseUnitExtractor:
        extension = cls.validate(file_name)
        if extension == "pdf":
            return PdfExtractorFactory.create(settings)
        if extension in IMAGE_EXTENSIONS:
            return ImageExtractor(file_name)
        return cls.OFFICE_EXTRACTORS[extension]()
