from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from charcount.imaging.models import RawImage


@dataclass(frozen=True)
class ExtractedUnit:
    """Native text and associated images of one structural unit.

    ``optional`` units (e.g. the catch-all "Text in images" of a DOCX) are
    dropped from the analysis when their images yield no characters.
    """

    label: str
    native_text: str = ""
    images: list[RawImage] = field(default_factory=list)
    optional: bool = False


class BaseUnitExtractor(ABC):
    """Contract for all per-format structural unit extractors."""

    kind: ClassVar[str] = ""
    section_title: ClassVar[str] = ""

    @abstractmethod
    def extract_units(self, data: bytes) -> list[ExtractedUnit]:
        """Split a document into structural units.

        Args:
            data: Raw file content.

        Returns:
            Units in document order (slides, pages, sheets or one body).

        Raises:
            DocumentParseError: if the container cannot be parsed.
        """
