from abc import ABC, abstractmethod
from collections.abc import Sequence

from charcount.imaging.models import RawImage


class BaseRecognizer(ABC):
    """Contract for all text recognition adapters."""

    LANGUAGE_DELIMITER = "+"

    @abstractmethod
    def recognize(self, image: RawImage, languages: Sequence[str]) -> str:
        """Recognize the text contained in *image*.

        Args:
            image: Normalized and preprocessed image.
            languages: Ordered recognition language codes (e.g. ``kor``, ``eng``).

        Returns:
            Recognized text, possibly empty.

        Raises:
            RecognitionError: on any failure.
        """

    @classmethod
    def join_languages(cls, languages: Sequence[str]) -> str:
        return cls.LANGUAGE_DELIMITER.join(languages)
