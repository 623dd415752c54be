"""Engine-free recognizer.

Returns configured text instead of running an OCR engine. Useful for local
development without Tesseract, for tests, and as a template for new
recognition adapters: implement BaseRecognizer and register the engine in
RecognizerFactory.
"""

from collections.abc import Mapping, Sequence

from charcount.imaging.models import RawImage
from charcount.ocr.base import BaseRecognizer


class StaticRecognizer(BaseRecognizer):
    """Answers every image with fixed text, optionally overridden per name."""

    def __init__(
        self,
        text: str = "",
        by_name: Mapping[str, str] | None = None,
    ) -> None:
        self._text = text
        self._by_name = dict(by_name or {})
        self.calls: list[tuple[str, str]] = []

    def recognize(self, image: RawImage, languages: Sequence[str]) -> str:
        self.calls.append((image.name, self.join_languages(languages)))
        return self._by_name.get(image.name, self._text)
