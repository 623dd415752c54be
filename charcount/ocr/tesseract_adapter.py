from collections.abc import Sequence

import pytesseract

from charcount.imaging import codec
from charcount.imaging.exceptions import ImageDecodeError
from charcount.imaging.models import RawImage
from charcount.ocr.base import BaseRecognizer
from charcount.ocr.exceptions import RecognitionError, RecognizerUnavailableError


class TesseractRecognizer(BaseRecognizer):
    """Recognizes text with the Tesseract engine through pytesseract."""

    def __init__(
        self,
        *,
        tesseract_cmd: str = "",
        tessdata_dir: str = "",
        psm: int = 3,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self._tessdata_dir = tessdata_dir
        self._psm = psm

    @property
    def config(self) -> str:
        """Command-line options passed to every Tesseract invocation."""
        parts = [f"--psm {self._psm}", "-c preserve_interword_spaces=1"]
        if self._tessdata_dir:
            parts.append(f'--tessdata-dir "{self._tessdata_dir}"')
        return " ".join(parts)

    def recognize(self, image: RawImage, languages: Sequence[str]) -> str:
        try:
            decoded = codec.decode(image.data)
        except ImageDecodeError as exc:
            raise RecognitionError(f"{image.name}: {exc}") from exc

        try:
            text = pytesseract.image_to_string(
                decoded,
                lang=self.join_languages(languages),
                config=self.config,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise RecognizerUnavailableError(f"tesseract not available: {exc}") from exc
        except (pytesseract.TesseractError, RuntimeError, OSError) as exc:
            raise RecognitionError(f"tesseract failed on {image.name}: {exc}") from exc
        return text or ""
