"""Runs normalize -> preprocess -> recognize over the images of one unit.

Images are processed strictly one at a time: the recognition engine is a
shared stateful resource and is never invoked concurrently.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from charcount.counting.counter import count_chars
from charcount.imaging.hasher import ERROR_PREFIX, PerceptualHasher
from charcount.imaging.models import PreprocessingOption, RawImage
from charcount.imaging.normalizer import ImageNormalizer
from charcount.imaging.preprocessor import ImagePreprocessor
from charcount.logging.logger import Log
from charcount.ocr.base import BaseRecognizer
from charcount.ocr.cache import RecognitionCache
from charcount.ocr.progress import ProgressScope, null_scope


@dataclass(frozen=True)
class BatchRecognition:
    """Joined recognition output of one unit's images."""

    text: str
    char_count: int
    unique_images: int = 0
    recognized_images: int = 0
    cache_hits: int = 0
    duplicates_skipped: int = 0


class OcrOrchestrator:
    """Sequences fingerprinting, caching and recognition for image batches."""

    def __init__(
        self,
        *,
        recognizer: BaseRecognizer,
        languages: Sequence[str],
        preprocessing_options: Iterable[PreprocessingOption],
        normalizer: ImageNormalizer | None = None,
        preprocessor: ImagePreprocessor | None = None,
        hasher: PerceptualHasher | None = None,
    ) -> None:
        if not languages:
            raise ValueError("at least one recognition language is required")
        self._recognizer = recognizer
        self._languages = tuple(languages)
        self._options = frozenset(preprocessing_options)
        self._normalizer = normalizer if normalizer is not None else ImageNormalizer()
        self._preprocessor = preprocessor if preprocessor is not None else ImagePreprocessor()
        self._hasher = hasher if hasher is not None else PerceptualHasher()

    @property
    def languages(self) -> tuple[str, ...]:
        return self._languages

    def recognize_batch(
        self,
        images: Sequence[RawImage],
        cache: RecognitionCache,
        progress: ProgressScope | None = None,
    ) -> BatchRecognition:
        """Recognize *images* and join their texts.

        Within the batch the first image with a given fingerprint wins and
        repeats are skipped; fingerprints already in *cache* reuse the cached
        text. New results are stored in *cache* before they are used.
        """
        scope = progress if progress is not None else null_scope()
        total = len(images)
        seen: set[str] = set()
        texts: list[str] = []
        recognized = cache_hits = skipped = 0

        for index, image in enumerate(images):
            key = self._fingerprint(image)
            if key in seen:
                skipped += 1
                Log.debug(f"Skipping repeated image {image.name} in unit")
            else:
                seen.add(key)
                cached = cache.get(key)
                if cached is not None:
                    cache_hits += 1
                    Log.debug(f"Reusing cached text for {image.name}")
                    text = cached
                else:
                    text = self._recognize_one(image)
                    cache.put(key, text)
                    recognized += 1
                texts.append(text)
            scope.report((index + 1) / total, f"Image OCR ({index + 1}/{total})")

        joined = "\n".join(t for t in texts if t).strip()
        return BatchRecognition(
            text=joined,
            char_count=count_chars(joined),
            unique_images=len(seen),
            recognized_images=recognized,
            cache_hits=cache_hits,
            duplicates_skipped=skipped,
        )

    def _fingerprint(self, image: RawImage) -> str:
        try:
            return self._hasher.fingerprint(image)
        except Exception as exc:
            Log.warning(f"Fingerprint failed for {image.name}: {exc}")
            return f"{ERROR_PREFIX}{len(image.data)}"

    def _recognize_one(self, image: RawImage) -> str:
        """Run the full chain for one image; failures yield empty text."""
        try:
            normalized = self._normalizer.normalize(image)
            prepared = self._preprocessor.preprocess(normalized, self._options)
            return self._recognizer.recognize(prepared, self._languages)
        except Exception as exc:
            Log.warning(f"Recognition failed for {image.name}: {exc}")
            return ""
