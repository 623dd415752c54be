"""Recognition-oriented image cleanup with graceful degradation.

Two implementations share the :class:`BasePreprocessor` contract:

* :class:`~charcount.imaging.opencv_preprocessor.OpenCvPreprocessor` runs the
  full grayscale -> denoise -> binarize -> morphology -> deskew pipeline.
* :class:`MinimalPreprocessor` only stretches contrast around mid-gray.

:class:`ImagePreprocessor` picks one per call: the full pipeline when OpenCV
can be imported and at least one option is selected, the minimal transform
otherwise or whenever a stage fails.
"""

from __future__ import annotations

import importlib
import importlib.util
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

import numpy as np
from PIL import Image

from charcount.imaging import codec
from charcount.imaging.exceptions import ImageDecodeError
from charcount.imaging.models import PreprocessingOption, RawImage, ordered_options
from charcount.logging.logger import Log


class BasePreprocessor(ABC):
    """Contract for preprocessing implementations."""

    @abstractmethod
    def apply(
        self,
        image: Image.Image,
        stages: list[PreprocessingOption],
    ) -> Image.Image:
        """Transform an opaque RGB image.

        Args:
            image: Decoded image already flattened onto white.
            stages: Selected stages, already in pipeline order.

        Returns:
            The transformed image (``L`` or ``RGB`` mode).
        """


class MinimalPreprocessor(BasePreprocessor):
    """Linear contrast stretch around mid-gray, clamped to 0..255."""

    def __init__(self, contrast_factor: float = 1.2, pivot: float = 128.0) -> None:
        self._factor = contrast_factor
        self._pivot = pivot

    def apply(
        self,
        image: Image.Image,
        stages: list[PreprocessingOption],
    ) -> Image.Image:
        _ = stages  # the minimal transform is the same whatever was requested
        pixels = np.asarray(image, dtype=np.float32)
        stretched = (pixels - self._pivot) * self._factor + self._pivot
        return Image.fromarray(np.clip(stretched, 0, 255).astype(np.uint8))


def opencv_available() -> bool:
    """Return True when the OpenCV bindings can be imported."""
    return importlib.util.find_spec("cv2") is not None


def _load_opencv_preprocessor() -> BasePreprocessor:
    module = importlib.import_module("charcount.imaging.opencv_preprocessor")
    preprocessor: BasePreprocessor = module.OpenCvPreprocessor()
    return preprocessor


class ImagePreprocessor:
    """Selects and runs a preprocessing implementation for each image."""

    def __init__(
        self,
        minimal: BasePreprocessor | None = None,
        capability_check: Callable[[], bool] = opencv_available,
        advanced_loader: Callable[[], BasePreprocessor] = _load_opencv_preprocessor,
    ) -> None:
        self._minimal = minimal if minimal is not None else MinimalPreprocessor()
        self._capability_check = capability_check
        self._advanced_loader = advanced_loader
        self._advanced: BasePreprocessor | None = None

    def preprocess(
        self,
        image: RawImage,
        options: Iterable[PreprocessingOption],
    ) -> RawImage:
        """Return a recognition-ready PNG copy of *image*.

        Never raises: undecodable input is returned unchanged and any failure
        in the full pipeline degrades to the minimal transform.
        """
        try:
            decoded = codec.decode_on_white(image.data)
        except ImageDecodeError as exc:
            Log.warning(f"Preprocessing skipped for {image.name}: {exc}")
            return image

        stages = ordered_options(options)
        advanced = self._select_advanced() if stages else None
        if advanced is not None:
            try:
                return image.with_data(codec.encode_png(advanced.apply(decoded, stages)))
            except Exception as exc:
                Log.warning(
                    f"Preprocessing failed for {image.name} ({exc}); "
                    "falling back to contrast stretch"
                )

        try:
            return image.with_data(codec.encode_png(self._minimal.apply(decoded, stages)))
        except Exception as exc:
            Log.warning(f"Minimal preprocessing failed for {image.name}: {exc}")
            return image

    def _select_advanced(self) -> BasePreprocessor | None:
        if not self._capability_check():
            Log.debug("OpenCV unavailable, using minimal preprocessing")
            return None
        if self._advanced is None:
            try:
                self._advanced = self._advanced_loader()
            except ImportError as exc:
                Log.warning(f"Advanced preprocessing unavailable: {exc}")
                return None
        return self._advanced
