"""Full preprocessing pipeline implemented with OpenCV."""

from __future__ import annotations

import cv2
import numpy as np
from PIL import Image

from charcount.imaging.models import PreprocessingOption
from charcount.imaging.preprocessor import BasePreprocessor
from charcount.logging.logger import Log

WHITE = 255


class OpenCvPreprocessor(BasePreprocessor):
    """Grayscale, denoise, adaptive binarization, opening and deskew."""

    def __init__(
        self,
        blur_kernel: int = 3,
        threshold_block_size: int = 11,
        threshold_bias: int = 2,
        morphology_kernel: int = 2,
        max_skew_degrees: float = 45.0,
        min_skew_degrees: float = 0.5,
    ) -> None:
        self._blur_kernel = blur_kernel
        self._block_size = threshold_block_size
        self._bias = threshold_bias
        self._morph_kernel = np.ones((morphology_kernel, morphology_kernel), np.uint8)
        self._max_skew = max_skew_degrees
        self._min_skew = min_skew_degrees

    def apply(
        self,
        image: Image.Image,
        stages: list[PreprocessingOption],
    ) -> Image.Image:
        pixels = np.array(image.convert("RGB"))
        binary = False
        for stage in stages:
            if stage is PreprocessingOption.GRAYSCALE:
                pixels = self.grayscale(pixels)
            elif stage is PreprocessingOption.DENOISE:
                pixels = self.denoise(pixels)
            elif stage is PreprocessingOption.BINARIZE:
                pixels = self.binarize(pixels)
                binary = True
            elif stage is PreprocessingOption.MORPHOLOGY:
                pixels = self.open(pixels)
            elif stage is PreprocessingOption.DESKEW:
                pixels = self.deskew(pixels, keep_binary=binary)
        return Image.fromarray(pixels)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @staticmethod
    def grayscale(pixels: np.ndarray) -> np.ndarray:
        """Luma conversion (0.299 R + 0.587 G + 0.114 B)."""
        if pixels.ndim == 2:
            return pixels
        return cv2.cvtColor(pixels, cv2.COLOR_RGB2GRAY)

    def denoise(self, pixels: np.ndarray) -> np.ndarray:
        k = self._blur_kernel
        return cv2.GaussianBlur(pixels, (k, k), 0)

    def binarize(self, pixels: np.ndarray) -> np.ndarray:
        """Adaptive local threshold producing exactly 0 and 255."""
        gray = self.grayscale(pixels)
        return cv2.adaptiveThreshold(
            gray,
            WHITE,
            cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
            cv2.THRESH_BINARY,
            self._block_size,
            self._bias,
        )

    def open(self, pixels: np.ndarray) -> np.ndarray:
        """Morphological opening (erosion then dilation) on one channel."""
        gray = self.grayscale(pixels)
        return cv2.morphologyEx(gray, cv2.MORPH_OPEN, self._morph_kernel)

    def deskew(self, pixels: np.ndarray, keep_binary: bool = False) -> np.ndarray:
        """Rotate by the median angle of detected line segments.

        Segments steeper than ``max_skew_degrees`` are ignored. Nothing
        happens when no segment is found or the median is below
        ``min_skew_degrees``.
        """
        angle = self.detect_skew(pixels)
        if angle is None or abs(angle) < self._min_skew:
            return pixels

        h, w = pixels.shape[:2]
        matrix = cv2.getRotationMatrix2D((w / 2.0, h / 2.0), angle, 1.0)
        border = WHITE if pixels.ndim == 2 else (WHITE, WHITE, WHITE)
        Log.debug(f"Deskewing by {angle:.2f} degrees")
        return cv2.warpAffine(
            pixels,
            matrix,
            (w, h),
            flags=cv2.INTER_NEAREST if keep_binary else cv2.INTER_CUBIC,
            borderMode=cv2.BORDER_CONSTANT,
            borderValue=border,
        )

    def detect_skew(self, pixels: np.ndarray) -> float | None:
        """Return the median text-line angle in degrees, or None."""
        gray = self.grayscale(pixels)
        edges = cv2.Canny(gray, 50, 150, apertureSize=3)
        min_length = max(20, gray.shape[1] // 10)
        lines = cv2.HoughLinesP(
            edges,
            1,
            np.pi / 180,
            threshold=80,
            minLineLength=min_length,
            maxLineGap=10,
        )
        if lines is None:
            return None

        angles: list[float] = []
        # (N, 1, 4) on OpenCV 4, (N, 4) on OpenCV 5.
        for x1, y1, x2, y2 in lines.reshape(-1, 4):
            angle = float(np.degrees(np.arctan2(y2 - y1, x2 - x1)))
            # Segments may come back right-to-left.
            if angle > 90:
                angle -= 180
            elif angle < -90:
                angle += 180
            if abs(angle) <= self._max_skew:
                angles.append(angle)
        if not angles:
            return None
        return float(np.median(angles))
