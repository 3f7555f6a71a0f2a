"""
Document boundary detection.

Finds the best-effort quadrilateral outline of a document page in a photo.
The pipeline runs in stages, each only when the previous found nothing:

1. Downscale (longer side <= max_dimension), grayscale, Gaussian blur.
2. Stage A: Canny edges, dilated, external contours, polygon approximation.
3. Stage B: adaptive Gaussian threshold (inverted, dilated), same search.

Detection is best-effort: every failure resolves to ``None`` and callers
fall back to the default inset quadrilateral.
"""

import logging
from typing import Optional, Tuple, Union

import cv2
import numpy as np

from docrectify.common.config import DetectionConfig
from docrectify.common.errors import EngineUnavailable
from docrectify.common.types import Quadrilateral, RasterImage
from docrectify.config_loader import default_config
from docrectify.detection.buffers import BufferScope
from docrectify.detection.engine import VisionEngine
from docrectify.detection.types import DetectionReport, DetectionStage
from docrectify.geometry.quadrilateral import (
    default_quadrilateral,
    order_quadrilateral,
)

logger = logging.getLogger(__name__)

# (points in downscaled coordinates, used rotated-rect fallback)
_Candidate = Tuple[np.ndarray, bool]


def _to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a 1, 3 (BGR) or 4 (BGRA) channel image to single-channel."""
    if image.ndim == 2:
        return image
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0]
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


class BoundaryDetector:
    """
    Detects the boundary of a document page in a raster image.

    The detector only holds immutable configuration and its engine gate, so
    calls to ``detect`` share no mutable state.

    Example:
        >>> detector = BoundaryDetector()
        >>> quad = detector.detect(RasterImage(data=cv2.imread("page.jpg")))
        >>> if quad is None:
        ...     quad = default_quadrilateral(width, height)
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        engine: Optional[VisionEngine] = None,
    ):
        """
        Initialize the boundary detector.

        Args:
            config: Detection tunables. If None, loaded from config.yaml.
            engine: Readiness gate. If None, a default OpenCV gate is used.
        """
        if config is None or engine is None:
            defaults = default_config()
            config = config if config is not None else defaults.detection
            engine = engine if engine is not None else VisionEngine(defaults.engine)
        self.config = config
        self.engine = engine

    def detect(self, image: Union[RasterImage, np.ndarray]) -> Optional[Quadrilateral]:
        """
        Detect the document boundary.

        Args:
            image: Decoded image (BGR, BGRA or grayscale).

        Returns:
            Quadrilateral in native pixel coordinates ordered [TL, TR, BR, BL],
            or None if no usable boundary was found. Never raises for
            detection failures.
        """
        return self.detect_with_report(image).quadrilateral

    def detect_or_default(
        self, image: RasterImage, inset: Optional[float] = None
    ) -> Quadrilateral:
        """
        Detect the boundary, substituting the default inset quadrilateral on failure.

        The inset defaults to ``config.default_inset``.
        """
        quad = self.detect(image)
        if quad is None:
            inset = self.config.default_inset if inset is None else inset
            logger.info(f"No boundary detected, using default quadrilateral (inset={inset})")
            return default_quadrilateral(image.width, image.height, inset)
        return quad

    def detect_with_report(self, image: Union[RasterImage, np.ndarray]) -> DetectionReport:
        """Run detection and return the boundary together with diagnostics."""
        try:
            self.engine.wait_until_ready()
        except EngineUnavailable as e:
            logger.error(f"Boundary detection skipped: {e}")
            return DetectionReport(None, DetectionStage.NONE, error=str(e))

        try:
            if not isinstance(image, RasterImage):
                image = RasterImage(data=image)
            return self._run_pipeline(image)
        except (cv2.error, ValueError, TypeError) as e:
            logger.error(f"Boundary detection failed: {e}")
            return DetectionReport(None, DetectionStage.NONE, error=str(e))

    def _run_pipeline(self, image: RasterImage) -> DetectionReport:
        scale = min(1.0, self.config.max_dimension / max(image.height, image.width))

        # Intermediates live only in _search_stages' frame and the scope, so
        # leaving the block frees them
        with BufferScope("detection") as scope:
            candidate, stage = self._search_stages(scope, image.data, scale)

        if candidate is None:
            logger.info("No document boundary found")
            return DetectionReport(None, DetectionStage.NONE, scale=scale)

        points, rotated = candidate
        quad = order_quadrilateral(points.astype(np.float64) / scale)
        logger.info(f"Boundary detected by {stage.value} stage: {quad}")
        return DetectionReport(quad, stage, scale=scale, rotated_rect_fallback=rotated)

    def _search_stages(
        self, scope: BufferScope, src: np.ndarray, scale: float
    ) -> Tuple[Optional[_Candidate], DetectionStage]:
        """Run stage A, then stage B if needed, holding every buffer in ``scope``."""
        cfg = self.config
        h, w = src.shape[:2]

        # Step 1: Downscale
        if scale < 1.0:
            size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
            resized = scope.hold(
                "resized", cv2.resize(src, size, interpolation=cv2.INTER_AREA)
            )
        else:
            resized = src
        total_area = resized.shape[0] * resized.shape[1]
        logger.debug(f"Detecting on {resized.shape[1]}x{resized.shape[0]} (scale={scale:.4f})")

        # Step 2: Grayscale + blur
        gray = scope.hold("gray", _to_grayscale(resized))
        k = cfg.blur_kernel_size
        blurred = scope.hold("blurred", cv2.GaussianBlur(gray, (k, k), 0))
        d = cfg.dilate_kernel_size
        kernel = scope.hold("kernel", cv2.getStructuringElement(cv2.MORPH_RECT, (d, d)))

        # Stage A: edges
        edges = scope.hold("edges", cv2.Canny(blurred, cfg.canny_low, cfg.canny_high))
        edges = scope.hold("edges", cv2.dilate(edges, kernel))
        candidate = self._find_quadrilateral(edges, total_area)
        if candidate is not None:
            return candidate, DetectionStage.EDGES

        # Stage B: adaptive threshold
        logger.info("Edge stage found no boundary, trying adaptive threshold")
        thresh = scope.hold(
            "threshold",
            cv2.adaptiveThreshold(
                blurred,
                255,
                cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
                cv2.THRESH_BINARY,
                cfg.adaptive_block_size,
                cfg.adaptive_c,
            ),
        )
        thresh = scope.hold("threshold", cv2.bitwise_not(thresh))
        thresh = scope.hold("threshold", cv2.dilate(thresh, kernel))
        return self._find_quadrilateral(thresh, total_area), DetectionStage.THRESHOLD

    def _find_quadrilateral(
        self, binary: np.ndarray, total_area: int
    ) -> Optional[_Candidate]:
        """
        Search a binary map for the largest 4-vertex contour approximation.

        Falls back to the minimum-area rotated rectangle of the largest
        qualifying contour when no approximation has exactly 4 vertices.
        """
        contours, _ = cv2.findContours(
            binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
        )
        if not contours:
            return None

        min_area = total_area * self.config.min_area_ratio
        best_quad, best_area = None, 0.0
        largest, largest_area = None, 0.0

        for contour in contours:
            area = cv2.contourArea(contour)
            if area < min_area:
                continue

            if area > largest_area:
                largest, largest_area = contour, area

            perimeter = cv2.arcLength(contour, True)
            approx = cv2.approxPolyDP(
                contour, self.config.approx_epsilon_ratio * perimeter, True
            )
            if len(approx) == 4 and area > best_area:
                best_quad, best_area = approx.reshape(4, 2), area

        if best_quad is not None:
            logger.debug(f"4-vertex contour found (area={best_area:.0f})")
            return best_quad.astype(np.float64), False

        if largest is not None:
            box = cv2.boxPoints(cv2.minAreaRect(largest))
            logger.debug(f"Using rotated rectangle of largest contour (area={largest_area:.0f})")
            return box.astype(np.float64), True

        return None
