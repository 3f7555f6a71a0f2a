"""
Brightness, contrast and rotation enhancement.

Levels are applied as two independent linear pixel transforms (brightness
scales, contrast stretches around mid-gray), then the image is rotated on a
canvas large enough to hold the whole rotated original.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from docrectify.common.config import EnhancementConfig
from docrectify.common.types import RasterImage
from docrectify.config_loader import default_config
from docrectify.enhancement.types import EnhancementParams

logger = logging.getLogger(__name__)

_RIGHT_ANGLE_ROTATIONS = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def build_levels_lut(brightness: int, contrast: int) -> np.ndarray:
    """
    Build a 256-entry lookup table for the brightness/contrast transform.

    brightness: v' = v * b / 100
    contrast:   v' = (v - 127.5) * c / 100 + 127.5

    Each step is clipped to [0, 255], matching how stacked CSS
    brightness()/contrast() filters behave.
    """
    values = np.arange(256, dtype=np.float64)
    values = np.clip(values * (brightness / 100.0), 0, 255)
    values = np.clip((values - 127.5) * (contrast / 100.0) + 127.5, 0, 255)
    return np.rint(values).astype(np.uint8)


def adjust_levels(data: np.ndarray, brightness: int, contrast: int) -> np.ndarray:
    """Apply brightness/contrast to color channels, leaving alpha untouched."""
    if brightness == 100 and contrast == 100:
        return data.copy()

    lut = build_levels_lut(brightness, contrast)
    if data.ndim == 3 and data.shape[2] == 4:
        color = cv2.LUT(np.ascontiguousarray(data[:, :, :3]), lut)
        return np.dstack([color, data[:, :, 3]])
    return cv2.LUT(data, lut)


def rotated_canvas_size(width: int, height: int, degrees: float) -> Tuple[int, int]:
    """Axis-aligned bounding box of a width x height image rotated by ``degrees``."""
    theta = np.deg2rad(degrees % 360)
    cos, sin = abs(np.cos(theta)), abs(np.sin(theta))
    new_width = int(round(width * cos + height * sin))
    new_height = int(round(width * sin + height * cos))
    return max(new_width, 1), max(new_height, 1)


def rotate_image(
    data: np.ndarray,
    degrees: float,
    background: Tuple[int, int, int] = (255, 255, 255),
) -> np.ndarray:
    """
    Rotate clockwise by ``degrees`` without cropping.

    The canvas grows to the rotated bounding box with the source centered in
    it; uncovered corners are filled with ``background``. Multiples of 90 are
    exact pixel transposes.
    """
    degrees = degrees % 360
    if degrees == 0:
        return data.copy()

    if degrees in _RIGHT_ANGLE_ROTATIONS:
        return cv2.rotate(data, _RIGHT_ANGLE_ROTATIONS[int(degrees)])

    h, w = data.shape[:2]
    new_w, new_h = rotated_canvas_size(w, h, degrees)

    # OpenCV angles are counter-clockwise
    matrix = cv2.getRotationMatrix2D((w / 2.0, h / 2.0), -degrees, 1.0)
    matrix[0, 2] += new_w / 2.0 - w / 2.0
    matrix[1, 2] += new_h / 2.0 - h / 2.0

    border = tuple(background) + (255,)
    return cv2.warpAffine(
        data,
        matrix,
        (new_w, new_h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=border,
    )


class Enhancer:
    """
    Applies EnhancementParams to images.

    Example:
        >>> enhancer = Enhancer()
        >>> brighter = enhancer.enhance(image, EnhancementParams(brightness=150))
    """

    def __init__(self, config: Optional[EnhancementConfig] = None):
        self.config = config if config is not None else default_config().enhancement

    def enhance(self, image: RasterImage, params: EnhancementParams) -> RasterImage:
        """
        Apply levels then rotation, returning a new image.

        Args:
            image: Source image.
            params: Brightness, contrast and accumulated rotation.

        Returns:
            New RasterImage; ``image`` is never modified.
        """
        logger.info(
            f"Enhancing image: brightness={params.brightness}%, "
            f"contrast={params.contrast}%, rotation={params.rotation_degrees}"
        )
        data = adjust_levels(image.data, params.brightness, params.contrast)
        data = rotate_image(data, params.rotation_degrees, self.config.background)
        # OpenCV drops a singleton channel axis
        if data.ndim < image.data.ndim:
            data = data[:, :, np.newaxis]
        logger.debug(f"Enhanced size: {data.shape[1]}x{data.shape[0]}")
        return RasterImage(data=data)


def enhance(
    image: RasterImage,
    params: EnhancementParams,
    config: Optional[EnhancementConfig] = None,
) -> RasterImage:
    """Convenience function for one-shot enhancement."""
    return Enhancer(config=config).enhance(image, params)
