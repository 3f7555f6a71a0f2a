"""
Planar projective transforms.

Provides the exact 4-point homography solve and the perspective warp used to
rectify document regions.
"""

import logging

import cv2
import numpy as np

from docrectify.common.errors import GeometryDegenerate
from docrectify.common.types import Quadrilateral, RasterImage

logger = logging.getLogger(__name__)


def compute_homography(src: Quadrilateral, dst: Quadrilateral) -> np.ndarray:
    """
    Solve the homography mapping each ``src[i]`` exactly onto ``dst[i]``.

    Builds the 8x8 linear system of the four correspondences with the
    bottom-right matrix element fixed at 1 and solves it directly (no least
    squares).

    Args:
        src: Source quadrilateral.
        dst: Destination quadrilateral.

    Returns:
        3x3 float64 matrix H with H @ [x, y, 1]^T ~ [x', y', 1]^T.

    Raises:
        GeometryDegenerate: If the correspondences do not define a unique
            transform (three or more collinear points).
    """
    a = np.zeros((8, 8), dtype=np.float64)
    b = np.zeros(8, dtype=np.float64)

    for i, (p, q) in enumerate(zip(src.points, dst.points)):
        x, y, u, v = p.x, p.y, q.x, q.y
        a[2 * i] = [x, y, 1, 0, 0, 0, -u * x, -u * y]
        a[2 * i + 1] = [0, 0, 0, x, y, 1, -v * x, -v * y]
        b[2 * i] = u
        b[2 * i + 1] = v

    try:
        h = np.linalg.solve(a, b)
    except np.linalg.LinAlgError as e:
        raise GeometryDegenerate(f"Cannot solve homography: {e}") from e

    matrix = np.append(h, 1.0).reshape(3, 3)
    logger.debug(f"Homography:\n{matrix}")
    return matrix


def warp_perspective(
    image: RasterImage,
    homography: np.ndarray,
    output_width: int,
    output_height: int,
    border_value: int = 0,
) -> RasterImage:
    """
    Warp ``image`` through ``homography`` into a new output_width x output_height image.

    Every destination pixel is mapped back through the inverse homography and
    sampled with bilinear interpolation; samples falling outside the source
    are filled with ``border_value`` on every channel (black, or transparent
    black for 4-channel images).
    """
    warped = cv2.warpPerspective(
        image.data,
        homography,
        (int(output_width), int(output_height)),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(border_value,) * 4,
    )
    # OpenCV drops a singleton channel axis
    if warped.ndim < image.data.ndim:
        warped = warped[:, :, np.newaxis]
    return RasterImage(data=warped)
