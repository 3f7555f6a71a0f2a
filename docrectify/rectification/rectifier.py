"""
Perspective rectification of document regions.

Warps an arbitrary quadrilateral region of an image into an upright
rectangle whose size follows the longer of each pair of opposite edges.
"""

import logging
from typing import Optional

from docrectify.common.config import RectificationConfig
from docrectify.common.errors import GeometryDegenerate
from docrectify.common.types import Quadrilateral, RasterImage
from docrectify.config_loader import default_config
from docrectify.geometry.homography import compute_homography, warp_perspective
from docrectify.geometry.quadrilateral import (
    QuadLike,
    edge_lengths,
    order_quadrilateral,
    target_dimensions,
)

logger = logging.getLogger(__name__)


class Rectifier:
    """
    Rectifies quadrilateral regions to top-down rectangular views.

    Degenerate quadrilaterals (near-zero area or edge extent) are refused:
    the input image is returned unchanged.

    Example:
        >>> rectifier = Rectifier()
        >>> page = rectifier.rectify(image, [[120, 80], [900, 95], [880, 720], [100, 700]])
    """

    def __init__(self, config: Optional[RectificationConfig] = None):
        self.config = config if config is not None else default_config().rectification

    def check_geometry(self, quad: Quadrilateral) -> None:
        """
        Validate that an ordered quadrilateral can be rectified.

        Raises:
            GeometryDegenerate: If area, width or height is (near) zero.
        """
        area = quad.area()
        if area < self.config.min_area:
            raise GeometryDegenerate(
                f"Quadrilateral area {area:.3f} below minimum {self.config.min_area}"
            )

        top, right, bottom, left = edge_lengths(quad)
        width, height = max(top, bottom), max(left, right)
        if width < self.config.min_extent or height < self.config.min_extent:
            raise GeometryDegenerate(
                f"Quadrilateral extent {width:.3f}x{height:.3f} "
                f"below minimum {self.config.min_extent}"
            )

    def rectify(self, image: RasterImage, quad: QuadLike) -> RasterImage:
        """
        Warp the region bounded by ``quad`` into an upright rectangle.

        Args:
            image: Source image.
            quad: 4 corners in native pixel coordinates, any order.

        Returns:
            New image of size target_dimensions(quad), or ``image`` itself
            when the quadrilateral is degenerate.
        """
        ordered = order_quadrilateral(quad)

        try:
            self.check_geometry(ordered)
            width, height = target_dimensions(ordered)
            destination = Quadrilateral(
                points=[(0, 0), (width, 0), (width, height), (0, height)]
            )
            homography = compute_homography(ordered, destination)
        except GeometryDegenerate as e:
            logger.warning(f"Refusing to rectify degenerate quadrilateral: {e}")
            return image

        logger.debug(f"Calculated output dimensions: {width}x{height}")
        rectified = warp_perspective(
            image, homography, width, height, border_value=self.config.border_value
        )

        logger.info(f"Rectified quadrilateral to {width}x{height} rectangle")
        return rectified


def rectify(
    image: RasterImage,
    quad: QuadLike,
    config: Optional[RectificationConfig] = None,
) -> RasterImage:
    """
    Convenience function for one-shot rectification.

    Example:
        >>> page = rectify(image, detector.detect_or_default(image))
    """
    return Rectifier(config=config).rectify(image, quad)
