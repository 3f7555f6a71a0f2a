"""
Geometry kernel: point ordering, sizing, homography solve and perspective warp.
"""

from docrectify.geometry.homography import compute_homography, warp_perspective
from docrectify.geometry.quadrilateral import (
    default_quadrilateral,
    edge_lengths,
    order_quadrilateral,
    target_dimensions,
)

__all__ = [
    "order_quadrilateral",
    "edge_lengths",
    "target_dimensions",
    "default_quadrilateral",
    "compute_homography",
    "warp_perspective",
]
