"""
Quadrilateral utilities: canonical ordering, edge lengths and output sizing.

The canonical corner order used everywhere in docrectify is
[Top-Left, Top-Right, Bottom-Right, Bottom-Left].
"""

import logging
from typing import Sequence, Tuple, Union

import numpy as np

from docrectify.common.types import Point, PointLike, Quadrilateral

logger = logging.getLogger(__name__)

QuadLike = Union[Quadrilateral, Sequence[PointLike], np.ndarray]


def _as_points(points: QuadLike) -> list:
    """Coerce any supported 4-point input into a list of Point."""
    if isinstance(points, Quadrilateral):
        return list(points.points)

    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
        if arr.size != 8:
            raise ValueError(
                f"Expected exactly 4 points with shape (4, 2), got shape {arr.shape}"
            )
        return [Point.from_numpy(p) for p in arr.reshape(4, 2)]

    points = list(points)
    if len(points) != 4:
        raise ValueError(f"Expected exactly 4 points, got {len(points)}")
    return [p if isinstance(p, Point) else Point.from_list(list(p)) for p in points]


def order_quadrilateral(points: QuadLike) -> Quadrilateral:
    """
    Order 4 points as [Top-Left, Top-Right, Bottom-Right, Bottom-Left].

    The points are sorted by y; the two upper points form the top pair and
    are sorted left to right, the two lower points form the bottom pair and
    are sorted right to left. All sorts are stable, so ties keep their input
    order and the result is deterministic.

    Args:
        points: A Quadrilateral, a sequence of 4 Points / [x, y] pairs, or an
            array reshapeable to (4, 2).

    Returns:
        Canonically ordered Quadrilateral. Ordering an already ordered
        quadrilateral returns it unchanged.

    Raises:
        ValueError: If input does not contain exactly 4 points.

    Example:
        >>> quad = order_quadrilateral([[300, 150], [100, 200], [320, 400], [80, 380]])
        >>> quad[0]
        Point(x=100, y=200)
    """
    pts = _as_points(points)

    by_y = sorted(pts, key=lambda p: p.y)
    top = sorted(by_y[:2], key=lambda p: p.x)
    bottom = sorted(by_y[2:], key=lambda p: -p.x)

    ordered = Quadrilateral(points=(top[0], top[1], bottom[0], bottom[1]))
    logger.debug(f"Ordered points: {ordered}")
    return ordered


def edge_lengths(quad: Quadrilateral) -> Tuple[float, float, float, float]:
    """
    Calculate the length of all 4 edges of an ordered quadrilateral.

    Returns:
        Tuple of (top_edge, right_edge, bottom_edge, left_edge) lengths.
    """
    tl, tr, br, bl = quad.points
    return (
        tl.distance_to(tr),
        tr.distance_to(br),
        bl.distance_to(br),
        tl.distance_to(bl),
    )


def target_dimensions(quad: Quadrilateral) -> Tuple[int, int]:
    """
    Output size of a rectification of ``quad``.

    Uses the longer of each pair of opposite edges so no content is lost,
    rounded to the nearest integer and never below 1.

    Example:
        >>> target_dimensions(order_quadrilateral([[100, 80], [900, 80], [900, 720], [100, 720]]))
        (800, 640)
    """
    top, right, bottom, left = edge_lengths(quad)
    width = max(int(round(max(top, bottom))), 1)
    height = max(int(round(max(left, right))), 1)
    return width, height


def default_quadrilateral(
    width: float, height: float, inset: float = 0.1
) -> Quadrilateral:
    """
    Quadrilateral inset by ``inset`` of the image size on every side.

    Used whenever detection yields no boundary: with the default inset the
    corners sit at 10% and 90% of the width and height.
    """
    x0, x1 = width * inset, width * (1 - inset)
    y0, y1 = height * inset, height * (1 - inset)
    return Quadrilateral(points=[(x0, y0), (x1, y0), (x1, y1), (x0, y1)])
