"""
Unit tests for quadrilateral ordering and sizing.
"""

import itertools

import numpy as np
import pytest

from docrectify.common.types import Point, Quadrilateral
from docrectify.geometry.quadrilateral import (
    default_quadrilateral,
    edge_lengths,
    order_quadrilateral,
    target_dimensions,
)

SKEWED = [(10, 20), (200, 15), (210, 300), (5, 280)]


class TestOrderQuadrilateral:
    """Test canonical [TL, TR, BR, BL] ordering."""

    @pytest.mark.parametrize("perm", list(itertools.permutations(SKEWED)))
    def test_every_permutation_gives_same_order(self, perm):
        ordered = order_quadrilateral(list(perm))
        assert ordered.to_list() == [(10, 20), (200, 15), (210, 300), (5, 280)]

    @pytest.mark.parametrize(
        "perm", list(itertools.permutations([(0, 0), (10, 0), (10, 10), (0, 10)]))
    )
    def test_axis_aligned_ties_are_deterministic(self, perm):
        ordered = order_quadrilateral(list(perm))
        assert ordered.to_list() == [(0, 0), (10, 0), (10, 10), (0, 10)]

    def test_idempotent(self):
        once = order_quadrilateral(SKEWED)
        twice = order_quadrilateral(once)
        assert twice.to_list() == once.to_list()

    def test_numpy_input(self):
        points = np.array([[300, 150], [100, 200], [320, 400], [80, 380]], np.float32)
        ordered = order_quadrilateral(points)

        assert ordered[0] == Point(x=100, y=200)
        assert ordered[1] == Point(x=300, y=150)
        assert ordered[2] == Point(x=320, y=400)
        assert ordered[3] == Point(x=80, y=380)

    def test_quadrilateral_input(self):
        quad = Quadrilateral(points=[(10, 10), (0, 0), (0, 10), (10, 0)])
        assert order_quadrilateral(quad).to_list() == [(0, 0), (10, 0), (10, 10), (0, 10)]

    @pytest.mark.parametrize(
        "points",
        [
            [(0, 0), (1, 0), (1, 1)],
            [(0, 0), (1, 0), (1, 1), (0, 1), (2, 2)],
        ],
    )
    def test_wrong_point_count(self, points):
        with pytest.raises(ValueError, match="Expected exactly 4 points"):
            order_quadrilateral(points)

    def test_wrong_array_size(self):
        with pytest.raises(ValueError, match="Expected exactly 4 points"):
            order_quadrilateral(np.zeros((3, 2)))


class TestSizing:
    """Test edge lengths and rectified output size."""

    def test_edge_lengths(self):
        quad = Quadrilateral(points=[(0, 0), (30, 0), (30, 40), (0, 40)])
        assert edge_lengths(quad) == pytest.approx((30.0, 40.0, 30.0, 40.0))

    def test_target_dimensions_page(self, page_quad):
        assert target_dimensions(page_quad) == (800, 640)

    def test_target_dimensions_uses_longer_edges(self):
        quad = order_quadrilateral([(0, 0), (100, 0), (90, 50), (10, 60)])
        top, right, bottom, left = edge_lengths(quad)
        width, height = target_dimensions(quad)

        assert width == round(max(top, bottom)) == 100
        assert height == round(max(left, right))

    def test_target_dimensions_never_zero(self):
        quad = Quadrilateral(points=[(5, 5)] * 4)
        assert target_dimensions(quad) == (1, 1)


class TestDefaultQuadrilateral:
    """Test the inset fallback quadrilateral."""

    def test_default_inset(self):
        quad = default_quadrilateral(1000, 800)
        expected = [(100, 80), (900, 80), (900, 720), (100, 720)]

        for point, (x, y) in zip(quad, expected):
            assert point.x == pytest.approx(x)
            assert point.y == pytest.approx(y)

    def test_default_is_canonically_ordered(self):
        quad = default_quadrilateral(640, 480)
        assert order_quadrilateral(quad).to_list() == quad.to_list()

    def test_custom_inset(self):
        quad = default_quadrilateral(200, 100, inset=0.25)
        assert quad[0].to_tuple() == pytest.approx((50.0, 25.0))
        assert quad[2].to_tuple() == pytest.approx((150.0, 75.0))
