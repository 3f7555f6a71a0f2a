"""
Unit tests for the shared pydantic types.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from docrectify.common.types import Point, Quadrilateral, RasterImage


class TestRasterImage:
    """Test RasterImage validation and accessors."""

    def test_color_image_properties(self):
        image = RasterImage(data=np.zeros((40, 60, 3), dtype=np.uint8))

        assert image.height == 40
        assert image.width == 60
        assert image.channels == 3
        assert image.area == 2400

    def test_grayscale_has_one_channel(self):
        image = RasterImage(data=np.zeros((10, 20), dtype=np.uint8))
        assert image.channels == 1

    def test_data_is_read_only(self):
        """Test that the wrapped array cannot be mutated in place."""
        source = np.zeros((10, 10, 3), dtype=np.uint8)
        image = RasterImage(data=source)

        assert not image.data.flags.writeable
        with pytest.raises(ValueError):
            image.data[0, 0, 0] = 255

        # The caller's own array stays writable
        source[0, 0, 0] = 7
        assert source.flags.writeable

    def test_copy_is_independent(self):
        image = RasterImage(data=np.full((5, 5), 9, dtype=np.uint8))
        clone = image.copy()

        assert clone is not image
        assert clone.data is not image.data
        np.testing.assert_array_equal(clone.data, image.data)

    @pytest.mark.parametrize(
        "data",
        [
            np.zeros((0, 0, 3), dtype=np.uint8),
            np.zeros((10, 10, 2), dtype=np.uint8),
            np.zeros((10, 10, 3), dtype=np.float32),
            np.zeros((2, 2, 2, 2), dtype=np.uint8),
        ],
    )
    def test_invalid_arrays_rejected(self, data):
        with pytest.raises(ValidationError):
            RasterImage(data=data)


class TestPoint:
    """Test Point conversions and helpers."""

    def test_accepts_numpy_scalars(self):
        point = Point(x=np.float32(1.5), y=np.int64(2))
        assert point.to_tuple() == (1.5, 2.0)

    def test_rejects_non_numeric(self):
        with pytest.raises(ValidationError):
            Point(x="a", y=1)

    def test_from_numpy_wrong_shape(self):
        with pytest.raises(ValueError, match="shape"):
            Point.from_numpy(np.array([1, 2, 3]))

    def test_distance(self):
        assert Point(x=0, y=0).distance_to(Point(x=3, y=4)) == pytest.approx(5.0)

    def test_clamped(self):
        assert Point(x=-5, y=900).clamped(1000, 800).to_tuple() == (0.0, 800.0)
        assert Point(x=20, y=30).clamped(1000, 800).to_tuple() == (20.0, 30.0)

    def test_arithmetic(self):
        total = Point(x=1, y=2) + Point(x=3, y=4)
        diff = Point(x=1, y=2) - Point(x=3, y=4)

        assert total.to_tuple() == (4.0, 6.0)
        assert diff.to_tuple() == (-2.0, -2.0)


class TestQuadrilateral:
    """Test Quadrilateral construction and helpers."""

    def test_from_numpy(self):
        quad = Quadrilateral.from_numpy(np.array([[0, 0], [10, 0], [10, 5], [0, 5]]))

        assert len(quad) == 4
        assert quad[2].to_tuple() == (10.0, 5.0)
        assert quad.area() == pytest.approx(50.0)

    def test_requires_four_points(self):
        with pytest.raises(ValidationError, match="exactly 4 points"):
            Quadrilateral(points=[(0, 0), (1, 0), (1, 1)])

    def test_replace_returns_new_quad(self):
        quad = Quadrilateral(points=[(0, 0), (10, 0), (10, 10), (0, 10)])
        moved = quad.replace(0, Point(x=2, y=3))

        assert moved[0].to_tuple() == (2.0, 3.0)
        assert quad[0].to_tuple() == (0.0, 0.0)

    def test_to_numpy_shape(self):
        quad = Quadrilateral(points=[(0, 0), (10, 0), (10, 10), (0, 10)])
        arr = quad.to_numpy()

        assert arr.shape == (4, 2)
        assert arr.dtype == np.float32
