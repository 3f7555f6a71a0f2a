"""
Common type definitions for the document rectification core.

This module provides Pydantic-based type definitions for the core data
structures shared by every stage: raster images, points and quadrilaterals.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Helper methods for common operations
- Integration with numpy arrays and OpenCV
"""

from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator


class RasterImage(BaseModel):
    """
    Immutable wrapper for image arrays (numpy.ndarray).

    Every transform in the pipeline (detect, warp, enhance) produces a new
    RasterImage instead of mutating an existing one. To make that hold, the
    wrapped array is flagged read-only on construction.

    Attributes:
        data: The underlying numpy array containing image data.
            Shape: (H, W, C) for color images, (H, W) for grayscale.
            Dtype: uint8 (0-255).

    Example:
        >>> import cv2
        >>> image = RasterImage(data=cv2.imread("page.jpg"))
        >>> print(image.width, image.height)  # 4032, 3024
    """

    data: np.ndarray = Field(..., description="Image data as numpy array")

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("data")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is a valid image and freeze it.

        Raises:
            ValueError: If array is not a valid image format.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Image array is empty")

        if len(v.shape) not in (2, 3):
            raise ValueError(
                f"Expected 2D (grayscale) or 3D (color) image, got shape {v.shape}"
            )

        if len(v.shape) == 3 and v.shape[2] not in (1, 3, 4):
            raise ValueError(
                f"Expected 1, 3, or 4 channels for color image, got {v.shape[2]}"
            )

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for image, got {v.dtype}. "
                "Images should be in range [0, 255]"
            )

        if v.flags.writeable:
            v = v.view()
            v.setflags(write=False)

        return v

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get image shape (H, W) or (H, W, C)."""
        return self.data.shape

    @property
    def height(self) -> int:
        """Get image height in pixels."""
        return int(self.data.shape[0])

    @property
    def width(self) -> int:
        """Get image width in pixels."""
        return int(self.data.shape[1])

    @property
    def channels(self) -> int:
        """Get number of channels (1 for grayscale, 3 for BGR, 4 for BGRA)."""
        if len(self.data.shape) == 2:
            return 1
        return int(self.data.shape[2])

    @property
    def area(self) -> int:
        """Get the pixel count (width * height)."""
        return self.width * self.height

    def to_numpy(self) -> np.ndarray:
        """Return the (read-only) image array."""
        return self.data

    def copy(self) -> "RasterImage":
        """Create a deep copy of the image."""
        return RasterImage(data=self.data.copy())

    def __repr__(self) -> str:
        return f"RasterImage(shape={self.shape}, dtype={self.data.dtype})"


class Point(BaseModel):
    """
    A 2D point in native (original, unscaled) image pixel coordinates.

    Coordinates are floating-point and never clamped implicitly; callers
    clamp when they need to (see ``clamped``).

    Example:
        >>> point = Point(x=100.5, y=200)
        >>> point.to_tuple()
        (100.5, 200.0)
    """

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    model_config = {"frozen": True}

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v: Union[int, float]) -> float:
        if isinstance(v, (int, float, np.integer, np.floating)):
            return float(v)
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Point":
        """
        Create Point from numpy array of shape (2,).

        Raises:
            ValueError: If array shape is not (2,).
        """
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    @classmethod
    def from_list(cls, coords: Sequence[float]) -> "Point":
        """Create Point from a sequence [x, y]."""
        if len(coords) != 2:
            raise ValueError(f"Expected list with 2 elements, got {len(coords)}")
        return cls(x=coords[0], y=coords[1])

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert Point to numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=dtype)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def clamped(self, width: float, height: float) -> "Point":
        """Return a copy clamped to the rectangle [0, width] x [0, height]."""
        return Point(
            x=min(max(self.x, 0.0), float(width)),
            y=min(max(self.y, 0.0), float(height)),
        )

    def __add__(self, other: "Point") -> "Point":
        return Point(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(x=self.x - other.x, y=self.y - other.y)

    def __repr__(self) -> str:
        return f"Point(x={self.x:g}, y={self.y:g})"


PointLike = Union[Point, Sequence[float], np.ndarray]


class Quadrilateral(BaseModel):
    """
    Ordered sequence of exactly 4 points.

    The canonical order is [TL, TR, BR, BL]. Construction does not reorder;
    use ``docrectify.geometry.order_quadrilateral`` to canonicalize.

    Example:
        >>> quad = Quadrilateral.from_numpy(np.array([[0, 0], [10, 0], [10, 5], [0, 5]]))
        >>> quad.area()
        50.0
    """

    points: Tuple[Point, Point, Point, Point]

    model_config = {"frozen": True}

    @field_validator("points", mode="before")
    @classmethod
    def _coerce_points(cls, v):
        if isinstance(v, np.ndarray):
            v = v.reshape(-1, 2).tolist()
        v = list(v)
        if len(v) != 4:
            raise ValueError(f"Quadrilateral needs exactly 4 points, got {len(v)}")
        return tuple(p if isinstance(p, Point) else Point.from_list(list(p)) for p in v)

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Quadrilateral":
        """Create from an array reshapeable to (4, 2)."""
        arr = np.asarray(arr, dtype=np.float64).reshape(-1, 2)
        return cls(points=arr)

    @classmethod
    def from_points(cls, points: Sequence[PointLike]) -> "Quadrilateral":
        return cls(points=list(points))

    def to_numpy(self, dtype: type = np.float32) -> np.ndarray:
        """Convert to an array of shape (4, 2)."""
        return np.array([p.to_tuple() for p in self.points], dtype=dtype)

    def to_list(self) -> List[Tuple[float, float]]:
        return [p.to_tuple() for p in self.points]

    def area(self) -> float:
        """Absolute polygon area (shoelace formula)."""
        pts = self.to_numpy(np.float64)
        x, y = pts[:, 0], pts[:, 1]
        return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) / 2.0)

    def replace(self, index: int, point: Point) -> "Quadrilateral":
        """Return a new quadrilateral with the corner at ``index`` replaced."""
        points = list(self.points)
        points[index] = point
        return Quadrilateral(points=points)

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __len__(self) -> int:
        return 4

    def __repr__(self) -> str:
        return f"Quadrilateral({', '.join(repr(p) for p in self.points)})"
