"""
Data types for the interactive correction editor.

Screen coordinates are (x, y) tuples in display pixels; native coordinates
are Points in original image pixels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from docrectify.common.types import Point, Quadrilateral

ScreenPoint = Tuple[float, float]


class Tool(Enum):
    """Active editor tool."""

    NONE = "none"
    CROP = "crop"
    ADJUST = "adjust"


class DragMode(Enum):
    """What a pointer drag currently does."""

    IDLE = "idle"
    DRAGGING_CORNER = "dragging_corner"
    PANNING = "panning"


@dataclass(frozen=True)
class ViewportState:
    """
    Display-only view state.

    Zoom scales the displayed image; it never changes stored native
    coordinates, only how screen positions map back to them.
    """

    zoom: float = 1.0
    scroll_offset: ScreenPoint = (0.0, 0.0)


@dataclass(frozen=True)
class ImageLayout:
    """
    Where the image currently sits on screen.

    Supplied with every pointer event so conversions always use the live
    display/native ratio (the displayed size changes with zoom).

    Attributes:
        left: Screen x of the displayed image's left edge.
        top: Screen y of the displayed image's top edge.
        displayed_width: On-screen width of the image in pixels.
        natural_width: Native image width.
        natural_height: Native image height.
    """

    left: float
    top: float
    displayed_width: float
    natural_width: float
    natural_height: float

    @property
    def screen_scale(self) -> float:
        """Screen pixels per native pixel."""
        return self.displayed_width / self.natural_width

    @property
    def native_scale(self) -> float:
        """Native pixels per screen pixel."""
        return self.natural_width / self.displayed_width

    def to_screen(self, point: Point) -> ScreenPoint:
        """Native image position -> screen position."""
        scale = self.screen_scale
        return (point.x * scale + self.left, point.y * scale + self.top)


@dataclass(frozen=True)
class DragSession:
    """
    Transient state of one pointer drag, from pointer-down to pointer-up.

    Attributes:
        mode: Corner drag or pan.
        start: Pointer screen position at pointer-down.
        corner_index: Index of the dragged corner (corner drags only).
        quad_snapshot: Quadrilateral at drag start (corner drags only).
        scroll_snapshot: Scroll offset at drag start (pans only).
    """

    mode: DragMode
    start: ScreenPoint
    corner_index: Optional[int] = None
    quad_snapshot: Optional[Quadrilateral] = None
    scroll_snapshot: Optional[ScreenPoint] = None
