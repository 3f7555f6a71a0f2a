"""
Data types for the Detection module.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from docrectify.common.types import Quadrilateral


class DetectionStage(Enum):
    """Pipeline stage that produced the boundary."""

    EDGES = "edges"  # Stage A: Canny + dilate
    THRESHOLD = "threshold"  # Stage B: adaptive threshold fallback
    NONE = "none"  # Nothing usable found (or detection failed)


@dataclass
class DetectionReport:
    """
    Diagnostic output of one detection run.

    Attributes:
        quadrilateral: Canonically ordered boundary in native pixel
            coordinates, or None when no usable boundary was found.
        stage: Stage that produced the boundary.
        scale: Downscale factor applied before detection (1.0 = none).
        rotated_rect_fallback: True when no 4-vertex approximation existed
            and the minimum-area rotated rectangle was used instead.
        error: Message of an absorbed failure, if any.
    """

    quadrilateral: Optional[Quadrilateral]
    stage: DetectionStage
    scale: float = 1.0
    rotated_rect_fallback: bool = False
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.quadrilateral is not None
