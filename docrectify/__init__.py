"""
docrectify: document boundary detection and perspective rectification.

Turns photographed pages into clean, upright document images:
1. Boundary detection (edge stage, then adaptive threshold fallback)
2. Interactive correction (corner drags, pan, zoom)
3. Perspective rectification or brightness/contrast/rotation enhancement
"""

from docrectify.common.errors import (
    DecodeFailure,
    DocRectifyError,
    EngineUnavailable,
    GeometryDegenerate,
)
from docrectify.common.types import Point, Quadrilateral, RasterImage
from docrectify.config_loader import load_config
from docrectify.detection import BoundaryDetector
from docrectify.editor import CorrectionController, ImageLayout, Tool
from docrectify.enhancement import EnhancementParams, Enhancer, enhance
from docrectify.geometry import default_quadrilateral, order_quadrilateral
from docrectify.rectification import Rectifier, rectify


def detect(image: RasterImage):
    """Detect the document boundary of ``image`` (None if nothing usable is found)."""
    return BoundaryDetector().detect(image)


__all__ = [
    "detect",
    "rectify",
    "enhance",
    "load_config",
    "BoundaryDetector",
    "Rectifier",
    "Enhancer",
    "EnhancementParams",
    "CorrectionController",
    "ImageLayout",
    "Tool",
    "Point",
    "Quadrilateral",
    "RasterImage",
    "order_quadrilateral",
    "default_quadrilateral",
    "DocRectifyError",
    "EngineUnavailable",
    "DecodeFailure",
    "GeometryDegenerate",
]
