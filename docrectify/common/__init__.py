"""
Common types and errors shared across all modules.

This module provides the standardized data types of the rectification core,
ensuring consistency across detection, rectification, enhancement and the
interactive editor.
"""

from docrectify.common.errors import (
    DecodeFailure,
    DocRectifyError,
    EngineUnavailable,
    GeometryDegenerate,
)
from docrectify.common.types import Point, PointLike, Quadrilateral, RasterImage

__all__ = [
    "RasterImage",
    "Point",
    "PointLike",
    "Quadrilateral",
    "DocRectifyError",
    "EngineUnavailable",
    "DecodeFailure",
    "GeometryDegenerate",
]
