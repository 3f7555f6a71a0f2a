"""
Enhancement stage: brightness, contrast and no-crop rotation.
"""

from docrectify.enhancement.enhancer import (
    Enhancer,
    adjust_levels,
    build_levels_lut,
    enhance,
    rotate_image,
    rotated_canvas_size,
)
from docrectify.enhancement.types import EnhancementParams

__all__ = [
    "Enhancer",
    "EnhancementParams",
    "enhance",
    "adjust_levels",
    "build_levels_lut",
    "rotate_image",
    "rotated_canvas_size",
]
