"""
Interactive correction editor: tool state, corner drags, pan, zoom and save.
"""

from docrectify.editor.controller import CorrectionController
from docrectify.editor.types import (
    DragMode,
    DragSession,
    ImageLayout,
    Tool,
    ViewportState,
)

__all__ = [
    "CorrectionController",
    "Tool",
    "DragMode",
    "DragSession",
    "ImageLayout",
    "ViewportState",
]
