"""
Perspective rectification: quadrilateral region to upright rectangle.
"""

from docrectify.rectification.rectifier import Rectifier, rectify

__all__ = ["Rectifier", "rectify"]
