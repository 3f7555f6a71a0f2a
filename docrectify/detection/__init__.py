"""
Document boundary detection.

Multi-stage contour pipeline (edges, then adaptive threshold) with a
bounded-polling readiness gate in front of the vision engine.
"""

from docrectify.detection.boundary_detector import BoundaryDetector
from docrectify.detection.buffers import BufferScope
from docrectify.detection.engine import VisionEngine, opencv_probe
from docrectify.detection.types import DetectionReport, DetectionStage

__all__ = [
    "BoundaryDetector",
    "BufferScope",
    "VisionEngine",
    "opencv_probe",
    "DetectionReport",
    "DetectionStage",
]
