"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import cv2
import numpy as np
import pytest

from docrectify.common.config import (
    DetectionConfig,
    EditorConfig,
    EngineConfig,
    EnhancementConfig,
    RectificationConfig,
)
from docrectify.common.types import Quadrilateral, RasterImage
from docrectify.detection.boundary_detector import BoundaryDetector
from docrectify.detection.engine import VisionEngine
from docrectify.editor.types import ImageLayout


@pytest.fixture
def page_quad():
    """Corners of the page drawn by ``page_image``."""
    return Quadrilateral(points=[(100, 80), (900, 80), (900, 720), (100, 720)])


@pytest.fixture
def page_image():
    """1000x800 black image with a white page from (100, 80) to (900, 720)."""
    image = np.zeros((800, 1000, 3), dtype=np.uint8)
    cv2.rectangle(image, (100, 80), (900, 720), (255, 255, 255), thickness=-1)
    return RasterImage(data=image)


@pytest.fixture
def uniform_image():
    """Uniform gray image without any structure."""
    return RasterImage(data=np.full((600, 800, 3), 128, dtype=np.uint8))


@pytest.fixture
def gradient_image():
    """Small BGR image whose pixels are all distinct enough to spot moves."""
    h, w = 60, 90
    ys, xs = np.mgrid[0:h, 0:w]
    data = np.dstack(
        [(xs * 2) % 256, (ys * 3) % 256, ((xs + ys) * 5) % 256]
    ).astype(np.uint8)
    return RasterImage(data=data)


@pytest.fixture
def ready_engine():
    """Engine gate whose probe always succeeds and never sleeps."""
    return VisionEngine(EngineConfig(), probe=lambda: True, sleep=lambda _: None)


@pytest.fixture
def detector(ready_engine):
    """Boundary detector with default tunables."""
    return BoundaryDetector(config=DetectionConfig(), engine=ready_engine)


@pytest.fixture
def rectification_config():
    return RectificationConfig()


@pytest.fixture
def enhancement_config():
    return EnhancementConfig()


@pytest.fixture
def editor_config():
    return EditorConfig()


@pytest.fixture
def layout():
    """The 1000x800 page shown at half size, offset by (10, 20) on screen."""
    return ImageLayout(
        left=10, top=20, displayed_width=500, natural_width=1000, natural_height=800
    )
