"""
Configuration dataclasses for the rectification core.

Provides type-safe, immutable containers populated by
``docrectify.config_loader``. Instances are shared between components, so
they are frozen; use ``dataclasses.replace`` to derive a variant.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class DetectionConfig:
    """Tunables of the boundary detector."""

    max_dimension: int = 800  # Longer side after downscaling
    blur_kernel_size: int = 5
    canny_low: int = 50
    canny_high: int = 150
    dilate_kernel_size: int = 3
    min_area_ratio: float = 0.01  # Of the downscaled image area
    approx_epsilon_ratio: float = 0.02  # Of the contour perimeter
    adaptive_block_size: int = 11
    adaptive_c: int = 2
    default_inset: float = 0.1  # Fallback quadrilateral inset


@dataclass(frozen=True)
class EngineConfig:
    """Readiness polling of the vision engine."""

    retry_interval_s: float = 0.1
    max_retries: int = 300


@dataclass(frozen=True)
class RectificationConfig:
    """Limits below which a quadrilateral is considered degenerate."""

    min_area: float = 1.0
    min_extent: float = 1.0
    border_value: int = 0


@dataclass(frozen=True)
class EnhancementConfig:
    """Rendering options of the enhancement stage."""

    background: Tuple[int, int, int] = (255, 255, 255)


@dataclass(frozen=True)
class EditorConfig:
    """Interactive editor behaviour."""

    handle_radius_px: float = 25.0
    zoom_min: float = 0.2
    zoom_max: float = 5.0
    zoom_step: float = 0.2
    default_inset: float = 0.1


@dataclass(frozen=True)
class DocRectifyConfig:
    """Complete configuration."""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    rectification: RectificationConfig = field(default_factory=RectificationConfig)
    enhancement: EnhancementConfig = field(default_factory=EnhancementConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
