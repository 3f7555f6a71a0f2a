"""
Configuration loader for docrectify.

Loads and validates configuration from config.yaml file.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml

from docrectify.common.config import (
    DetectionConfig,
    DocRectifyConfig,
    EditorConfig,
    EngineConfig,
    EnhancementConfig,
    RectificationConfig,
)

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> DocRectifyConfig:
    """
    Load docrectify configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated DocRectifyConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.detection.max_dimension)
        800
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading docrectify config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded docrectify configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


@lru_cache(maxsize=1)
def default_config() -> DocRectifyConfig:
    """Load the bundled configuration once per process."""
    return load_config()


def _parse_config(raw: Dict[str, Any]) -> DocRectifyConfig:
    """Parse raw dictionary into structured config objects."""
    det = raw["detection"]
    eng = raw["engine"]
    rect = raw["rectification"]
    enh = raw["enhancement"]
    edit = raw["editor"]

    background = tuple(int(c) for c in enh["background"])
    if len(background) != 3:
        raise ValueError(f"background must have 3 components, got {background}")

    return DocRectifyConfig(
        detection=DetectionConfig(
            max_dimension=int(det["max_dimension"]),
            blur_kernel_size=int(det["blur_kernel_size"]),
            canny_low=int(det["canny_low"]),
            canny_high=int(det["canny_high"]),
            dilate_kernel_size=int(det["dilate_kernel_size"]),
            min_area_ratio=float(det["min_area_ratio"]),
            approx_epsilon_ratio=float(det["approx_epsilon_ratio"]),
            adaptive_block_size=int(det["adaptive_block_size"]),
            adaptive_c=int(det["adaptive_c"]),
            default_inset=float(det["default_inset"]),
        ),
        engine=EngineConfig(
            retry_interval_s=float(eng["retry_interval_s"]),
            max_retries=int(eng["max_retries"]),
        ),
        rectification=RectificationConfig(
            min_area=float(rect["min_area"]),
            min_extent=float(rect["min_extent"]),
            border_value=int(rect["border_value"]),
        ),
        enhancement=EnhancementConfig(background=background),
        editor=EditorConfig(
            handle_radius_px=float(edit["handle_radius_px"]),
            zoom_min=float(edit["zoom_min"]),
            zoom_max=float(edit["zoom_max"]),
            zoom_step=float(edit["zoom_step"]),
            default_inset=float(edit["default_inset"]),
        ),
    )


def _validate_config(config: DocRectifyConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    det = config.detection

    if det.max_dimension < 1:
        raise ValueError("max_dimension must be at least 1")

    # OpenCV requires odd kernel / block sizes
    if det.blur_kernel_size < 1 or det.blur_kernel_size % 2 == 0:
        raise ValueError(
            f"blur_kernel_size must be a positive odd number, got {det.blur_kernel_size}"
        )
    if det.adaptive_block_size < 3 or det.adaptive_block_size % 2 == 0:
        raise ValueError(
            "adaptive_block_size must be an odd number >= 3, "
            f"got {det.adaptive_block_size}"
        )

    if det.dilate_kernel_size < 1:
        raise ValueError("dilate_kernel_size must be at least 1")

    if not 0 <= det.canny_low < det.canny_high:
        raise ValueError(
            f"canny thresholds must satisfy 0 <= low < high, "
            f"got low={det.canny_low}, high={det.canny_high}"
        )

    if not 0 < det.min_area_ratio < 1:
        raise ValueError("min_area_ratio must be in (0, 1)")

    if det.approx_epsilon_ratio <= 0:
        raise ValueError("approx_epsilon_ratio must be positive")

    if not 0 <= det.default_inset < 0.5:
        raise ValueError("detection default_inset must be in [0, 0.5)")

    if config.engine.retry_interval_s < 0:
        raise ValueError("retry_interval_s cannot be negative")
    if config.engine.max_retries < 0:
        raise ValueError("max_retries cannot be negative")

    if config.rectification.min_area < 0 or config.rectification.min_extent < 0:
        raise ValueError("rectification limits cannot be negative")

    if any(not 0 <= c <= 255 for c in config.enhancement.background):
        raise ValueError("background components must be in [0, 255]")

    edit = config.editor
    if edit.handle_radius_px <= 0:
        raise ValueError("handle_radius_px must be positive")
    if not 0 < edit.zoom_min <= 1.0 <= edit.zoom_max:
        raise ValueError(
            f"zoom bounds must satisfy 0 < min <= 1 <= max, "
            f"got [{edit.zoom_min}, {edit.zoom_max}]"
        )
    if edit.zoom_step <= 0:
        raise ValueError("zoom_step must be positive")
    if not 0 <= edit.default_inset < 0.5:
        raise ValueError("default_inset must be in [0, 0.5)")

    logger.debug("Configuration validation passed")
