"""
Unit tests for the configuration loader.
"""

import tempfile
from pathlib import Path

import pytest
import yaml

from docrectify.config_loader import DEFAULT_CONFIG_PATH, load_config


def _write_config(tmp_dir: str, raw: dict) -> Path:
    path = Path(tmp_dir) / "config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(raw, f)
    return path


def _default_raw() -> dict:
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class TestLoadConfig:
    """Test suite for load_config."""

    def test_load_default_config(self):
        """Test loading the bundled config.yaml."""
        config = load_config()

        assert config.detection.max_dimension == 800
        assert config.detection.blur_kernel_size == 5
        assert (config.detection.canny_low, config.detection.canny_high) == (50, 150)
        assert config.detection.min_area_ratio == pytest.approx(0.01)
        assert config.detection.approx_epsilon_ratio == pytest.approx(0.02)
        assert config.detection.adaptive_block_size == 11
        assert config.detection.adaptive_c == 2
        assert config.detection.default_inset == pytest.approx(0.1)
        assert config.engine.retry_interval_s == pytest.approx(0.1)
        assert config.engine.max_retries == 300
        assert config.enhancement.background == (255, 255, 255)
        assert config.editor.handle_radius_px == pytest.approx(25.0)
        assert config.editor.zoom_min == pytest.approx(0.2)
        assert config.editor.zoom_max == pytest.approx(5.0)
        assert config.editor.zoom_step == pytest.approx(0.2)

    def test_load_custom_config(self):
        """Test loading a config with overridden values."""
        raw = _default_raw()
        raw["detection"]["max_dimension"] = 1200
        raw["editor"]["handle_radius_px"] = 40

        with tempfile.TemporaryDirectory() as tmp_dir:
            config = load_config(_write_config(tmp_dir, raw))

        assert config.detection.max_dimension == 1200
        assert config.editor.handle_radius_px == pytest.approx(40.0)

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(Path("/nonexistent/config.yaml"))

    def test_missing_section(self):
        raw = _default_raw()
        del raw["engine"]

        with tempfile.TemporaryDirectory() as tmp_dir:
            with pytest.raises(ValueError, match="Invalid configuration file"):
                load_config(_write_config(tmp_dir, raw))

    @pytest.mark.parametrize(
        "section, key, value",
        [
            ("detection", "blur_kernel_size", 4),
            ("detection", "adaptive_block_size", 1),
            ("detection", "canny_low", 200),
            ("detection", "min_area_ratio", 1.5),
            ("detection", "default_inset", 0.5),
            ("engine", "max_retries", -1),
            ("editor", "zoom_min", 2.0),
            ("editor", "zoom_step", 0),
            ("editor", "default_inset", 0.5),
            ("enhancement", "background", [255, 255]),
        ],
    )
    def test_invalid_values(self, section, key, value):
        """Test that inconsistent values are rejected."""
        raw = _default_raw()
        raw[section][key] = value

        with tempfile.TemporaryDirectory() as tmp_dir:
            with pytest.raises(ValueError, match="Invalid configuration file"):
                load_config(_write_config(tmp_dir, raw))
