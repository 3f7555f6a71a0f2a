"""
Data types for the Enhancement module.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_BRIGHTNESS = 100
DEFAULT_CONTRAST = 100


class EnhancementParams(BaseModel):
    """
    Brightness / contrast / rotation settings of one enhancement.

    Attributes:
        brightness: Percent, 100 = identity.
        contrast: Percent, 100 = identity.
        rotation_degrees: Clockwise rotation, a multiple of 90. Accumulates
            across repeated rotations (e.g. four +90 steps give 360).
    """

    brightness: int = Field(DEFAULT_BRIGHTNESS, ge=0, le=200)
    contrast: int = Field(DEFAULT_CONTRAST, ge=0, le=200)
    rotation_degrees: int = 0

    model_config = {"frozen": True}

    @field_validator("rotation_degrees")
    @classmethod
    def _validate_rotation(cls, v: int) -> int:
        if v % 90 != 0:
            raise ValueError(f"rotation_degrees must be a multiple of 90, got {v}")
        return v

    def is_default(self) -> bool:
        """True when no field differs from its default."""
        return (
            self.brightness == DEFAULT_BRIGHTNESS
            and self.contrast == DEFAULT_CONTRAST
            and self.rotation_degrees == 0
        )

    def rotated(self, delta: int) -> "EnhancementParams":
        """Return params with ``delta`` degrees added to the rotation."""
        return EnhancementParams(
            brightness=self.brightness,
            contrast=self.contrast,
            rotation_degrees=self.rotation_degrees + delta,
        )

    def with_levels(
        self, brightness: Optional[int] = None, contrast: Optional[int] = None
    ) -> "EnhancementParams":
        """Return params with brightness and/or contrast replaced."""
        return EnhancementParams(
            brightness=self.brightness if brightness is None else brightness,
            contrast=self.contrast if contrast is None else contrast,
            rotation_degrees=self.rotation_degrees,
        )
