"""
Centralized enums for the image effect engine.

This module contains all enumeration types used throughout the system,
providing a single source of truth for enum definitions.
"""

from enum import Enum
from typing import Optional


# Effect enums
class EffectType(str, Enum):
    """Named effects the editor can apply."""

    BLUR = "blur"
    SHARPEN = "sharpen"
    GREYSCALE = "greyscale"
    SEPIA = "sepia"
    DITHER = "dither"
    MOSAIC = "mosaic"

    @classmethod
    def parse(cls, value) -> Optional["EffectType"]:
        """Resolve a member or a case-insensitive effect name; None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            return None


class DitherMode(str, Enum):
    """Quantizer used by the ditherer."""

    # trunc(intensity / 255) rounded; only intensities >= 255 map to white
    TRUNCATE = "truncate"
    # intensity >= 128 maps to white
    THRESHOLD = "threshold"


# Generator enums
class PatternType(str, Enum):
    """Synthetic image generators."""

    RAINBOW = "rainbow"
    CHECKERBOARD = "checkerboard"
