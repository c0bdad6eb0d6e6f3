"""
Image utilities - functional architecture.

This package provides the pixel buffer and focused utilities as pure functions:
- pixel_buffer: PixelBuffer, the immutable image representation
- generators: Synthetic images (stripe pattern, checkerboard)
- converters: Format conversions (OpenCV BGR, encoded bytes, base64)
- processors: Display-side operations (thumbnail)

All utilities are re-exported from this module for convenient access.
"""

# Pixel buffer
from core.image.pixel_buffer import PixelBuffer

# Converter functions
from core.image.converters import (
    decode,
    encode,
    ensure_bgr,
    from_base64,
    from_bgr,
    to_base64,
    to_bgr,
)

# Generator functions
from core.image.generators import create_checkerboard, create_stripe_pattern

# Processor functions
from core.image.processors import create_thumbnail

__all__ = [
    "PixelBuffer",
    # Converter functions
    "decode",
    "encode",
    "ensure_bgr",
    "from_base64",
    "from_bgr",
    "to_base64",
    "to_bgr",
    # Generator functions
    "create_checkerboard",
    "create_stripe_pattern",
    # Processor functions
    "create_thumbnail",
]
