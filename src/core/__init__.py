"""
Core modules for the image effect engine
"""

from .image.pixel_buffer import PixelBuffer
from .image_model import VersionedImageModel
from .image_store import ImageStore

__all__ = [
    "PixelBuffer",
    "VersionedImageModel",
    "ImageStore",
]
