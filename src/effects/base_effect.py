"""
Base effect class for image effects.

Provides common interface and utilities for all effects.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from core.image.pixel_buffer import PixelBuffer


class BaseEffect(ABC):
    """
    Abstract base class for image effects.

    An effect holds only its own validated parameters and maps one
    PixelBuffer to a new PixelBuffer. Parameters are checked eagerly in
    the constructor, never deferred to apply().
    """

    def __init__(self):
        """Initialize base effect with logger."""
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def apply(self, image: PixelBuffer) -> PixelBuffer:
        """
        Apply this effect to an image.

        Args:
            image: Source buffer (left untouched)

        Returns:
            New buffer holding the result, clamped into [0, 255]
        """
        pass

    @property
    def name(self) -> str:
        """Short effect name used in logs and API responses."""
        return self.__class__.__name__

    def _to_buffer(self, values: np.ndarray) -> PixelBuffer:
        """
        Truncate accumulated values toward zero and wrap them in a buffer.

        Args:
            values: Float or integer array of shape (height, width, 3)

        Returns:
            Clamped PixelBuffer
        """
        if values.dtype.kind == "f":
            values = np.trunc(values).astype(np.int64)
        return PixelBuffer(values)

    def __repr__(self) -> str:
        return f"{self.name}()"
