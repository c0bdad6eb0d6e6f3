"""
Color matrix transform.

Each output channel is a linear combination of the input pixel's own
channels: out[o] = sum_c matrix[o][c] * in[c], truncated toward zero.
"""

from typing import Sequence

import numpy as np

from common.constants import ImageConstants
from common.exceptions import InvalidMatrix
from core.image.pixel_buffer import PixelBuffer
from effects.base_effect import BaseEffect


class ColorTransform(BaseEffect):
    """Per-pixel 3x3 color matrix."""

    def __init__(self, matrix: Sequence[Sequence[float]], name: str = "ColorTransform"):
        """
        Initialize transform.

        Args:
            matrix: 3 rows of 3 weights, row = output channel
            name: Display name (presets pass "Greyscale" / "Sepia")

        Raises:
            InvalidMatrix: Unless the matrix is exactly 3x3
        """
        super().__init__()
        n = ImageConstants.NUM_CHANNELS
        if matrix is None:
            raise InvalidMatrix("Matrix cannot be None")
        if len(matrix) != n or any(len(row) != n for row in matrix):
            raise InvalidMatrix(f"Matrix must be {n} by {n}")

        self._matrix = np.array(matrix, dtype=np.float64)
        self._matrix.flags.writeable = False
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    def transform_array(self, pixels: np.ndarray) -> np.ndarray:
        """
        Apply the matrix to a raw (height, width, 3) array.

        Returns:
            Integer array truncated toward zero, not clamped
        """
        source = pixels.astype(np.float64)
        out = np.zeros(source.shape, dtype=np.float64)
        for o in range(ImageConstants.NUM_CHANNELS):
            for c in range(ImageConstants.NUM_CHANNELS):
                out[..., o] += source[..., c] * self._matrix[o, c]
        return np.trunc(out).astype(np.int64)

    def apply(self, image: PixelBuffer) -> PixelBuffer:
        self.logger.debug(f"{self.name}: transforming {image.width}x{image.height} image")
        return PixelBuffer(self.transform_array(image.array))
