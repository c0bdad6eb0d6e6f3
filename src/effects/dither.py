"""
Error-diffusion dithering.

The image is reduced to luma, then quantized to black or white in raster
order while the quantization error is pushed onto the neighbors that have
not been visited yet (Floyd-Steinberg weights 7/16, 5/16, 3/16, 1/16).
"""

from typing import List

import numpy as np

from common.constants import EffectConstants, ImageConstants
from common.enums import DitherMode
from core.image.pixel_buffer import PixelBuffer
from effects.base_effect import BaseEffect
from effects.presets import GREYSCALE


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


class Ditherer(BaseEffect):
    """Two-level error-diffusion ditherer."""

    def __init__(self, mode: DitherMode = DitherMode.TRUNCATE):
        """
        Initialize ditherer.

        Args:
            mode: TRUNCATE reproduces round(intensity / 255) evaluated with
                integer division, so only intensities of 255 and above turn
                white. THRESHOLD turns intensities of 128 and above white.
        """
        super().__init__()
        self.mode = DitherMode(mode)

    def _quantize(self, intensity: int) -> int:
        top = ImageConstants.MAX_VAL
        if self.mode == DitherMode.THRESHOLD:
            return top if intensity >= EffectConstants.DITHER_THRESHOLD else 0
        return top if _trunc_div(intensity, top) >= 1 else 0

    def diffuse(self, intensities: List[List[int]]) -> List[List[int]]:
        """
        Quantize a single-channel grid in place, diffusing the error.

        Values are left unclamped; neighbors may go below 0 or above 255
        until the final buffer is built.

        Args:
            intensities: Grid indexed [y][x]

        Returns:
            The same grid, now holding only quantized values
        """
        h = len(intensities)
        w = len(intensities[0])
        for y in range(h):
            row = intensities[y]
            below = intensities[y + 1] if y + 1 < h else None
            for x in range(w):
                old = row[x]
                new = self._quantize(old)
                error = old - new
                row[x] = new

                if x + 1 < w:
                    row[x + 1] += _trunc_div(error * 7, 16)
                if below is not None:
                    below[x] += _trunc_div(error * 5, 16)
                    if x - 1 >= 0:
                        below[x - 1] += _trunc_div(error * 3, 16)
                    if x + 1 < w:
                        below[x + 1] += _trunc_div(error, 16)
        return intensities

    def apply(self, image: PixelBuffer) -> PixelBuffer:
        # Greyscale rows are identical, so one channel carries all three
        grey = GREYSCALE.apply(image)
        intensities = grey.array[:, :, 0].astype(np.int64).tolist()

        dithered = np.array(self.diffuse(intensities), dtype=np.int64)

        self.logger.debug(
            f"Dithered {image.width}x{image.height} image (mode={self.mode.value})"
        )
        return PixelBuffer(np.repeat(dithered[:, :, np.newaxis], 3, axis=2))

    def __repr__(self) -> str:
        return f"{self.name}(mode={self.mode.value})"
