"""
Kernel convolution filter.

Each output channel is the weighted sum of the pixels under a square kernel
centered on it. Kernel taps falling outside the image are left out of the
sum (no renormalization), the sum is truncated toward zero and clamped.
"""

from typing import Sequence

import numpy as np

from common.exceptions import InvalidKernel
from core.image.pixel_buffer import PixelBuffer
from effects.base_effect import BaseEffect


class ConvolutionFilter(BaseEffect):
    """Filter that convolves every channel with a fixed kernel."""

    def __init__(self, kernel: Sequence[Sequence[float]], name: str = "ConvolutionFilter"):
        """
        Initialize filter.

        Args:
            kernel: Matrix of weights with odd height and width
            name: Display name (presets pass "Blur" / "Sharpen")

        Raises:
            InvalidKernel: If the kernel is empty, has an even dimension,
                or has rows of inconsistent length
        """
        super().__init__()
        if kernel is None:
            raise InvalidKernel("Kernel cannot be None")
        if len(kernel) == 0 or len(kernel[0]) == 0:
            raise InvalidKernel("Kernel must have nonzero dimensions")

        height = len(kernel)
        width = len(kernel[0])
        if height % 2 == 0 or width % 2 == 0:
            raise InvalidKernel(
                "Kernel must have odd dimensions", details={"width": width, "height": height}
            )
        if any(len(row) != width for row in kernel):
            raise InvalidKernel("Kernel dimensions must be consistent")

        self._kernel = np.array(kernel, dtype=np.float64)
        self._kernel.flags.writeable = False
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def kernel(self) -> np.ndarray:
        return self._kernel

    @property
    def size(self) -> tuple:
        """Kernel (height, width)."""
        return tuple(int(n) for n in self._kernel.shape)

    def apply(self, image: PixelBuffer) -> PixelBuffer:
        h, w = image.height, image.width
        k_h, k_w = self.size
        r_y, r_x = k_h // 2, k_w // 2

        # Zero padding contributes exactly nothing to the sum, which matches
        # skipping taps that fall outside the image.
        padded = np.pad(
            image.array.astype(np.float64),
            ((r_y, r_y), (r_x, r_x), (0, 0)),
            mode="constant",
            constant_values=0,
        )

        # Accumulate taps in row-major kernel order
        acc = np.zeros((h, w, 3), dtype=np.float64)
        for ky in range(k_h):
            for kx in range(k_w):
                weight = self._kernel[ky, kx]
                acc += padded[ky : ky + h, kx : kx + w] * weight

        self.logger.debug(f"{self.name}: convolved {w}x{h} image with {k_h}x{k_w} kernel")
        return self._to_buffer(acc)

    def __repr__(self) -> str:
        return f"{self.name}(size={self.size[0]}x{self.size[1]})"
