"""
Pixel buffer - the in-memory image representation.

A PixelBuffer is a height x width grid of RGB triples. Channel values are
clamped into [0, 255] on construction and the backing array is read-only,
so buffers can be shared freely between the model and its history stacks.
"""

import logging
from typing import List, Sequence, Union

import numpy as np

from common.constants import ImageConstants
from common.exceptions import InvalidDimensions, OutOfBounds

logger = logging.getLogger(__name__)

GridLike = Union[np.ndarray, Sequence[Sequence[Sequence[int]]]]


def _validate_nested(data: Sequence) -> None:
    """Check a nested-sequence grid for emptiness, ragged rows and channel count."""
    try:
        height = len(data)
        width = len(data[0]) if height else 0
    except TypeError:
        raise InvalidDimensions("Pixel grid must be a 3D sequence")

    if height == 0 or width == 0:
        raise InvalidDimensions("Pixel grid must have nonzero dimensions")

    for y, row in enumerate(data):
        try:
            row_width = len(row)
        except TypeError:
            raise InvalidDimensions(f"Row {y} is not a sequence")
        if row_width != width:
            raise InvalidDimensions(
                "Pixel grid has inconsistent dimensions",
                details={"row": y, "expected": width, "actual": row_width},
            )
        for x, pixel in enumerate(row):
            try:
                channels = len(pixel)
            except TypeError:
                raise InvalidDimensions(f"Pixel ({x}, {y}) is not a sequence")
            if channels != ImageConstants.NUM_CHANNELS:
                raise InvalidDimensions(
                    "Invalid number of channels",
                    details={"x": x, "y": y, "channels": channels},
                )


class PixelBuffer:
    """
    Immutable 3-channel image.

    Construction validates the grid shape and clamps every channel into
    [0, 255]. Effects never mutate a buffer; they build a new one.
    """

    __slots__ = ("_data",)

    def __init__(self, data: GridLike):
        """
        Create a pixel buffer from a raw grid.

        Args:
            data: Nested sequences indexed [y][x][channel], or a NumPy array
                of shape (height, width, 3). Float values are truncated
                toward zero before clamping.

        Raises:
            InvalidDimensions: If the grid is empty, ragged, or a pixel does
                not have exactly 3 channels
        """
        if data is None:
            raise InvalidDimensions("Pixel grid cannot be None")

        if isinstance(data, np.ndarray):
            array = data
            if array.ndim != 3 or array.shape[0] == 0 or array.shape[1] == 0:
                raise InvalidDimensions(
                    "Pixel grid must have nonzero dimensions",
                    details={"shape": list(array.shape)},
                )
            if array.shape[2] != ImageConstants.NUM_CHANNELS:
                raise InvalidDimensions(
                    "Invalid number of channels", details={"shape": list(array.shape)}
                )
        else:
            _validate_nested(data)
            try:
                array = np.asarray(data)
            except ValueError:
                raise InvalidDimensions("Pixel channels must be scalar values")
            if array.ndim != 3:
                raise InvalidDimensions(
                    "Pixel channels must be scalar values", details={"shape": list(array.shape)}
                )

        if array.dtype.kind == "f":
            array = np.trunc(array)
        elif array.dtype.kind not in "iub":
            raise InvalidDimensions(f"Unsupported pixel dtype: {array.dtype}")

        clamped = np.clip(array, ImageConstants.MIN_VAL, ImageConstants.MAX_VAL).astype(
            np.uint8
        )
        clamped.flags.writeable = False
        self._data = clamped

    @classmethod
    def filled(cls, width: int, height: int, color: Sequence[int]) -> "PixelBuffer":
        """Create a buffer of a single color."""
        if width <= 0 or height <= 0:
            raise InvalidDimensions(
                "Image dimensions must be positive", details={"width": width, "height": height}
            )
        grid = np.empty((height, width, ImageConstants.NUM_CHANNELS), dtype=np.int64)
        grid[:, :] = color
        return cls(grid)

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def shape(self):
        return self._data.shape

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the pixel data, shape (height, width, 3), dtype uint8."""
        return self._data

    def get_value(self, x: int, y: int, channel: int) -> int:
        """
        Get a single channel value.

        Raises:
            OutOfBounds: If (x, y) is outside the image or channel is not 0-2
        """
        if not self.is_valid_location(x, y) or not 0 <= channel < ImageConstants.NUM_CHANNELS:
            raise OutOfBounds(x, y, self.width, self.height)
        return int(self._data[y, x, channel])

    def get_pixel(self, x: int, y: int) -> tuple:
        """Get the (r, g, b) triple at (x, y)."""
        if not self.is_valid_location(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return tuple(int(v) for v in self._data[y, x])

    def is_valid_location(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def copy_data(self) -> np.ndarray:
        """Return an independent, writable copy of the grid."""
        return self._data.copy()

    def to_list(self) -> List[List[List[int]]]:
        """Return the grid as nested lists indexed [y][x][channel]."""
        return self._data.tolist()

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __hash__(self):
        return hash((self._data.shape, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
