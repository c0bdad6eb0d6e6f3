"""
Synthetic image generators.

Provides pure functions that build a PixelBuffer from a few parameters:
- create_stripe_pattern: seven spectrum-colored bands (a "rainbow")
- create_checkerboard: fixed 8x8-tile black and white board
"""

import logging
import math

import numpy as np

from common.constants import Colors, GeneratorConstants, ImageConstants
from common.exceptions import InvalidDimensions
from core.image.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def create_stripe_pattern(width: int, height: int, horizontal: bool = True) -> PixelBuffer:
    """
    Create an image of seven spectrum-colored stripes.

    The striped dimension (height for horizontal stripes, width for
    vertical ones) is cut into bands of ceil(dimension / 7) pixels, colored
    red, orange, yellow, green, blue, indigo, violet in order. The last band
    is thinner when the dimension is not a multiple of 7.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        horizontal: True for horizontal stripes, False for vertical

    Returns:
        Stripe pattern buffer

    Raises:
        InvalidDimensions: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensions(
            "Image dimensions must be positive", details={"width": width, "height": height}
        )

    colors = np.array(GeneratorConstants.RAINBOW_COLORS, dtype=np.int64)
    dimension = height if horizontal else width
    band = math.ceil(dimension / len(colors))

    band_index = np.arange(dimension) // band
    band_colors = colors[band_index]

    img = np.empty((height, width, ImageConstants.NUM_CHANNELS), dtype=np.int64)
    if horizontal:
        img[:, :] = band_colors[:, np.newaxis, :]
    else:
        img[:, :] = band_colors[np.newaxis, :, :]

    logger.debug(
        f"Created {'horizontal' if horizontal else 'vertical'} stripe pattern "
        f"{width}x{height}, band size {band}"
    )
    return PixelBuffer(img)


def create_checkerboard(tile_size: int) -> PixelBuffer:
    """
    Create an 8x8-tile checkerboard.

    Tile (i, j) is white when (i + j) is even and black otherwise, so the
    top-left tile is white.

    Args:
        tile_size: Tile side length in pixels

    Returns:
        Square buffer of side 8 * tile_size

    Raises:
        InvalidDimensions: If tile_size is not positive
    """
    if tile_size <= 0:
        raise InvalidDimensions("Tile size must be positive", details={"tile_size": tile_size})

    side = tile_size * GeneratorConstants.CHECKER_TILES_PER_SIDE
    tiles = np.arange(side) // tile_size
    odd = (tiles[:, np.newaxis] + tiles[np.newaxis, :]) % 2 == 1

    img = np.empty((side, side, ImageConstants.NUM_CHANNELS), dtype=np.int64)
    img[:, :] = Colors.WHITE
    img[odd] = Colors.BLACK

    logger.debug(f"Created checkerboard {side}x{side}, tile size {tile_size}")
    return PixelBuffer(img)
