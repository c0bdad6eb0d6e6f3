"""
Image processing operations outside the effect set.

Handles display-side tasks using OpenCV:
- Thumbnail creation
"""

import logging
from typing import Tuple

import cv2

from core.image.converters import from_bgr, to_base64, to_bgr
from core.image.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def create_thumbnail(
    image: PixelBuffer, width: int = 320, maintain_aspect: bool = True
) -> Tuple[PixelBuffer, str]:
    """
    Create thumbnail from image using OpenCV.

    Images narrower than the requested width are returned at their own size.

    Args:
        image: Input buffer
        width: Target width in pixels
        maintain_aspect: If True, maintain aspect ratio

    Returns:
        Tuple of (thumbnail buffer, thumbnail as base64 PNG string)
    """
    try:
        h, w = image.height, image.width

        if w <= width:
            return image, to_base64(image, format="PNG")

        height = max(1, int(width * h / w)) if maintain_aspect else width

        # INTER_AREA is the recommended interpolation for shrinking
        resized = cv2.resize(to_bgr(image), (width, height), interpolation=cv2.INTER_AREA)
        thumbnail = from_bgr(resized)

        return thumbnail, to_base64(thumbnail, format="PNG")

    except Exception as e:
        logger.error(f"Failed to create thumbnail: {e}")
        raise
