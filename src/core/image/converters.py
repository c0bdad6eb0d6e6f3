"""
Image format conversion utilities.

Handles conversions between PixelBuffer and external formats using OpenCV:
- NumPy arrays (OpenCV BGR format)
- Encoded bytes (PNG, JPEG, ...)
- Base64 encoded strings
"""

import base64
import logging
from typing import Union

import cv2
import numpy as np

from common.exceptions import ImageIOError
from core.image.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


def ensure_bgr(image: np.ndarray) -> np.ndarray:
    """
    Ensure image is 3-channel BGR (convert from grayscale or BGRA if needed).

    Args:
        image: Input image (grayscale, BGR or BGRA)

    Returns:
        Image in BGR format
    """
    if len(image.shape) == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image.copy()


def to_bgr(buffer: PixelBuffer) -> np.ndarray:
    """Convert a PixelBuffer (RGB) to an OpenCV BGR uint8 array."""
    return np.ascontiguousarray(buffer.array[:, :, ::-1])


def from_bgr(image: np.ndarray) -> PixelBuffer:
    """Convert an OpenCV image (grayscale, BGR or BGRA) to a PixelBuffer."""
    if image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)
    return PixelBuffer(cv2.cvtColor(ensure_bgr(image), cv2.COLOR_BGR2RGB))


def encode(buffer: PixelBuffer, format: str = ".png", quality: int = 95) -> bytes:
    """
    Encode a buffer to image file bytes.

    Args:
        buffer: Image to encode
        format: File extension (".png", "jpg", ...)
        quality: JPEG quality (1-100, ignored for other formats)

    Returns:
        Encoded bytes

    Raises:
        ImageIOError: If OpenCV cannot encode the format
    """
    ext = format.lower() if format.startswith(".") else f".{format.lower()}"
    params = [cv2.IMWRITE_JPEG_QUALITY, quality] if ext in [".jpg", ".jpeg"] else []

    try:
        success, data = cv2.imencode(ext, to_bgr(buffer), params)
    except cv2.error as e:
        raise ImageIOError(ext, str(e))

    if not success:
        raise ImageIOError(ext, "encoder reported failure")
    return data.tobytes()


def decode(data: bytes, source: str = "<bytes>") -> PixelBuffer:
    """
    Decode image file bytes into a buffer.

    Args:
        data: Encoded image bytes
        source: Name used in error messages

    Raises:
        ImageIOError: If the bytes are not a readable image
    """
    image = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageIOError(source, "not a readable image")
    return from_bgr(image)


def to_base64(image: Union[PixelBuffer, bytes], format: str = "PNG", quality: int = 95) -> str:
    """
    Convert image to base64 string.

    Args:
        image: PixelBuffer or already-encoded bytes
        format: Image format (PNG, JPEG, etc.)
        quality: JPEG quality (1-100, ignored for PNG)

    Returns:
        Base64 encoded string
    """
    try:
        # Handle bytes input
        if isinstance(image, bytes):
            return base64.b64encode(image).decode("utf-8")

        return base64.b64encode(encode(image, format, quality)).decode("utf-8")

    except Exception as e:
        logger.error(f"Failed to convert image to base64: {e}")
        raise


def from_base64(base64_string: str) -> PixelBuffer:
    """
    Convert base64 string to a PixelBuffer.

    Args:
        base64_string: Base64 encoded image, optionally with a data URI prefix

    Returns:
        Decoded buffer
    """
    if base64_string.startswith("data:"):
        base64_string = base64_string.split(",", 1)[1]

    try:
        image_bytes = base64.b64decode(base64_string)
    except ValueError as e:
        raise ImageIOError("<base64>", str(e))

    return decode(image_bytes, source="<base64>")
