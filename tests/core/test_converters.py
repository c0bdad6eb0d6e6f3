"""
Tests for image encoding, decoding and thumbnails
"""

import base64

import numpy as np
import pytest

from common.exceptions import ImageIOError
from core.image.converters import (
    decode,
    encode,
    ensure_bgr,
    from_base64,
    from_bgr,
    to_base64,
    to_bgr,
)
from core.image.generators import create_stripe_pattern
from core.image.pixel_buffer import PixelBuffer
from core.image.processors import create_thumbnail


class TestChannelOrder:
    """Test RGB <-> BGR conversion"""

    def test_to_bgr_swaps_channels(self):
        buffer = PixelBuffer([[[10, 20, 30]]])

        bgr = to_bgr(buffer)

        assert bgr.dtype == np.uint8
        assert list(bgr[0, 0]) == [30, 20, 10]

    def test_from_bgr_swaps_channels(self):
        bgr = np.array([[[30, 20, 10]]], dtype=np.uint8)

        assert from_bgr(bgr).get_pixel(0, 0) == (10, 20, 30)

    def test_from_grayscale(self):
        gray = np.full((4, 4), 77, dtype=np.uint8)

        buffer = from_bgr(gray)

        assert buffer.get_pixel(2, 2) == (77, 77, 77)

    def test_ensure_bgr_returns_copy(self):
        bgr = np.ones((3, 3, 3), dtype=np.uint8)

        result = ensure_bgr(bgr)

        assert result is not bgr
        assert np.array_equal(result, bgr)


class TestEncoding:
    """Test encode/decode through OpenCV"""

    def test_png_is_lossless(self, gradient_image):
        data = encode(gradient_image, ".png")

        assert decode(data) == gradient_image

    def test_format_without_dot(self, gradient_image):
        assert encode(gradient_image, "PNG")[:8] == b"\x89PNG\r\n\x1a\n"

    def test_decode_garbage_raises(self):
        with pytest.raises(ImageIOError):
            decode(b"definitely not an image", source="garbage.png")

    def test_base64_round_trip_with_data_uri(self, gradient_image):
        encoded = to_base64(gradient_image, format="PNG")

        assert from_base64(f"data:image/png;base64,{encoded}") == gradient_image

    def test_to_base64_from_bytes(self):
        assert to_base64(b"abc") == base64.b64encode(b"abc").decode("utf-8")


class TestThumbnail:
    """Test thumbnail creation"""

    def test_small_image_unchanged(self, gradient_image):
        thumbnail, encoded = create_thumbnail(gradient_image, width=320)

        assert thumbnail is gradient_image
        assert from_base64(encoded) == gradient_image

    def test_large_image_resized_keeping_aspect(self):
        image = create_stripe_pattern(640, 140)

        thumbnail, encoded = create_thumbnail(image, width=320)

        assert thumbnail.width == 320
        assert thumbnail.height == 70
        assert len(encoded) > 0
