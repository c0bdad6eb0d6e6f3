"""
Tests for the error-diffusion Ditherer
"""

import numpy as np

from common.enums import DitherMode
from core.image.pixel_buffer import PixelBuffer
from effects import Ditherer
from effects.dither import _trunc_div


class TestTruncDiv:
    def test_rounds_toward_zero(self):
        assert _trunc_div(700, 16) == 43
        assert _trunc_div(-385, 16) == -24
        assert _trunc_div(-15, 16) == 0


class TestDiffuse:
    """Test quantization and error diffusion on raw intensity grids"""

    def test_truncate_mode_only_full_intensity_is_white(self):
        assert Ditherer().diffuse([[254]]) == [[0]]
        assert Ditherer().diffuse([[255]]) == [[255]]

    def test_threshold_mode(self):
        ditherer = Ditherer(DitherMode.THRESHOLD)

        assert ditherer.diffuse([[127]]) == [[0]]
        assert ditherer.diffuse([[128]]) == [[255]]

    def test_error_weights(self):
        """Error spreads 7/16 right and 3/16, 5/16, 1/16 onto the next row"""
        ditherer = Ditherer(DitherMode.THRESHOLD)

        # (1, 0): 112 -> 0 pushes 49 right and 21, 35, 7 below; (2, 0): 49 -> 0
        # pushes 15 and 9 below. Each bottom pixel then lands on 128 exactly.
        result = ditherer.diffuse([[0, 112, 0], [107, 139, 161]])

        assert result == [[0, 0, 0], [255, 255, 255]]

    def test_negative_error_truncates_toward_zero(self):
        """-55 * 7 / 16 moves the neighbor by -24, landing exactly on 128"""
        ditherer = Ditherer(DitherMode.THRESHOLD)

        assert ditherer.diffuse([[200, 152]]) == [[255, 255]]

    def test_error_reaches_next_row(self):
        """Positive error from a white pixel is pushed below and to the right"""
        ditherer = Ditherer(DitherMode.THRESHOLD)

        # 120 -> 0 with error 120: below gets 120 * 5 / 16 = 37 -> 37 + 100 = 137
        assert ditherer.diffuse([[120], [100]]) == [[0], [255]]

    def test_overflowing_intensity_stays_in_palette(self):
        """Values pushed past 255 by diffusion still quantize to white"""
        result = Ditherer().diffuse([[300, 0]])

        # 300 -> 255, error 45, right gets 45 * 7 / 16 = 19 -> 0
        assert result == [[255, 0]]


class TestDitherApply:
    """Test the full effect"""

    def test_black_stays_black(self):
        result = Ditherer().apply(PixelBuffer.filled(4, 4, (0, 0, 0)))

        assert result == PixelBuffer.filled(4, 4, (0, 0, 0))

    def test_output_is_two_level_grey(self, gradient_image):
        for mode in DitherMode:
            arr = Ditherer(mode).apply(gradient_image).array

            assert set(np.unique(arr).tolist()) <= {0, 255}
            assert np.array_equal(arr[:, :, 0], arr[:, :, 1])
            assert np.array_equal(arr[:, :, 0], arr[:, :, 2])

    def test_threshold_mode_preserves_average_brightness(self):
        """Mid-grey dithers to a roughly even mix of black and white"""
        image = PixelBuffer.filled(16, 16, (128, 128, 128))

        arr = Ditherer(DitherMode.THRESHOLD).apply(image).array[:, :, 0]
        white_fraction = np.count_nonzero(arr) / arr.size

        assert 0.35 < white_fraction < 0.65

    def test_input_untouched(self, gradient_image):
        before = gradient_image.copy_data()

        Ditherer().apply(gradient_image)

        assert np.array_equal(gradient_image.array, before)
