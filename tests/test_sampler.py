"""Tests for pixel sampling module."""

import numpy as np
import pytest

from dominant_colours.sampler import sample_pixels
from dominant_colours.types import InputError


class TestSamplePixels:
    """Test cases for sample_pixels function."""

    def test_shape_and_dtype(self, striped_image):
        """One float64 sample per pixel."""
        samples = sample_pixels(striped_image)

        assert samples.shape == (100 * 100, 3)
        assert samples.dtype == np.float64

    def test_row_major_order(self):
        """Samples follow row-major pixel traversal."""
        image = np.array(
            [
                [[1, 2, 3], [4, 5, 6]],
                [[7, 8, 9], [10, 11, 12]],
            ],
            dtype=np.uint8,
        )

        samples = sample_pixels(image)

        np.testing.assert_array_equal(samples[:, 0], [1, 4, 7, 10])
        np.testing.assert_array_equal(samples[3], [10, 11, 12])

    def test_no_deduplication(self):
        """Identical pixels each produce a sample."""
        image = np.full((4, 5, 3), 128, dtype=np.uint8)

        assert len(sample_pixels(image)) == 20

    def test_grayscale(self):
        """2D images are broadcast to three channels."""
        image = np.arange(6, dtype=np.uint8).reshape(2, 3)

        samples = sample_pixels(image)

        assert samples.shape == (6, 3)
        np.testing.assert_array_equal(samples[5], [5, 5, 5])

    def test_alpha_dropped(self):
        """RGBA input keeps only the colour channels."""
        image = np.zeros((2, 2, 4), dtype=np.uint8)
        image[..., :3] = [10, 20, 30]
        image[..., 3] = 77

        samples = sample_pixels(image)

        assert samples.shape == (4, 3)
        np.testing.assert_array_equal(samples[0], [10, 20, 30])

    def test_empty_image(self):
        """Zero-pixel images raise InputError."""
        with pytest.raises(InputError):
            sample_pixels(np.zeros((0, 10, 3), dtype=np.uint8))

    def test_bad_shape(self):
        """Unsupported channel counts raise InputError."""
        with pytest.raises(InputError):
            sample_pixels(np.zeros((4, 4, 2), dtype=np.uint8))
