"""Tests for image ingestion."""

import numpy as np
import pytest
from PIL import Image

from dominant_colours.ingest import fit_within, image_from_array, load_image
from dominant_colours.types import InputError, InvalidParameter


class TestFitWithin:
    """Test cases for fit_within function."""

    def test_downscale_keeps_aspect(self):
        assert fit_within(300, 200, 150) == (150, 100)

    def test_upscale(self):
        assert fit_within(100, 50, 150) == (150, 75)

    def test_minimum_one_pixel(self):
        assert fit_within(1000, 1, 150) == (150, 1)

    def test_invalid_bound(self):
        with pytest.raises(InvalidParameter):
            fit_within(10, 10, 0)


class TestLoadImage:
    """Test cases for load_image function."""

    def test_resized_to_bound(self, tmp_path):
        """Large images are scaled into the bounding box."""
        path = tmp_path / "wide.png"
        Image.fromarray(np.zeros((200, 300, 3), dtype=np.uint8)).save(path)

        image = load_image(path)

        assert image.shape == (100, 150, 3)
        assert image.dtype == np.uint8

    def test_no_resize(self, striped_image_path):
        """resize_to=None keeps the original size."""
        image = load_image(striped_image_path, resize_to=None)

        assert image.shape == (100, 100, 3)
        np.testing.assert_array_equal(image[0, 0], [255, 0, 0])
        np.testing.assert_array_equal(image[99, 99], [0, 0, 255])

    def test_grayscale_file(self, tmp_path):
        """Single-channel images are converted to RGB."""
        path = tmp_path / "gray.png"
        Image.fromarray(np.full((10, 10), 77, dtype=np.uint8)).save(path)

        image = load_image(path, resize_to=None)

        assert image.shape == (10, 10, 3)
        assert np.all(image == 77)

    def test_transparent_on_white(self, tmp_path):
        """Fully transparent pixels are composited on white."""
        path = tmp_path / "clear.png"
        rgba = np.zeros((8, 8, 4), dtype=np.uint8)
        Image.fromarray(rgba).save(path)

        image = load_image(path, resize_to=None)

        assert np.all(image == 255)

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "nonexistent.jpg")

    def test_directory(self, tmp_path):
        """Directories are rejected."""
        with pytest.raises(InputError):
            load_image(tmp_path)

    def test_not_an_image(self, tmp_path):
        """Undecodable files raise InputError."""
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not a png")

        with pytest.raises(InputError):
            load_image(path)

    def test_oversized_image(self, tmp_path, monkeypatch):
        """Images over Pillow's pixel limit raise InputError."""
        path = tmp_path / "huge.png"
        Image.fromarray(np.zeros((200, 200, 3), dtype=np.uint8)).save(path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        with pytest.raises(InputError):
            load_image(path)


class TestImageFromArray:
    """Test cases for image_from_array function."""

    def test_float_input(self):
        """Float arrays in [0, 1] are scaled to 8 bits."""
        image = image_from_array(np.ones((4, 4, 3)))

        assert image.dtype == np.uint8
        assert np.all(image == 255)

    def test_rgba_composite(self):
        """Alpha is composited on white."""
        rgba = np.zeros((2, 2, 4), dtype=np.uint8)
        rgba[..., 3] = 255
        rgba[0, 0, 3] = 0

        image = image_from_array(rgba)

        np.testing.assert_array_equal(image[0, 0], [255, 255, 255])
        np.testing.assert_array_equal(image[1, 1], [0, 0, 0])

    def test_resize(self):
        """Optional resize bound is applied."""
        image = image_from_array(np.zeros((300, 300, 3), dtype=np.uint8), resize_to=150)

        assert image.shape == (150, 150, 3)

    def test_empty(self):
        with pytest.raises(InputError):
            image_from_array(np.zeros((0, 0, 3), dtype=np.uint8))

    def test_bad_channels(self):
        with pytest.raises(InputError):
            image_from_array(np.zeros((4, 4, 5), dtype=np.uint8))

    def test_non_finite(self):
        image = np.zeros((2, 2, 3))
        image[0, 0, 0] = np.nan

        with pytest.raises(InputError):
            image_from_array(image)
