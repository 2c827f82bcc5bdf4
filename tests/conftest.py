"""Pytest configuration and fixtures."""

import numpy as np
import pytest
from PIL import Image

from dominant_colours.types import ColourResult

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def make_striped_image() -> np.ndarray:
    """100x100 image: rows 0-49 red, 50-79 green, 80-99 blue."""
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    image[:50, :] = RED
    image[50:80, :] = GREEN
    image[80:, :] = BLUE
    return image


@pytest.fixture
def striped_image():
    """Synthetic image split 50% / 30% / 20% between three colours."""
    return make_striped_image()


@pytest.fixture
def striped_image_path(tmp_path):
    """Path to the striped image saved as PNG."""
    path = tmp_path / "test_image.png"
    Image.fromarray(make_striped_image()).save(path)
    return path


@pytest.fixture
def ranked_results():
    """Three ranked colour results."""
    return [
        ColourResult(rgb=RED, percentage=50.0),
        ColourResult(rgb=GREEN, percentage=30.0),
        ColourResult(rgb=BLUE, percentage=20.0),
    ]
