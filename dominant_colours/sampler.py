"""Pixel sampling: turn a decoded image into a flat set of colour vectors."""

import numpy as np

from .types import ImageArray, InputError, SampleSet


def sample_pixels(image: ImageArray) -> SampleSet:
    """Flatten an image into one RGB sample per pixel.

    Pixels are taken in row-major order and cast to float64 so that the
    clustering never works on truncated integer means.

    Args:
        image: Image as numpy array (H, W, 3). (H, W) greyscale is
            broadcast to three channels, (H, W, 4) has its alpha dropped.

    Returns:
        Sample set of shape (H * W, 3), dtype float64

    Raises:
        InputError: If the image has no pixels or an unsupported shape
    """
    image = np.asarray(image)

    if image.ndim == 2:
        image = np.repeat(image[:, :, np.newaxis], 3, axis=2)

    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InputError(f"Expected image of shape (H, W, 3), got {image.shape}")

    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InputError("Cannot sample an image with zero pixels")

    return image[:, :, :3].reshape(-1, 3).astype(np.float64)
