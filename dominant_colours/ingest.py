"""Raster image ingestion with bounded resizing."""
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image
from PIL import ImageOps

from .types import ExtractionError, ImageArray, InputError, InvalidParameter

logger = logging.getLogger(__name__)

DEFAULT_RESIZE = 150


def fit_within(width: int, height: int, bound: int) -> tuple:
    """
    Compute the size of a width x height image scaled to fit a bound x bound box.

    Aspect ratio is preserved and the image may be scaled up as well as down,
    so the longer side always ends up equal to ``bound``.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        bound: Side of the bounding box

    Returns:
        (new_width, new_height), each at least 1
    """
    if bound < 1:
        raise InvalidParameter(f"resize bound must be >= 1, got {bound}")

    scale = min(bound / width, bound / height)
    new_width = max(1, round(width * scale))
    new_height = max(1, round(height * scale))
    return new_width, new_height


def resize_image(img: Image.Image, resize_to: Optional[int] = DEFAULT_RESIZE) -> Image.Image:
    """
    Resize a PIL image to fit inside a square box using Lanczos resampling.

    Args:
        img: Decoded RGB image
        resize_to: Side of the bounding box; None leaves the image untouched

    Returns:
        Resized image
    """
    if resize_to is None:
        return img

    width, height = img.size
    if width == 0 or height == 0:
        raise InputError("Image has zero pixels")

    size = fit_within(width, height, resize_to)
    if size == (width, height):
        return img

    logger.debug(f"Resizing {width}x{height} -> {size[0]}x{size[1]}")
    return img.resize(size, Image.Resampling.LANCZOS)


def _to_rgb(img: Image.Image) -> Image.Image:
    """Convert any PIL mode to RGB, compositing transparency on white."""
    if img.mode in ('RGBA', 'LA', 'P'):
        img = img.convert('RGBA')
        background = Image.new('RGB', img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[3])
        return background
    if img.mode != 'RGB':
        return img.convert('RGB')
    return img


def load_image(
    path: Union[str, Path],
    resize_to: Optional[int] = DEFAULT_RESIZE
) -> ImageArray:
    """
    Load a raster image file as an RGB pixel grid.

    Args:
        path: Path to image file
        resize_to: Side of the bounding box the image is resized into
            (None keeps the original size)

    Returns:
        uint8 array of shape (H, W, 3)

    Raises:
        FileNotFoundError: If file doesn't exist
        InputError: If file cannot be decoded or has no pixels
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    if not path.is_file():
        raise InputError(f"Path is not a file: {path}")

    try:
        with Image.open(path) as img:
            # Apply EXIF orientation transformation to handle rotation
            img = ImageOps.exif_transpose(img)
            logger.info(f"Loaded {path.name}: {img.size[0]}x{img.size[1]} ({img.mode})")

            img = _to_rgb(img)
            img = resize_image(img, resize_to)
            image = np.array(img, dtype=np.uint8)

    except ExtractionError:
        raise
    except (IOError, OSError) as e:
        raise InputError(f"Failed to load image {path}: {e}") from e
    except Exception as e:
        raise InputError(f"Unexpected error loading image {path}: {e}") from e

    if image.size == 0:
        raise InputError(f"Image has zero pixels: {path}")

    return image


def image_from_array(
    image: np.ndarray,
    resize_to: Optional[int] = None
) -> ImageArray:
    """
    Normalise an in-memory image to an RGB uint8 pixel grid.

    Args:
        image: Array (H, W), (H, W, 3) or (H, W, 4). Float arrays with
            values in [0, 1] are scaled to [0, 255].
        resize_to: Optional bounding box side for resizing

    Returns:
        uint8 array of shape (H, W, 3)
    """
    image = np.asarray(image)

    if image.ndim == 2:
        # Grayscale - convert to RGB
        image = np.stack([image] * 3, axis=-1)

    if image.ndim != 3:
        raise InputError(f"Expected 3D array, got {image.ndim}D")

    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InputError("Image has zero pixels")

    if np.issubdtype(image.dtype, np.floating):
        if not np.all(np.isfinite(image)):
            raise InputError("Image contains non-finite values")
        if image.max() <= 1.0:
            image = image * 255.0
        image = np.clip(image, 0, 255).astype(np.uint8)
    else:
        image = np.clip(image, 0, 255).astype(np.uint8)

    if image.shape[2] == 4:
        # RGBA - composite on white
        alpha = image[..., 3:4].astype(np.float64) / 255.0
        rgb = image[..., :3].astype(np.float64)
        image = (rgb * alpha + 255.0 * (1 - alpha)).astype(np.uint8)
    elif image.shape[2] != 3:
        raise InputError(f"Expected 3 or 4 channels, got {image.shape[2]}")

    if resize_to is not None:
        img = resize_image(Image.fromarray(image), resize_to)
        image = np.array(img, dtype=np.uint8)

    return image
