"""Main pipeline orchestrator for dominant-colours."""

import logging
from pathlib import Path
from typing import List, Optional, Union

import numpy as np

from .aggregate import aggregate
from .ingest import image_from_array, load_image
from .kmeans import fit
from .ranking import rank_results
from .sampler import sample_pixels
from .types import ColourResult, ExtractorConfig, ImageArray, KMeansResult

logger = logging.getLogger(__name__)


class DominantColourExtractor:
    """Extract the dominant colours of an image with k-means clustering."""

    def __init__(self, config: Optional[ExtractorConfig] = None):
        """Initialize extractor with configuration.

        Args:
            config: Extractor configuration. Uses defaults if None.
        """
        self.config = config or ExtractorConfig()

    def process(self, image_path: Union[str, Path]) -> List[ColourResult]:
        """Load an image file and extract its dominant colours.

        Args:
            image_path: Path to input image

        Returns:
            Colour results sorted by prevalence, most dominant first

        Raises:
            FileNotFoundError: If input file doesn't exist
            ExtractionError: If decoding or clustering fails
        """
        logger.info(f"Loading image {image_path}")
        image = load_image(image_path, resize_to=self.config.resize_to)
        return self.process_array(image, resize=False)

    def process_array(self, image: ImageArray, resize: bool = True) -> List[ColourResult]:
        """Extract dominant colours from an in-memory image.

        Args:
            image: Image array (H, W, 3), (H, W, 4) or (H, W)
            resize: Apply the configured resize bound first

        Returns:
            Colour results sorted by prevalence, most dominant first
        """
        resize_to = self.config.resize_to if resize else None
        image = image_from_array(image, resize_to=resize_to)
        height, width = image.shape[:2]
        logger.info(f"Sampling {width}x{height} pixels")

        samples = sample_pixels(image)
        result = self._cluster(samples)
        return rank_results(aggregate(result))

    def _cluster(self, samples: np.ndarray) -> KMeansResult:
        logger.info(f"Running k-means clustering with k={self.config.n_colours}")
        return fit(
            samples,
            self.config.n_colours,
            max_iterations=self.config.max_iterations,
            random_state=self.config.random_state,
            n_init=self.config.n_init,
        )


def extract_dominant_colours(
    image_path: Union[str, Path],
    n_colours: int = 6,
    config: Optional[ExtractorConfig] = None,
) -> List[ColourResult]:
    """Extract dominant colours from an image file.

    Convenience function for one-off processing. ``n_colours`` is ignored
    when a config is given.

    Example:
        >>> colours = extract_dominant_colours("input.jpg", n_colours=5)
        >>> dominant = colours[0].hex
    """
    config = config or ExtractorConfig(n_colours=n_colours)
    return DominantColourExtractor(config).process(image_path)
