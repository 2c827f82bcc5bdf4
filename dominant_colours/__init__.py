"""dominant-colours: dominant colour extraction with k-means clustering.

Samples the pixels of a (resized) raster image, clusters them in RGB space
and reports the cluster centroids ranked by the share of the image they
cover.
"""

from .pipeline import DominantColourExtractor, extract_dominant_colours
from .types import (
    ColourResult,
    ExtractionError,
    ExtractorConfig,
    InputError,
    InvalidParameter,
    KMeansResult,
    NumericFailure,
    OutputFormat,
)

__version__ = "0.1.0"
__all__ = [
    "DominantColourExtractor",
    "extract_dominant_colours",
    "ColourResult",
    "ExtractionError",
    "ExtractorConfig",
    "InputError",
    "InvalidParameter",
    "KMeansResult",
    "NumericFailure",
    "OutputFormat",
]
