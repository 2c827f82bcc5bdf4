"""Common types and exceptions for dominant-colours."""

from dataclasses import dataclass
from enum import Enum
from numbers import Integral
from typing import Any, Dict, Optional, Tuple

import numpy as np

# Type aliases
ImageArray = np.ndarray
SampleSet = np.ndarray
RGB = Tuple[int, int, int]


class OutputFormat(Enum):
    """Rendering format for the ranked colour list."""

    TEXT = "text"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ColourResult:
    """One dominant colour and the share of the image it covers."""

    rgb: RGB
    percentage: float

    @property
    def hex(self) -> str:
        """Lowercase ``#rrggbb`` form of ``rgb``."""
        r, g, b = self.rgb
        return f"#{r:02x}{g:02x}{b:02x}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rgb": list(self.rgb),
            "percentage": self.percentage,
            "hex": self.hex,
        }


@dataclass(frozen=True)
class KMeansResult:
    """Outcome of a single k-means fit."""

    centroids: np.ndarray  # (k, 3) float64, cluster index order
    labels: np.ndarray  # (N,) cluster index per sample
    n_iter: int
    converged: bool
    inertia: float

    @property
    def k(self) -> int:
        return int(self.centroids.shape[0])


@dataclass
class ExtractorConfig:
    """Configuration for the dominant colour extractor."""

    # Clustering
    n_colours: int = 6
    max_iterations: int = 100
    n_init: int = 10
    random_state: Optional[int] = 42

    # Ingest - bounding box for the resize step, None keeps full size
    resize_to: Optional[int] = 150

    def __post_init__(self):
        """Validate ranges that do not depend on the image."""
        self.n_colours = check_int("n_colours", self.n_colours, 1)
        self.max_iterations = check_int("max_iterations", self.max_iterations, 1)
        self.n_init = check_int("n_init", self.n_init, 1)
        if self.random_state is not None:
            self.random_state = check_int("random_state", self.random_state, 0)
        if self.resize_to is not None:
            self.resize_to = check_int("resize_to", self.resize_to, 1)


def check_int(name: str, value, minimum: int) -> int:
    """Return ``value`` as an int, raising InvalidParameter if it is not an integer >= minimum."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameter(f"{name} must be >= {minimum}, got {value}")
    return int(value)


class ExtractionError(Exception):
    """Base exception for colour extraction errors."""

    pass


class InputError(ExtractionError):
    """Exception raised when the image cannot be decoded or has no pixels."""

    pass


class InvalidParameter(ExtractionError):
    """Exception raised for out-of-range configuration, e.g. k = 0 or k > N."""

    pass


class NumericFailure(ExtractionError):
    """Exception raised when non-finite values reach the clustering."""

    pass
