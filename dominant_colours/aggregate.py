"""Prevalence aggregation: cluster assignments to colour percentages."""

from typing import List

import numpy as np

from .types import RGB, ColourResult, InvalidParameter, KMeansResult, NumericFailure


def cluster_sizes(labels: np.ndarray, k: int) -> np.ndarray:
    """Count the samples assigned to each cluster.

    Args:
        labels: Cluster index per sample (N,)
        k: Number of clusters

    Returns:
        Integer array (k,) whose sum is N
    """
    labels = np.asarray(labels)
    if labels.size and (labels.min() < 0 or labels.max() >= k):
        raise NumericFailure(f"Cluster labels must lie in [0, {k}), got [{labels.min()}, {labels.max()}]")
    return np.bincount(labels.astype(np.intp), minlength=k)


def cluster_percentages(sizes: np.ndarray) -> np.ndarray:
    """Convert cluster sizes to percentages of the total sample count."""
    sizes = np.asarray(sizes)
    total = int(sizes.sum())
    if total == 0:
        raise InvalidParameter("Cannot compute percentages of an empty sample set")
    return sizes / total * 100.0


def centroid_to_rgb(centroid: np.ndarray) -> RGB:
    """Convert a float centroid to an 8-bit RGB triple.

    Components are clipped to [0, 255] and truncated, not rounded.
    """
    r, g, b = np.clip(centroid, 0, 255).astype(np.uint8)
    return int(r), int(g), int(b)


def aggregate(result: KMeansResult) -> List[ColourResult]:
    """Pair each centroid with the share of samples assigned to it.

    Args:
        result: Finished k-means fit

    Returns:
        One ColourResult per cluster, in cluster index order. Empty
        clusters are kept with percentage 0.0.
    """
    sizes = cluster_sizes(result.labels, result.k)
    percentages = cluster_percentages(sizes)

    return [
        ColourResult(rgb=centroid_to_rgb(centroid), percentage=float(pct))
        for centroid, pct in zip(result.centroids, percentages)
    ]
