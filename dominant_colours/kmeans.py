"""K-means clustering of colour samples (Lloyd's algorithm).

Seeding uses scikit-learn's k-means++ over the distinct colours of the
sample set; the assignment/update loop is done here so that tie-breaking,
empty clusters and the convergence rule stay under our control.
"""

import logging
from typing import Optional, Tuple, Union

import numpy as np
from sklearn.cluster import kmeans_plusplus
from sklearn.utils import check_random_state

from .types import InvalidParameter, KMeansResult, NumericFailure, SampleSet, check_int

logger = logging.getLogger(__name__)

RandomState = Union[None, int, np.random.RandomState]

DEFAULT_MAX_ITERATIONS = 100


def _check_samples(samples: SampleSet) -> np.ndarray:
    """Validate shape and finiteness of the sample set."""
    try:
        samples = np.asarray(samples, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Samples must be numeric: {e}") from e

    if samples.ndim != 2 or samples.shape[1] != 3:
        raise InvalidParameter(f"Samples must have shape (N, 3), got {samples.shape}")

    if not np.all(np.isfinite(samples)):
        bad = int(np.count_nonzero(~np.isfinite(samples).all(axis=1)))
        raise NumericFailure(f"Sample set contains {bad} non-finite samples")

    return samples


def _distinct_colours(samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Distinct rows of the sample set (lexicographic order) and their counts."""
    colours, counts = np.unique(samples, axis=0, return_counts=True)
    return colours, counts


def _seed(
    colours: np.ndarray,
    counts: np.ndarray,
    k: int,
    random_state: RandomState
) -> np.ndarray:
    if len(colours) <= k:
        # Not enough distinct colours: use them all, pad with copies of the
        # last one. Copies lose every tie and stay empty.
        padding = np.repeat(colours[-1:], k - len(colours), axis=0)
        return np.vstack([colours, padding])

    centers, _ = kmeans_plusplus(
        colours,
        n_clusters=k,
        sample_weight=counts.astype(np.float64),
        random_state=random_state,
    )
    return np.asarray(centers, dtype=np.float64)


def init_centroids(
    samples: SampleSet,
    k: int,
    random_state: RandomState = None
) -> np.ndarray:
    """Choose k initial centroids with weighted k-means++.

    Seeding runs on the distinct colours weighted by how often they occur,
    which gives the same distribution as k-means++ over every sample while
    guaranteeing the seeds are distinct points in colour space.

    Args:
        samples: Sample set (N, 3)
        k: Number of clusters
        random_state: Seed or RandomState for reproducibility

    Returns:
        Array of initial centroids (k, 3)
    """
    samples = _check_samples(samples)
    k = check_int("k", k, 1)
    if k > len(samples):
        raise InvalidParameter(f"k must be <= number of samples ({len(samples)}), got {k}")
    colours, counts = _distinct_colours(samples)
    return _seed(colours, counts, k, check_random_state(random_state))


def squared_distances(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Squared Euclidean distance of every sample to every centroid, shape (N, k).

    Expanded as |x|^2 - 2 x.c + |c|^2 so the only temporary is (N, k).
    """
    sample_norms = np.einsum('ij,ij->i', samples, samples)
    centroid_norms = np.einsum('ij,ij->i', centroids, centroids)
    distances = samples @ centroids.T
    distances *= -2.0
    distances += sample_norms[:, np.newaxis]
    distances += centroid_norms[np.newaxis, :]
    # Rounding can leave tiny negatives where the true distance is zero
    np.maximum(distances, 0.0, out=distances)
    return distances


def assign_labels(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Assign each sample to its nearest centroid.

    ``argmin`` returns the first minimum, so exact ties go to the lowest
    cluster index.
    """
    return np.argmin(squared_distances(samples, centroids), axis=1)


def update_centroids(
    samples: np.ndarray,
    labels: np.ndarray,
    centroids: np.ndarray
) -> np.ndarray:
    """Recompute each centroid as the mean of its samples.

    A cluster with no samples keeps its previous centroid.

    Args:
        samples: Sample set (N, 3)
        labels: Cluster index per sample (N,)
        centroids: Current centroids (k, 3)

    Returns:
        New centroids (k, 3)
    """
    k = centroids.shape[0]
    counts = np.bincount(labels, minlength=k)
    sums = np.stack(
        [np.bincount(labels, weights=samples[:, c], minlength=k) for c in range(samples.shape[1])],
        axis=1,
    )

    updated = centroids.copy()
    filled = counts > 0
    updated[filled] = sums[filled] / counts[filled, np.newaxis]

    if not np.all(np.isfinite(updated)):
        raise NumericFailure("Centroid update produced non-finite values")

    return updated


def _lloyd(samples: np.ndarray, centroids: np.ndarray, max_iterations: int) -> KMeansResult:
    """Run assignment/update steps until no label changes or the cap is hit."""
    labels = assign_labels(samples, centroids)
    converged = False
    n_iter = 0

    while n_iter < max_iterations:
        n_iter += 1
        centroids = update_centroids(samples, labels, centroids)
        new_labels = assign_labels(samples, centroids)
        changed = int(np.count_nonzero(new_labels != labels))
        labels = new_labels

        logger.debug(f"Iteration {n_iter}: {changed} samples reassigned")

        if changed == 0:
            converged = True
            break

    distances = squared_distances(samples, centroids)
    inertia = float(distances[np.arange(len(samples)), labels].sum())

    return KMeansResult(
        centroids=centroids,
        labels=labels,
        n_iter=n_iter,
        converged=converged,
        inertia=inertia,
    )


def fit(
    samples: SampleSet,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    random_state: RandomState = None,
    n_init: int = 1
) -> KMeansResult:
    """Partition colour samples into k clusters.

    Args:
        samples: Sample set (N, 3), one RGB vector per pixel
        k: Number of clusters, 1 <= k <= N
        max_iterations: Cap on update steps per run (must be >= 1).
            Reaching it without convergence is not an error.
        random_state: Seed or RandomState for the k-means++ seeding
        n_init: Number of independently seeded runs; the run with the
            lowest inertia is returned

    Returns:
        KMeansResult with centroids in cluster index order and one label
        per sample

    Raises:
        InvalidParameter: If k, max_iterations or n_init is out of range
        NumericFailure: If the samples contain non-finite values
    """
    samples = _check_samples(samples)
    n_samples = samples.shape[0]

    k = check_int("k", k, 1)
    if k > n_samples:
        raise InvalidParameter(f"k must be <= number of samples ({n_samples}), got {k}")
    max_iterations = check_int("max_iterations", max_iterations, 1)
    n_init = check_int("n_init", n_init, 1)

    rng = check_random_state(random_state)
    colours, counts = _distinct_colours(samples)

    if len(colours) <= k:
        # Seeding is deterministic here, extra runs would repeat the first
        logger.info(f"Only {len(colours)} distinct colours for k={k}")
        n_init = 1

    best: Optional[KMeansResult] = None
    for run in range(n_init):
        result = _lloyd(samples, _seed(colours, counts, k, rng), max_iterations)
        logger.debug(
            f"Run {run + 1}/{n_init}: inertia={result.inertia:.2f}, "
            f"iterations={result.n_iter}, converged={result.converged}"
        )
        if best is None or result.inertia < best.inertia:
            best = result

    if not best.converged:
        logger.warning(f"k-means did not converge within {max_iterations} iterations")

    empty = int(np.count_nonzero(np.bincount(best.labels, minlength=k) == 0))
    if empty:
        logger.warning(f"{empty} of {k} clusters are empty")

    logger.info(
        f"Clustered {n_samples} samples into {k} clusters "
        f"({best.n_iter} iterations, inertia={best.inertia:.1f})"
    )

    return best
