# Copyright (c) 2026 Mogao
# SPDX-License-Identifier: MIT

"""
K-means clustering of RGB samples.

Plain Lloyd iterations in RGB space with integer centroids:
1. Assign every sample to its nearest centroid (squared Euclidean,
   ties go to the lowest centroid index)
2. Move each non-empty centroid to the truncated integer mean of its samples
3. Stop once no centroid channel moved by more than 1, or at max_iterations

Empty centroids keep their position and are never reseeded, so the result
always has exactly k entries. Seeding is a pluggable strategy; both built-in
strategies are reproducible.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 20

# A centroid "moved" when any channel changed by more than this
CONVERGENCE_TOLERANCE = 1

# (samples (N, 3), k) -> initial centroids (k, 3)
InitStrategy = Callable[[NDArray[np.int64], int], NDArray[np.int64]]


@dataclass(frozen=True, slots=True)
class Centroid:
    """
    A final cluster center.

    Attributes:
        r, g, b: Integer channel values (0-255)
        count: Samples assigned to this centroid in the final assignment pass
    """
    r: int
    g: int
    b: int
    count: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


def spaced_init(samples: NDArray[np.int64], k: int) -> NDArray[np.int64]:
    """
    Pick k samples at evenly spaced indices: i * (n // k), capped at n - 1.

    With fewer samples than k, the stride is 0 and every seed is sample 0.
    """
    n = len(samples)
    stride = n // k
    idx = np.minimum(np.arange(k) * stride, n - 1)
    return samples[idx].copy()


def random_init(seed: Optional[int] = 42) -> InitStrategy:
    """
    Build a strategy that picks k distinct samples at random.

    Sampling is without replacement unless there are fewer samples than k.

    Args:
        seed: Seed for numpy's default_rng (None for non-reproducible seeding)
    """
    def init(samples: NDArray[np.int64], k: int) -> NDArray[np.int64]:
        rng = np.random.default_rng(seed)
        n = len(samples)
        idx = rng.choice(n, size=k, replace=n < k)
        return samples[idx].copy()

    return init


def cluster(
    samples: NDArray[np.uint8],
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    init: Optional[InitStrategy] = None,
) -> tuple[Centroid, ...]:
    """
    Partition RGB samples into k clusters.

    Args:
        samples: Array of shape (N, 3) with RGB values [0-255], N >= 1
        k: Number of clusters
        max_iterations: Maximum assignment/update rounds
        init: Seeding strategy (default: spaced_init)

    Returns:
        Tuple of exactly k Centroids in seed order. Counts come from a final
        assignment against the final positions and sum to N.

    Raises:
        ValueError: If samples is empty, k < 1 or max_iterations < 1.
    """
    data = np.asarray(samples, dtype=np.int64).reshape(-1, 3)
    if len(data) == 0:
        raise ValueError("Cannot cluster an empty sample set")
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")

    strategy = init if init is not None else spaced_init
    centroids = np.asarray(strategy(data, k), dtype=np.int64)
    if centroids.shape != (k, 3):
        raise ValueError(
            f"Init strategy returned shape {centroids.shape}, expected ({k}, 3)"
        )

    iterations = 0
    converged = False
    for _ in range(max_iterations):
        iterations += 1
        labels = _assign(data, centroids)
        updated = _update(data, labels, centroids)

        moved = np.abs(updated - centroids).max()
        centroids = updated
        if moved <= CONVERGENCE_TOLERANCE:
            converged = True
            break

    labels = _assign(data, centroids)
    counts = np.bincount(labels, minlength=k)

    logger.debug(
        "k-means: %d samples, k=%d, %d iterations, converged=%s",
        len(data), k, iterations, converged,
    )

    return tuple(
        Centroid(r=int(c[0]), g=int(c[1]), b=int(c[2]), count=int(n))
        for c, n in zip(centroids, counts)
    )


def _assign(data: NDArray[np.int64], centroids: NDArray[np.int64]) -> NDArray[np.int64]:
    """Index of the nearest centroid for every sample (first minimum wins)."""
    # (N, k) squared distances; exact in int64
    dists = np.sum(
        (data[:, np.newaxis, :] - centroids[np.newaxis, :, :]) ** 2,
        axis=2,
    )
    return np.argmin(dists, axis=1)


def _update(
    data: NDArray[np.int64],
    labels: NDArray[np.int64],
    centroids: NDArray[np.int64],
) -> NDArray[np.int64]:
    """Truncated integer mean per cluster; empty clusters stay put."""
    k = len(centroids)
    counts = np.bincount(labels, minlength=k)
    sums = np.zeros((k, 3), dtype=np.int64)
    np.add.at(sums, labels, data)

    updated = centroids.copy()
    occupied = counts > 0
    # Channels are non-negative, so floor division truncates
    updated[occupied] = sums[occupied] // counts[occupied, np.newaxis]
    return updated
