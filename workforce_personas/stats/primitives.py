"""
Statistical primitives used by feature preparation and clustering.

All functions are pure and operate on numpy arrays (or anything
``np.asarray`` accepts). Empty inputs return neutral values instead
of raising, matching how the rest of the pipeline treats degenerate
populations.
"""

import numpy as np
from typing import Sequence, Union

ArrayLike = Union[Sequence[float], np.ndarray]


def mean(values: ArrayLike) -> float:
    """Arithmetic mean (0.0 for an empty input)."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def standard_deviation(values: ArrayLike) -> float:
    """
    Population standard deviation.

    Args:
        values: 1-D sequence of numbers

    Returns:
        Square root of the mean squared deviation (0.0 if empty)
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.sqrt(np.mean((arr - arr.mean()) ** 2)))


def correlation(x: ArrayLike, y: ArrayLike) -> float:
    """
    Pearson correlation coefficient between two equal-length samples.

    Returns 0.0 when the lengths differ, the samples are empty, or
    either sample has zero variance.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.shape != y_arr.shape or x_arr.size == 0:
        return 0.0

    dx = x_arr - x_arr.mean()
    dy = y_arr - y_arr.mean()
    denom = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if denom == 0:
        return 0.0
    return float(np.sum(dx * dy) / denom)


def squared_euclidean_distance(p1: ArrayLike, p2: ArrayLike) -> float:
    """Squared Euclidean distance between two points of equal dimension."""
    a = np.asarray(p1, dtype=float)
    b = np.asarray(p2, dtype=float)
    if a.shape != b.shape:
        raise ValueError(
            f"Points must have same dimensions! Got {a.shape} and {b.shape}"
        )
    diff = a - b
    return float(np.dot(diff, diff))


def euclidean_distance(p1: ArrayLike, p2: ArrayLike) -> float:
    """
    Euclidean distance between two points.

    Args:
        p1: First point
        p2: Second point (same dimension as p1)

    Returns:
        L2 norm of p1 - p2

    Raises:
        ValueError: If the points have different dimensions
    """
    return float(np.sqrt(squared_euclidean_distance(p1, p2)))


def pairwise_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Euclidean distance from every point to every centroid.

    Args:
        points: (N, D) matrix
        centroids: (K, D) matrix

    Returns:
        (N, K) distance matrix
    """
    points = np.asarray(points, dtype=float)
    centroids = np.asarray(centroids, dtype=float)
    diff = points[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))


def normalize(values: ArrayLike) -> np.ndarray:
    """Min-max scale a 1-D sample into [0, 1]; a constant sample maps to 0.5."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return arr
    lo, hi = arr.min(), arr.max()
    if hi == lo:
        return np.full_like(arr, 0.5)
    return (arr - lo) / (hi - lo)


def normalize_matrix(matrix: ArrayLike) -> np.ndarray:
    """
    Column-wise min-max normalization of a 2-D matrix.

    Every column is rescaled to (v - min) / (max - min) using that
    column's extrema. Columns whose max equals min are filled with 0.5.

    Args:
        matrix: (N, D) matrix of finite numbers

    Returns:
        New (N, D) float matrix with every value in [0, 1]
    """
    arr = np.asarray(matrix, dtype=float)
    if arr.size == 0:
        return arr

    col_min = arr.min(axis=0)
    col_max = arr.max(axis=0)
    col_range = col_max - col_min
    constant = col_range == 0

    # Avoid 0/0 in constant columns, then overwrite them
    safe_range = np.where(constant, 1.0, col_range)
    normalized = (arr - col_min) / safe_range
    normalized[:, constant] = 0.5
    return normalized


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
