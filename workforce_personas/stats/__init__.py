"""Statistical primitives and the seeded random source."""

from .primitives import (
    mean,
    standard_deviation,
    correlation,
    euclidean_distance,
    squared_euclidean_distance,
    pairwise_distances,
    normalize,
    normalize_matrix,
    clamp
)
from .rng import SeededRandom, resolve_rng

__all__ = [
    'mean',
    'standard_deviation',
    'correlation',
    'euclidean_distance',
    'squared_euclidean_distance',
    'pairwise_distances',
    'normalize',
    'normalize_matrix',
    'clamp',
    'SeededRandom',
    'resolve_rng'
]
