"""
Seeded random source.

Every random draw in population synthesis and centroid seeding goes
through a ``SeededRandom`` instance passed in by the caller. Identical
seed and call sequence give identical results; no module-level or
global numpy random state is used.
"""

import numpy as np
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class SeededRandom:
    """Deterministic random generator backed by ``numpy.random.Generator``."""

    def __init__(self, seed: Optional[int] = 42):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        """Return a float in [low, high)."""
        return float(self._rng.uniform(low, high))

    def integer(self, low: int, high: int) -> int:
        """Return an integer in [low, high] inclusive."""
        return int(self._rng.integers(low, high, endpoint=True))

    def normal(self, mean: float, std_dev: float) -> float:
        """Draw from a normal distribution."""
        return float(self._rng.normal(mean, std_dev))

    def choice(self, seq: Sequence[T]) -> T:
        """Pick one element uniformly from a non-empty sequence."""
        if len(seq) == 0:
            raise ValueError("Cannot choose from an empty sequence")
        return seq[self.integer(0, len(seq) - 1)]

    def weighted_index(self, weights: Sequence[float]) -> int:
        """
        Draw an index with probability proportional to its weight.

        Weights need not sum to 1. Falls back to a uniform draw when the
        weights sum to zero.

        Args:
            weights: Non-negative weights, one per index

        Returns:
            Selected index
        """
        w = np.asarray(weights, dtype=float)
        if w.size == 0:
            raise ValueError("Cannot draw from empty weights")

        total = w.sum()
        if total <= 0:
            return self.integer(0, w.size - 1)

        cumulative = np.cumsum(w / total)
        r = self.uniform()
        idx = int(np.searchsorted(cumulative, r, side='right'))
        # Float round-off can leave cumulative[-1] slightly below r
        last_positive = int(np.flatnonzero(w > 0)[-1])
        return min(idx, last_positive)

    def weighted_choice(self, options: Sequence[T], weights: Sequence[float]) -> T:
        """Pick one option with probability proportional to its weight."""
        if len(options) != len(weights):
            raise ValueError("Options and weights must have same length")
        return options[self.weighted_index(weights)]


def resolve_rng(rng: Optional[SeededRandom] = None, seed: Optional[int] = 42) -> SeededRandom:
    """Return the injected generator, or a fresh one built from seed."""
    if rng is not None:
        return rng
    return SeededRandom(seed)
