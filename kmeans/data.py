"""
kmeans/data.py

Range finding and synthetic point generation for demos and tests.

The generator draws points in clumps around a few hidden centers so
generated datasets actually have cluster structure to recover.
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from kmeans.errors import EmptyInputError, KMeansError
from kmeans.geometry import as_point_matrix

_DEFAULT_CLUMPINESS = 4.0
_DEFAULT_CENTERS = 1


def find_ranges(data_points) -> List[List[float]]:
    """
    Calculate the ``[min, max]`` range of each dimension.

    Args:
        data_points: Same-length points, e.g. ``[[0, 2, 7], [6, 2, 3]]``.

    Returns:
        One ``[min, max]`` pair per dimension, in dimension order.

    Raises:
        EmptyInputError: If ``data_points`` is empty.
        DimensionMismatchError: If the points differ in dimension.
    """
    matrix = as_point_matrix(data_points)
    if matrix.shape[0] == 0:
        raise EmptyInputError("cannot find ranges of an empty dataset.")

    lows = matrix.min(axis=0)
    highs = matrix.max(axis=0)
    return [[float(lo), float(hi)] for lo, hi in zip(lows, highs)]


class RandomClusterPointGenerator:
    """
    Produces random points clumped around hidden centers within given ranges.

    Centers are drawn uniformly inside the ranges once, at construction.
    Each generated point picks one center at random and adds Gaussian
    noise whose standard deviation per dimension is
    ``width / (clumpiness * n_centers)``; the result is clipped back
    into the ranges. Larger ``clumpiness`` gives tighter clumps.

    Args:
        ranges:     ``[min, max]`` per dimension.
        clumpiness: Spread divisor, must be > 0.
        n_centers:  Number of hidden centers, must be >= 1.
        seed:       Seed or ``numpy.random.Generator``.
    """

    def __init__(
        self,
        ranges: Sequence[Sequence[float]],
        clumpiness: float = _DEFAULT_CLUMPINESS,
        n_centers: int = _DEFAULT_CENTERS,
        seed: int | np.random.Generator | None = None,
    ) -> None:
        bounds = np.asarray(ranges, dtype=np.float64)
        if bounds.ndim != 2 or bounds.shape[1] != 2 or bounds.shape[0] == 0:
            raise KMeansError(
                f"ranges must be a non-empty sequence of [min, max] pairs, got shape {bounds.shape}."
            )
        if np.any(bounds[:, 0] > bounds[:, 1]):
            raise KMeansError("each range must satisfy min <= max.")
        if clumpiness <= 0:
            raise KMeansError(f"clumpiness must be > 0, got {clumpiness!r}.")
        if n_centers < 1:
            raise KMeansError(f"n_centers must be >= 1, got {n_centers!r}.")

        self._rng = np.random.default_rng(seed)
        self._low = bounds[:, 0]
        self._high = bounds[:, 1]
        self._spread = (self._high - self._low) / (clumpiness * n_centers)
        self.centers = self._rng.uniform(self._low, self._high, size=(n_centers, bounds.shape[0]))

    @property
    def ranges(self) -> List[List[float]]:
        return [[float(lo), float(hi)] for lo, hi in zip(self._low, self._high)]

    @property
    def dimensions(self) -> int:
        return self._low.shape[0]

    def generate_point(self) -> np.ndarray:
        return self.generate(1)[0]

    def generate(self, n: int) -> np.ndarray:
        """Return ``n`` points as an array of shape (n, dimensions)."""
        if n < 0:
            raise KMeansError(f"n must be >= 0, got {n!r}.")
        picks = self._rng.integers(0, self.centers.shape[0], size=n)
        noise = self._rng.normal(0.0, 1.0, size=(n, self.dimensions)) * self._spread
        return np.clip(self.centers[picks] + noise, self._low, self._high)


def generate_random_points(
    ranges: Sequence[Sequence[float]],
    n: int,
    generator: RandomClusterPointGenerator | None = None,
) -> np.ndarray:
    """
    Generate ``n`` synthetic points inside ``ranges``.

    Uses a default :class:`RandomClusterPointGenerator` (clumpiness 4,
    one center) unless a configured ``generator`` is supplied.

    Raises:
        KMeansError: If ``generator`` was built for different ranges.
    """
    if generator is None:
        return RandomClusterPointGenerator(ranges).generate(n)

    requested = np.asarray(ranges, dtype=np.float64)
    if requested.shape != (generator.dimensions, 2) or not np.array_equal(
        requested, np.asarray(generator.ranges)
    ):
        raise KMeansError(
            f"generator ranges {generator.ranges} do not match requested ranges "
            f"{requested.tolist()}."
        )
    return generator.generate(n)
