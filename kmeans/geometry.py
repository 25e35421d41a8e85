"""
kmeans/geometry.py

Distance, error and centroid primitives over fixed-dimension points.

Points are accepted as any array-like of numbers and handled internally
as float64 numpy arrays. No logging and no side effects in this module.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from kmeans.errors import DimensionMismatchError, EmptyInputError, KMeansError


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _is_ragged(points) -> bool:
    try:
        lengths = {len(point) for point in points}
    except TypeError:
        return False
    return len(lengths) > 1


def as_point(point: Sequence[float] | np.ndarray) -> np.ndarray:
    """Return ``point`` as a 1-D float64 array."""
    try:
        arr = np.asarray(point, dtype=np.float64)
    except ValueError as exc:
        raise KMeansError(f"a point must contain only numbers: {exc}") from exc
    if arr.ndim != 1:
        raise DimensionMismatchError(
            f"a point must be a 1-D sequence of numbers, got shape {arr.shape}."
        )
    return arr


def as_point_matrix(points: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    """
    Return ``points`` as a 2-D float64 array of shape (n_points, n_dims).

    An empty sequence yields an array of shape (0, 0).

    Raises:
        DimensionMismatchError: If the points do not all share one dimension.
        KMeansError: If any coordinate is not numeric.
    """
    try:
        arr = np.asarray(points, dtype=np.float64)
    except ValueError as exc:
        if _is_ragged(points):
            raise DimensionMismatchError(
                "all points must have the same dimension."
            ) from exc
        raise KMeansError(f"points must contain only numbers: {exc}") from exc

    if arr.size == 0 and arr.ndim == 1:
        return arr.reshape(0, 0)

    if arr.ndim != 2:
        raise DimensionMismatchError(
            f"points must be a 2-D sequence (n_points, n_dims), got shape {arr.shape}."
        )
    return arr


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def squared_error(point1, point2) -> float:
    """
    Sum over dimensions of ``(point1[d] - point2[d]) ** 2``.

    Raises:
        DimensionMismatchError: If the points differ in length.
    """
    a = as_point(point1)
    b = as_point(point2)
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatchError(
            f"point1 and point2 must be of same dimension; "
            f"got {a.shape[0]} and {b.shape[0]}."
        )
    diff = a - b
    return float(np.dot(diff, diff))


def distance(point1, point2) -> float:
    """Euclidean distance between two points of the same dimension."""
    return float(np.sqrt(squared_error(point1, point2)))


def average_position(points) -> np.ndarray:
    """
    Coordinate-wise arithmetic mean of a non-empty set of points.

    The returned array is always a new object, so a single-point set
    yields an equal copy of that point rather than an alias.

    Raises:
        EmptyInputError: If ``points`` is empty.
        DimensionMismatchError: If the points differ in dimension.
    """
    matrix = as_point_matrix(points)
    if matrix.shape[0] == 0:
        raise EmptyInputError("cannot average an empty set of points.")
    return matrix.mean(axis=0)
