"""
kmeans/assignment.py

Nearest-mean assignment and the convergence signal.

Ties between equally distant means always resolve to the lowest mean
index, both for a single point and for a whole dataset.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from kmeans.errors import DimensionMismatchError, EmptyInputError, EmptyMeanSetError
from kmeans.geometry import as_point, as_point_matrix


def find_index_of_minimum(values: Sequence[float]) -> int:
    """
    Return the index of the first smallest value under strict ``<``.

    Raises:
        EmptyInputError: If ``values`` is empty.
    """
    if len(values) == 0:
        raise EmptyInputError("cannot take the minimum of an empty sequence.")

    best_index = 0
    best_value = values[0]
    for index in range(1, len(values)):
        if values[index] < best_value:
            best_index = index
            best_value = values[index]
    return best_index


def _mean_matrix(means, n_dims: int) -> np.ndarray:
    matrix = as_point_matrix(means)
    if matrix.shape[0] == 0:
        raise EmptyMeanSetError("means must contain at least one point.")
    if matrix.shape[1] != n_dims:
        raise DimensionMismatchError(
            f"points have dimension {n_dims} but means have dimension {matrix.shape[1]}."
        )
    return matrix


def find_closest_mean(point, means) -> int:
    """
    Return the index of the mean nearest to ``point`` (Euclidean).

    Raises:
        EmptyMeanSetError: If ``means`` is empty.
        DimensionMismatchError: If ``point`` and the means differ in dimension.
    """
    p = as_point(point)
    matrix = _mean_matrix(means, p.shape[0])
    distances = np.sqrt(((matrix - p) ** 2).sum(axis=1))
    return find_index_of_minimum(distances)


def assign_points_to_means(points, means) -> np.ndarray:
    """
    Return the closest-mean index for every point, in point order.

    Args:
        points: Dataset of shape (n_points, n_dims).
        means:  Mean set of shape (k, n_dims).

    Returns:
        1-D integer array of length ``n_points`` with values in ``[0, k)``.

    Raises:
        EmptyMeanSetError: If ``means`` is empty.
        DimensionMismatchError: If points and means differ in dimension.
    """
    matrix = as_point_matrix(points)
    if matrix.shape[0] == 0:
        if len(means) == 0:
            raise EmptyMeanSetError("means must contain at least one point.")
        return np.empty(0, dtype=np.intp)

    mean_matrix = _mean_matrix(means, matrix.shape[1])

    # (n_points, k) distance table; argmin keeps the first minimal column
    diff = matrix[:, np.newaxis, :] - mean_matrix[np.newaxis, :, :]
    distances = np.sqrt((diff ** 2).sum(axis=2))
    return np.argmin(distances, axis=1).astype(np.intp)


def count_changed_assignments(old_assignments, new_assignments) -> int:
    """
    Count the positions where two assignment vectors differ.

    Raises:
        DimensionMismatchError: If the vectors differ in length.
    """
    old = np.asarray(old_assignments)
    new = np.asarray(new_assignments)
    if old.shape[0] != new.shape[0]:
        raise DimensionMismatchError(
            f"old and new assignment arrays must be of same dimension; "
            f"got {old.shape[0]} and {new.shape[0]}."
        )
    return int(np.count_nonzero(old != new))
