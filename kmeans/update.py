"""
kmeans/update.py

Centroid update step of Lloyd's algorithm.
"""

from __future__ import annotations

import numpy as np

from kmeans.errors import DimensionMismatchError, KMeansError
from kmeans.geometry import as_point_matrix, average_position


def move_means_to_centers(points, assignments, means):
    """
    Move each mean to the average position of its assigned points.

    A mean with no assigned points keeps its previous position, so an
    empty cluster never collapses to NaN.

    Args:
        points:      Dataset of shape (n_points, n_dims).
        assignments: Mean index for each point, same length as ``points``.
        means:       Mutable mean set (list of points or 2-D array).
                     Updated in place.

    Returns:
        The same ``means`` object that was passed in.

    Raises:
        DimensionMismatchError: If ``points`` and ``assignments`` differ in length.
        KMeansError: If ``means`` is an array with a non-floating dtype, which
            would truncate the new centroids.
    """
    if isinstance(means, np.ndarray) and not np.issubdtype(means.dtype, np.floating):
        raise KMeansError(
            f"means array must have a floating dtype, got {means.dtype}; "
            f"pass means.astype(float) instead."
        )

    matrix = as_point_matrix(points)
    labels = np.asarray(assignments)

    if matrix.shape[0] != labels.shape[0]:
        raise DimensionMismatchError(
            f"points and assignments arrays must be of same dimension; "
            f"got {matrix.shape[0]} points and {labels.shape[0]} assignments."
        )

    for index in range(len(means)):
        # boolean mask keeps the original point order
        assigned = matrix[labels == index]
        if assigned.shape[0] > 0:
            means[index] = average_position(assigned)

    return means
