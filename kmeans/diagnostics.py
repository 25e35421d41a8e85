"""
Cluster quality diagnostics.

Statistics computed from a dataset, a mean set and an assignment
vector. Nothing here changes the clustering; every function is a pure
read of its inputs.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict

import numpy as np
from sklearn.metrics import silhouette_score

from kmeans.errors import DimensionMismatchError, EmptyInputError, InvalidAssignmentError
from kmeans.geometry import as_point_matrix, distance, squared_error


def _validate_parallel(points: np.ndarray, assignments: np.ndarray) -> None:
    if points.shape[0] != assignments.shape[0]:
        raise DimensionMismatchError(
            f"points and assignments arrays must be of same dimension; "
            f"got {points.shape[0]} points and {assignments.shape[0]} assignments."
        )


def _validate_labels(assignments: np.ndarray, n_means: int) -> None:
    if assignments.size == 0:
        return
    if not np.issubdtype(assignments.dtype, np.integer):
        raise InvalidAssignmentError(
            f"assignments must be integer mean indices, got dtype {assignments.dtype}."
        )
    low = int(assignments.min())
    high = int(assignments.max())
    if low < 0 or high >= n_means:
        raise InvalidAssignmentError(
            f"assignments must lie in [0, {n_means}); got values in [{low}, {high}]."
        )


def sum_squared_error(points, means, assignments) -> float:
    """
    Total within-cluster squared error; the objective Lloyd's algorithm minimizes.

    Args:
        points:      Dataset of shape (n_points, n_dims).
        means:       Mean set of shape (k, n_dims).
        assignments: Mean index for each point.

    Returns:
        Sum over points of the squared distance to the assigned mean.

    Raises:
        DimensionMismatchError: If points and assignments differ in length.
        InvalidAssignmentError: If a label is outside [0, len(means)).
    """
    matrix = as_point_matrix(points)
    labels = np.asarray(assignments)
    _validate_parallel(matrix, labels)
    _validate_labels(labels, len(means))

    total = 0.0
    for point, label in zip(matrix, labels):
        total += squared_error(point, means[int(label)])
    return total


def find_average_distance_point_to_mean(points, means, assignments) -> float:
    """
    Mean Euclidean distance from each point to its assigned mean.

    Raises:
        DimensionMismatchError: If points and assignments differ in length.
        EmptyInputError: If there are no points.
        InvalidAssignmentError: If a label is outside [0, len(means)).
    """
    matrix = as_point_matrix(points)
    labels = np.asarray(assignments)
    _validate_parallel(matrix, labels)
    _validate_labels(labels, len(means))

    if matrix.shape[0] == 0:
        raise EmptyInputError("cannot average distances over zero points.")

    total = 0.0
    for point, label in zip(matrix, labels):
        total += distance(point, means[int(label)])
    return total / matrix.shape[0]


def find_average_mean_separation(means) -> float:
    """
    Average distance over every unordered pair of means.

    A mean set of size k contributes k * (k - 1) / 2 pairs.

    Raises:
        EmptyInputError: If fewer than two means are given.
    """
    matrix = as_point_matrix(means)
    n_means = matrix.shape[0]
    if n_means < 2:
        raise EmptyInputError(
            f"mean separation needs at least 2 means, got {n_means}."
        )

    total = 0.0
    pairs = 0
    for i in range(n_means - 1):
        for j in range(i + 1, n_means):
            total += distance(matrix[i], matrix[j])
            pairs += 1
    return total / pairs


def count_points_per_mean(assignments) -> Dict[int, int]:
    """
    Count assigned points for each mean index.

    The mapping is sparse: indices with no points are absent rather
    than present with a zero count. Keys are sorted ascending.
    """
    counts = Counter(int(label) for label in assignments)
    return dict(sorted(counts.items()))


def profile_clusters(points, means, assignments) -> dict:
    """
    Summarise each populated cluster.

    Args:
        points:      Dataset of shape (n_points, n_dims).
        means:       Mean set of shape (k, n_dims).
        assignments: Mean index for each point.

    Returns:
        Dict mapping cluster_id (int) to a profile dict::

            {
                cluster_id: {
                    "size": int,
                    "sse": float,
                    "avg_distance": float,
                    "max_distance": float,
                },
                ...
            }

        Clusters with no points are omitted, matching
        :func:`count_points_per_mean`.

    Raises:
        DimensionMismatchError: If points and assignments differ in length.
        InvalidAssignmentError: If a label is outside [0, len(means)).
    """
    matrix = as_point_matrix(points)
    labels = np.asarray(assignments)
    _validate_parallel(matrix, labels)
    _validate_labels(labels, len(means))

    buckets: dict[int, list[float]] = defaultdict(list)
    for point, label in zip(matrix, labels):
        cluster_id = int(label)
        buckets[cluster_id].append(squared_error(point, means[cluster_id]))

    profiles = {}
    for cluster_id, errors in sorted(buckets.items()):
        squared = np.asarray(errors)
        distances = np.sqrt(squared)
        profiles[cluster_id] = {
            "size": len(errors),
            "sse": float(squared.sum()),
            "avg_distance": float(distances.mean()),
            "max_distance": float(distances.max()),
        }
    return profiles


def silhouette(points, assignments) -> float:
    """
    Mean silhouette coefficient of the clustering, in [-1, 1].

    Raises:
        DimensionMismatchError: If points and assignments differ in length.
        EmptyInputError: Unless 2 <= distinct labels <= n_points - 1.
    """
    matrix = as_point_matrix(points)
    labels = np.asarray(assignments)
    _validate_parallel(matrix, labels)

    n_labels = len(np.unique(labels))
    if not 2 <= n_labels <= matrix.shape[0] - 1:
        raise EmptyInputError(
            f"silhouette needs between 2 and {max(matrix.shape[0] - 1, 0)} "
            f"distinct clusters, got {n_labels}."
        )
    return float(silhouette_score(matrix, labels))
