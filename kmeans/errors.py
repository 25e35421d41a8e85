"""
kmeans/errors.py

Exception taxonomy for clustering input and shape failures.
"""

from __future__ import annotations


class KMeansError(ValueError):
    """Base exception for invalid clustering inputs."""


class DimensionMismatchError(KMeansError):
    """Raised when two arrays expected to be parallel differ in length."""


class EmptyInputError(KMeansError):
    """Raised when an operation requires at least one element and got none."""


class EmptyMeanSetError(EmptyInputError):
    """Raised when a point is compared against an empty set of means."""


class InvalidKError(KMeansError):
    """Raised when the requested cluster count is outside [1, n_points]."""

    def __init__(self, k: object, n_points: int) -> None:
        self.k = k
        self.n_points = n_points
        super().__init__(
            f"k must be an integer in [1, {n_points}] for {n_points} point(s); got {k!r}."
        )


class InvalidAssignmentError(KMeansError):
    """Raised when an assignment refers to a mean index that does not exist."""
