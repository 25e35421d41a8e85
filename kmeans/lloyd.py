"""
Lloyd's k-means orchestration.

Drives the assign / update loop to convergence and exposes the result.
The geometry, assignment and update steps live in their own modules;
this module only sequences them, bounds the loop and reports progress.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np

from kmeans.assignment import assign_points_to_means, count_changed_assignments
from kmeans.config import get_clustering_settings
from kmeans.diagnostics import sum_squared_error
from kmeans.errors import EmptyInputError, InvalidKError
from kmeans.geometry import as_point_matrix
from kmeans.logging_utils import log_event
from kmeans.update import move_means_to_centers

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], Any]
RandomState = Optional[int | np.random.Generator | np.random.SeedSequence]

STATUS_CONVERGED = "converged"
STATUS_NOT_CONVERGED = "not_converged"


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClusteringResult:
    """
    Outcome of one k-means run. Owned by the caller.
    """

    means: np.ndarray
    """Final mean positions, shape (k, n_dims)."""

    assignments: np.ndarray
    """Final mean index for each point, shape (n_points,)."""

    steps: int
    """Number of assign/update iterations executed (at least 1)."""

    converged: bool = True
    """False when the run stopped on the iteration cap or an interrupt."""

    @property
    def status(self) -> str:
        return STATUS_CONVERGED if self.converged else STATUS_NOT_CONVERGED

    def as_dict(self) -> dict:
        """Plain-python view with ``means``, ``assignments``, ``steps``, ``converged``."""
        return {
            "means": self.means.tolist(),
            "assignments": self.assignments.tolist(),
            "steps": self.steps,
            "converged": self.converged,
        }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def validate_k(k: object, n_points: int) -> int:
    """
    Check that ``k`` is an integer in ``[1, n_points]`` and return it as ``int``.

    Raises:
        EmptyInputError: If the dataset is empty.
        InvalidKError:   On any other invalid ``k``.
    """
    if n_points == 0:
        raise EmptyInputError("cannot cluster an empty dataset.")
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidKError(k, n_points)
    if not 1 <= k <= n_points:
        raise InvalidKError(k, n_points)
    return int(k)


def initial_means(points: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """
    Pick ``k`` point positions uniformly at random, with replacement.

    Each mean is an independent copy of the sampled point's coordinates.
    """
    indices = rng.integers(0, points.shape[0], size=k)
    return points[indices].copy()


def algorithm(
    points,
    k: int,
    progress: ProgressCallback | None = None,
    *,
    max_iterations: int | None = None,
    random_state: RandomState = None,
    stop_event: threading.Event | None = None,
) -> ClusteringResult:
    """
    Run Lloyd's algorithm, classifying ``points`` into ``k`` groups.

    Args:
        points:         Dataset of shape (n_points, n_dims).
        k:              Number of clusters, 1 <= k <= n_points.
        progress:       Optional observer called after every iteration as
                        ``progress(change_count, iteration_index)``.
                        Its return value is ignored.
        max_iterations: Iteration cap. Defaults to
                        ``ClusteringSettings.max_iterations``.
        random_state:   Seed, ``SeedSequence`` or ``numpy.random.Generator``
                        used for initialization. Defaults to
                        ``ClusteringSettings.random_seed``.
        stop_event:     Checked after each iteration; when set, the run
                        stops early and reports ``converged=False``.

    Returns:
        ClusteringResult with the final means, assignments, step count
        and convergence flag.

    Raises:
        InvalidKError:          If ``k`` is outside ``[1, n_points]``.
        EmptyInputError:        If ``points`` is empty.
        DimensionMismatchError: If the points differ in dimension.
    """
    settings = get_clustering_settings()
    matrix = as_point_matrix(points)
    k = validate_k(k, matrix.shape[0])

    if max_iterations is None:
        max_iterations = settings.max_iterations
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations!r}.")

    if random_state is None:
        random_state = settings.random_seed
    rng = np.random.default_rng(random_state)

    progress_level = logging.INFO if settings.log_progress else logging.DEBUG

    # INIT
    means = initial_means(matrix, k, rng)
    assignments = assign_points_to_means(matrix, means)

    # ITERATE
    steps = 0
    converged = False
    while True:
        move_means_to_centers(matrix, assignments, means)
        previous = assignments
        assignments = assign_points_to_means(matrix, means)
        change_count = count_changed_assignments(assignments, previous)

        if progress is not None:
            progress(change_count, steps)
        logger.log(progress_level, "iteration=%d changed=%d", steps, change_count)

        steps += 1

        if change_count == 0:
            converged = True
            break

        if steps >= max_iterations:
            logger.warning(
                "k-means did not converge within %d iterations (k=%d, last change count=%d)",
                max_iterations,
                k,
                change_count,
            )
            break

        if stop_event is not None and stop_event.is_set():
            logger.warning("k-means interrupted after %d iterations (k=%d)", steps, k)
            break

    log_event(
        logger,
        logging.INFO,
        "kmeans_run_finished",
        n_points=matrix.shape[0],
        k=k,
        steps=steps,
        status=STATUS_CONVERGED if converged else STATUS_NOT_CONVERGED,
    )

    return ClusteringResult(
        means=means,
        assignments=assignments,
        steps=steps,
        converged=converged,
    )


# ---------------------------------------------------------------------------
# Estimator-style wrapper
# ---------------------------------------------------------------------------


class LloydKMeans:
    """
    Stateful wrapper around :func:`algorithm` with a fit / predict surface.

    Responsibilities:
        - Run one k-means fit and keep its result.
        - Assign new points to the fitted means.

    Not responsible for:
        - Feature scaling; points are clustered as given.
        - Choosing k or running restarts (see :mod:`kmeans.restarts`).

    Args:
        n_clusters:     Number of clusters (k).
        max_iterations: Iteration cap; ``None`` uses the configured default.
        random_state:   Seed or generator for initialization.
    """

    def __init__(
        self,
        n_clusters: int,
        max_iterations: int | None = None,
        random_state: RandomState = None,
    ) -> None:
        self.n_clusters = n_clusters
        self.max_iterations = max_iterations
        self.random_state = random_state
        self._result: ClusteringResult | None = None
        self.inertia_: float | None = None

    def fit(
        self,
        points,
        progress: ProgressCallback | None = None,
        stop_event: threading.Event | None = None,
    ) -> "LloydKMeans":
        matrix = as_point_matrix(points)
        self._result = algorithm(
            matrix,
            self.n_clusters,
            progress,
            max_iterations=self.max_iterations,
            random_state=self.random_state,
            stop_event=stop_event,
        )
        self.inertia_ = sum_squared_error(
            matrix, self._result.means, self._result.assignments
        )
        return self

    def predict(self, points) -> np.ndarray:
        return assign_points_to_means(points, self._fitted().means)

    def fit_predict(self, points) -> np.ndarray:
        return self.fit(points).labels_

    @property
    def result(self) -> ClusteringResult:
        return self._fitted()

    @property
    def cluster_centers_(self) -> np.ndarray:
        return self._fitted().means

    @property
    def labels_(self) -> np.ndarray:
        return self._fitted().assignments

    @property
    def n_iter_(self) -> int:
        return self._fitted().steps

    @property
    def converged_(self) -> bool:
        return self._fitted().converged

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _fitted(self) -> ClusteringResult:
        if self._result is None:
            raise RuntimeError("LloydKMeans instance is not fitted yet; call fit() first.")
        return self._result
