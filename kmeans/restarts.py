"""
kmeans/restarts.py

Best-of-N k-means: several independent runs, keep the lowest SSE.

Runs share nothing. Each gets its own child seed spawned from one
parent ``SeedSequence``, so a given seed reproduces the same winner
regardless of worker count or completion order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from kmeans.lloyd import ClusteringResult, algorithm, validate_k
from kmeans.config import get_clustering_settings
from kmeans.diagnostics import sum_squared_error
from kmeans.geometry import as_point_matrix
from kmeans.logging_utils import log_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestartSummary:
    """
    Outcome of a best-of-N search.
    """

    best: ClusteringResult
    """Result of the winning run."""

    best_sse: float
    """Sum-squared error of the winning run."""

    best_run: int
    """Index of the winning run (lowest index wins ties)."""

    sse_per_run: List[float] = field(default_factory=list)
    """SSE of every run, in run-index order."""


def _run_once(
    run_index: int,
    points: np.ndarray,
    k: int,
    max_iterations: int,
    seed: np.random.SeedSequence,
) -> Tuple[int, ClusteringResult, float]:
    """Single isolated run; module-level so worker processes can unpickle it."""
    result = algorithm(
        points,
        k,
        max_iterations=max_iterations,
        random_state=np.random.default_rng(seed),
    )
    sse = sum_squared_error(points, result.means, result.assignments)
    return run_index, result, sse


def best_of_n(
    points,
    k: int,
    n_runs: int | None = None,
    *,
    max_iterations: int | None = None,
    seed: int | None = None,
    max_workers: int | None = None,
) -> RestartSummary:
    """
    Run k-means ``n_runs`` times from independent random starts.

    Args:
        points:         Dataset of shape (n_points, n_dims).
        k:              Number of clusters.
        n_runs:         Number of runs; defaults to ``ClusteringSettings.n_runs``.
        max_iterations: Per-run iteration cap; defaults to the configured cap.
        seed:           Parent seed; defaults to ``ClusteringSettings.random_seed``.
        max_workers:    Process pool size; ``1`` runs sequentially in-process.
                        Defaults to ``ClusteringSettings.max_workers``.

    Returns:
        RestartSummary for the run with the lowest sum-squared error.

    Raises:
        InvalidKError, EmptyInputError, DimensionMismatchError: As for
            :func:`kmeans.lloyd.algorithm`; raised before any run starts.
        ValueError: If ``n_runs`` or ``max_workers`` is < 1.
    """
    settings = get_clustering_settings()
    matrix = as_point_matrix(points)
    k = validate_k(k, matrix.shape[0])

    n_runs = settings.n_runs if n_runs is None else n_runs
    max_iterations = settings.max_iterations if max_iterations is None else max_iterations
    seed = settings.random_seed if seed is None else seed
    max_workers = settings.max_workers if max_workers is None else max_workers

    if n_runs < 1:
        raise ValueError(f"n_runs must be >= 1, got {n_runs!r}.")
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers!r}.")

    child_seeds = np.random.SeedSequence(seed).spawn(n_runs)

    if max_workers == 1:
        outcomes = [
            _run_once(index, matrix, k, max_iterations, child)
            for index, child in enumerate(child_seeds)
        ]
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_run_once, index, matrix, k, max_iterations, child)
                for index, child in enumerate(child_seeds)
            ]
            outcomes = [future.result() for future in futures]

    outcomes.sort(key=lambda outcome: outcome[0])
    sse_per_run = [sse for _, _, sse in outcomes]

    best_run, best_result, best_sse = outcomes[0]
    for run_index, result, sse in outcomes[1:]:
        if sse < best_sse:
            best_run, best_result, best_sse = run_index, result, sse

    not_converged = sum(1 for _, result, _ in outcomes if not result.converged)
    if not_converged:
        logger.warning("%d of %d k-means runs did not converge", not_converged, n_runs)

    log_event(
        logger,
        logging.INFO,
        "kmeans_best_of_n_finished",
        k=k,
        n_runs=n_runs,
        max_workers=max_workers,
        best_run=best_run,
        best_sse=best_sse,
    )

    return RestartSummary(
        best=best_result,
        best_sse=best_sse,
        best_run=best_run,
        sse_per_run=sse_per_run,
    )
