"""Serializable summary of a finished k-means run."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from kmeans.lloyd import ClusteringResult
from kmeans.diagnostics import (
    count_points_per_mean,
    find_average_distance_point_to_mean,
    find_average_mean_separation,
    sum_squared_error,
)
from kmeans.geometry import as_point_matrix


class ClusteringReport(BaseModel):
    """Quality summary for one clustering result."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    n_points: int = Field(ge=1)
    n_clusters: int = Field(ge=1)
    dimensions: int = Field(ge=0)
    steps: int = Field(ge=1)
    converged: bool
    sse: float = Field(ge=0.0)
    average_distance_point_to_mean: float = Field(ge=0.0)
    # None when there is a single cluster
    average_mean_separation: Optional[float] = Field(default=None, ge=0.0)
    points_per_mean: Dict[int, int]


def build_report(points, result: ClusteringResult) -> ClusteringReport:
    """Compute every diagnostic for ``result`` over ``points``."""
    matrix = as_point_matrix(points)
    means = result.means
    assignments = result.assignments

    separation = None
    if len(means) >= 2:
        separation = find_average_mean_separation(means)

    return ClusteringReport(
        n_points=matrix.shape[0],
        n_clusters=len(means),
        dimensions=matrix.shape[1],
        steps=result.steps,
        converged=result.converged,
        sse=sum_squared_error(matrix, means, assignments),
        average_distance_point_to_mean=find_average_distance_point_to_mean(
            matrix, means, assignments
        ),
        average_mean_separation=separation,
        points_per_mean=count_points_per_mean(assignments),
    )
