"""Lloyd's k-means clustering over arbitrary-dimensional point sets."""

from kmeans.lloyd import ClusteringResult, LloydKMeans, algorithm
from kmeans.assignment import (
    assign_points_to_means,
    count_changed_assignments,
    find_closest_mean,
    find_index_of_minimum,
)
from kmeans.data import RandomClusterPointGenerator, find_ranges, generate_random_points
from kmeans.diagnostics import (
    count_points_per_mean,
    find_average_distance_point_to_mean,
    find_average_mean_separation,
    profile_clusters,
    silhouette,
    sum_squared_error,
)
from kmeans.errors import (
    DimensionMismatchError,
    EmptyInputError,
    EmptyMeanSetError,
    InvalidAssignmentError,
    InvalidKError,
    KMeansError,
)
from kmeans.geometry import average_position, distance, squared_error
from kmeans.report import ClusteringReport, build_report
from kmeans.restarts import RestartSummary, best_of_n
from kmeans.update import move_means_to_centers

__all__ = [
    "ClusteringReport",
    "ClusteringResult",
    "DimensionMismatchError",
    "EmptyInputError",
    "EmptyMeanSetError",
    "InvalidAssignmentError",
    "InvalidKError",
    "KMeansError",
    "LloydKMeans",
    "RandomClusterPointGenerator",
    "RestartSummary",
    "algorithm",
    "assign_points_to_means",
    "average_position",
    "best_of_n",
    "build_report",
    "count_changed_assignments",
    "count_points_per_mean",
    "distance",
    "find_average_distance_point_to_mean",
    "find_average_mean_separation",
    "find_closest_mean",
    "find_index_of_minimum",
    "find_ranges",
    "generate_random_points",
    "move_means_to_centers",
    "profile_clusters",
    "silhouette",
    "squared_error",
    "sum_squared_error",
]
