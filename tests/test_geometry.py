"""
tests/test_geometry.py

Unit tests for the distance, error and centroid primitives.

Coverage
--------
- Distance symmetry and zero self-distance
- squared_error / distance consistency
- Dimension mismatch failures
- average_position on single, multiple and empty point sets
"""

from __future__ import annotations

import numpy as np
import pytest

from kmeans.errors import DimensionMismatchError, EmptyInputError, KMeansError
from kmeans.geometry import as_point_matrix, average_position, distance, squared_error


POINT_PAIRS = [
    ([0.0, 0.0], [3.0, 4.0]),
    ([1.5, -2.0, 7.0], [-4.0, 0.25, 7.0]),
    ([10.0], [-10.0]),
    ([1e-3, 2e-3], [5e3, -1e2]),
]


class TestDistance:
    @pytest.mark.parametrize("a, b", POINT_PAIRS)
    def test_symmetric(self, a: list[float], b: list[float]) -> None:
        assert distance(a, b) == distance(b, a)

    @pytest.mark.parametrize("a, _b", POINT_PAIRS)
    def test_zero_to_self(self, a: list[float], _b: list[float]) -> None:
        assert distance(a, a) == 0.0

    def test_known_value(self) -> None:
        assert distance([0, 0], [3, 4]) == pytest.approx(5.0)

    @pytest.mark.parametrize("a, b", POINT_PAIRS)
    def test_squared_error_is_distance_squared(self, a: list[float], b: list[float]) -> None:
        assert squared_error(a, b) == pytest.approx(distance(a, b) ** 2, rel=1e-12)

    def test_squared_error_rejects_mismatched_dimensions(self) -> None:
        with pytest.raises(DimensionMismatchError):
            squared_error([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_distance_propagates_mismatch(self) -> None:
        with pytest.raises(DimensionMismatchError):
            distance([1.0], [1.0, 2.0])

    def test_returns_python_float(self) -> None:
        assert isinstance(squared_error(np.array([1, 2]), np.array([2, 2])), float)


class TestAveragePosition:
    def test_single_point_round_trips(self) -> None:
        point = [1.25, -3.5, 8.0]
        assert average_position([point]).tolist() == point

    def test_single_point_is_copied(self) -> None:
        points = np.array([[1.0, 2.0]])
        result = average_position(points)
        result[0] = 99.0
        assert points[0, 0] == 1.0

    def test_coordinate_wise_mean(self) -> None:
        result = average_position([[0, 0], [2, 4], [4, 8]])
        assert result.tolist() == pytest.approx([2.0, 4.0])

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptyInputError):
            average_position([])

    def test_ragged_points_raise(self) -> None:
        with pytest.raises(DimensionMismatchError):
            average_position([[1.0, 2.0], [3.0]])


class TestAsPointMatrix:
    def test_empty_sequence_has_zero_shape(self) -> None:
        assert as_point_matrix([]).shape == (0, 0)

    def test_flat_sequence_is_rejected(self) -> None:
        with pytest.raises(DimensionMismatchError):
            as_point_matrix([1.0, 2.0, 3.0])

    def test_non_numeric_points_are_not_a_dimension_error(self) -> None:
        with pytest.raises(KMeansError) as excinfo:
            as_point_matrix([["a"]])
        assert not isinstance(excinfo.value, DimensionMismatchError)

    def test_non_numeric_point_raises(self) -> None:
        with pytest.raises(KMeansError):
            squared_error(["x", 1.0], [0.0, 1.0])
