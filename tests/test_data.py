"""
tests/test_data.py

Tests for range finding and synthetic point generation.
"""

from __future__ import annotations

import numpy as np
import pytest

from kmeans.data import RandomClusterPointGenerator, find_ranges, generate_random_points
from kmeans.errors import DimensionMismatchError, EmptyInputError, KMeansError


RANGES = [[-5.0, 5.0], [100.0, 200.0], [0.0, 1.0]]


class TestFindRanges:
    def test_per_dimension_min_max(self) -> None:
        assert find_ranges([[1, 5], [3, 2], [-1, 8]]) == [[-1, 3], [2, 8]]

    def test_single_point(self) -> None:
        assert find_ranges([[4.0, -2.0]]) == [[4.0, 4.0], [-2.0, -2.0]]

    def test_generated_points_fall_within_ranges(self) -> None:
        points = generate_random_points(RANGES, 200)
        for (low, high), (found_low, found_high) in zip(RANGES, find_ranges(points)):
            assert low <= found_low <= found_high <= high

    def test_empty_raises(self) -> None:
        with pytest.raises(EmptyInputError):
            find_ranges([])

    def test_ragged_raises(self) -> None:
        with pytest.raises(DimensionMismatchError):
            find_ranges([[1, 2], [3]])


class TestRandomClusterPointGenerator:
    def test_shape(self) -> None:
        generator = RandomClusterPointGenerator(RANGES, seed=0)
        assert generator.generate(25).shape == (25, 3)
        assert generator.generate_point().shape == (3,)

    def test_zero_points(self) -> None:
        assert RandomClusterPointGenerator(RANGES, seed=0).generate(0).shape == (0, 3)

    def test_seeded_generators_agree(self) -> None:
        first = RandomClusterPointGenerator(RANGES, 4, 3, seed=12).generate(50)
        second = RandomClusterPointGenerator(RANGES, 4, 3, seed=12).generate(50)
        assert np.array_equal(first, second)

    def test_centers_inside_ranges(self) -> None:
        generator = RandomClusterPointGenerator(RANGES, n_centers=5, seed=1)
        assert generator.centers.shape == (5, 3)
        for dim, (low, high) in enumerate(RANGES):
            assert np.all(generator.centers[:, dim] >= low)
            assert np.all(generator.centers[:, dim] <= high)

    def test_higher_clumpiness_gives_tighter_points(self) -> None:
        loose = RandomClusterPointGenerator([[0, 1000]], clumpiness=1, seed=3).generate(500)
        tight = RandomClusterPointGenerator([[0, 1000]], clumpiness=50, seed=3).generate(500)
        assert tight.std() < loose.std()

    def test_degenerate_range_is_constant(self) -> None:
        points = RandomClusterPointGenerator([[2.0, 2.0]], seed=0).generate(10)
        assert points[:, 0].tolist() == [2.0] * 10

    @pytest.mark.parametrize(
        "ranges, clumpiness, n_centers",
        [
            ([], 4, 1),
            ([[1.0, 0.0]], 4, 1),
            ([[0.0, 1.0, 2.0]], 4, 1),
            ([[0.0, 1.0]], 0, 1),
            ([[0.0, 1.0]], 4, 0),
        ],
    )
    def test_invalid_configuration(self, ranges: list, clumpiness: float, n_centers: int) -> None:
        with pytest.raises(KMeansError):
            RandomClusterPointGenerator(ranges, clumpiness, n_centers)

    def test_negative_count_raises(self) -> None:
        with pytest.raises(KMeansError):
            RandomClusterPointGenerator(RANGES, seed=0).generate(-1)


def test_generate_random_points_uses_supplied_generator() -> None:
    generator = RandomClusterPointGenerator(RANGES, 4, 2, seed=99)
    expected = RandomClusterPointGenerator(RANGES, 4, 2, seed=99).generate(10)
    assert np.array_equal(generate_random_points(RANGES, 10, generator), expected)


def test_generator_ranges_must_match_requested_ranges() -> None:
    generator = RandomClusterPointGenerator([[0.0, 1.0]], seed=0)
    with pytest.raises(KMeansError):
        generate_random_points([[100.0, 200.0], [5.0, 6.0]], 3, generator)


def test_generator_reports_its_ranges() -> None:
    assert RandomClusterPointGenerator([[0, 1], [-2, 2]], seed=0).ranges == [[0.0, 1.0], [-2.0, 2.0]]


def test_generator_with_shifted_ranges_is_rejected() -> None:
    generator = RandomClusterPointGenerator([[0.0, 1.0]], seed=0)
    with pytest.raises(KMeansError):
        generate_random_points([[100.0, 200.0]], 3, generator)
