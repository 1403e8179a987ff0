"""Tests for entropyx.math.statistics module."""

import pytest

from entropyx.math.statistics import Statistics


class TestMeanAndSpread:
    def test_mean(self):
        assert Statistics.mean([1.0, 2.0, 3.0, 6.0]) == 3.0

    def test_mean_empty(self):
        assert Statistics.mean([]) == 0.0

    def test_population_std(self):
        # deviations ±2 around 4: σ = 2 with N in the denominator
        assert Statistics.population_std([2.0, 6.0, 2.0, 6.0]) == pytest.approx(2.0)

    def test_std_empty_and_constant(self):
        assert Statistics.population_std([]) == 0.0
        assert Statistics.population_std([3.0, 3.0]) == 0.0


class TestFirstDifferences:
    def test_differences(self):
        assert Statistics.first_differences([1.0, 1.5, 1.25]) == [0.5, -0.25]

    def test_too_short(self):
        assert Statistics.first_differences([1.0]) == []
        assert Statistics.first_differences([]) == []


class TestMinMax:
    def test_rescales_to_unit_range(self):
        assert Statistics.min_max([2.0, 4.0, 6.0]) == [0.0, 0.5, 1.0]

    def test_constant_maps_to_zero(self):
        assert Statistics.min_max([7.0, 7.0]) == [0.0, 0.0]
        assert Statistics.min_max([7.0]) == [0.0]

    def test_empty(self):
        assert Statistics.min_max([]) == []
