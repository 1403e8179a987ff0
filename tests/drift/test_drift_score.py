"""Tests for entropyx.drift.score."""

import math

import pytest

from entropyx.drift.models import FileSample
from entropyx.drift.score import compute_drift, diffusion_contributions, drift_score
from entropyx.math import Entropy


class TestDriftScore:
    def test_empty(self):
        assert drift_score([]) == 0.0

    def test_single_file_population_is_zero(self):
        assert drift_score([3.0]) == 0.0

    def test_single_active_file_is_zero(self):
        assert drift_score([2.0, 0.0, 0.0]) == 0.0

    def test_equal_badness_equals_value(self):
        for k in (2, 3, 7):
            assert drift_score([0.8] * k) == pytest.approx(0.8)

    def test_inactive_files_are_ignored(self):
        assert drift_score([1.0, 1.0, 0.0, 1e-12]) == pytest.approx(1.0)

    def test_concentrated_cost_scores_below_spread_cost(self):
        spread = drift_score([1.0, 1.0, 1.0, 1.0])
        concentrated = drift_score([3.7, 0.1, 0.1, 0.1])
        assert concentrated < spread

    def test_sloc_pair_population(self):
        samples = [
            FileSample("a.py", "Python", sloc=1, cyclomatic_complexity=0.0, maintainability_index=100.0),
            FileSample("b.py", "Python", sloc=0, cyclomatic_complexity=0.0, maintainability_index=100.0),
        ]
        expected = (math.log2(3) - 2.0 / 3.0) * 1.5
        assert compute_drift(samples) == pytest.approx(expected)

    def test_compute_drift_empty(self):
        assert compute_drift([]) == 0.0


class TestDiffusionContributions:
    def test_sum_equals_entropy(self):
        badness = [1.0, 2.0, 0.0, 3.0]
        contributions = diffusion_contributions(badness)
        assert sum(contributions) == pytest.approx(Entropy.shannon([1.0, 2.0, 3.0]))

    def test_inactive_files_contribute_nothing(self):
        contributions = diffusion_contributions([1.0, 0.0, 1.0])
        assert contributions[1] == 0.0
        assert contributions[0] == pytest.approx(0.5)

    def test_all_zero(self):
        assert diffusion_contributions([0.0, 0.0]) == [0.0, 0.0]
