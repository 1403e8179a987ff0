"""Tests for entropyx.drift.badness."""

import pytest

from entropyx.drift.badness import WEIGHT_MAINTAINABILITY, WEIGHT_SIZE, compute_badness
from entropyx.drift.score import compute_drift
from entropyx.drift.models import FileSample


def make_sample(path: str, sloc: int = 0, cc: float = 0.0, mi: float = 100.0, **kwargs) -> FileSample:
    return FileSample(path, "Python", sloc=sloc, cyclomatic_complexity=cc, maintainability_index=mi, **kwargs)


class TestComputeBadness:
    def test_empty_population(self):
        assert compute_badness([]) == []

    def test_badness_is_non_negative(self, population):
        assert all(b >= 0.0 for b in compute_badness(population))

    def test_one_value_per_sample(self, population):
        assert len(compute_badness(population)) == len(population)

    def test_costliest_file_scores_highest(self, population):
        badness = compute_badness(population)
        assert badness[2] == max(badness)
        assert badness[0] == min(badness)

    def test_sloc_pair(self):
        """Two files differing only in SLOC {1, 0}."""
        badness = compute_badness([make_sample("a.py", sloc=1), make_sample("b.py", sloc=0)])
        assert badness == pytest.approx([WEIGHT_SIZE + WEIGHT_MAINTAINABILITY, WEIGHT_MAINTAINABILITY])

    def test_identical_files_share_badness(self):
        badness = compute_badness([make_sample("a.py", sloc=5, cc=2.0)] * 3)
        assert badness[0] == badness[1] == badness[2]

    def test_low_maintainability_adds_cost(self):
        badness = compute_badness([make_sample("a.py", mi=10.0), make_sample("b.py", mi=90.0)])
        assert badness[0] > badness[1]

    def test_shared_maintainability_carries_full_weight(self):
        samples = [make_sample(f"{n}.py", sloc=5, cc=2.0, mi=60.0) for n in "abc"]
        assert compute_badness(samples) == pytest.approx([WEIGHT_MAINTAINABILITY] * 3)
        assert compute_drift(samples) == pytest.approx(WEIGHT_MAINTAINABILITY)

    def test_maintainability_only_difference(self):
        badness = compute_badness([make_sample("a.py", mi=100.0), make_sample("b.py", mi=50.0)])
        assert badness == pytest.approx([0.0, WEIGHT_MAINTAINABILITY])
