"""Tests for entropyx.drift.forecast."""

from datetime import datetime, timedelta, timezone

import pytest

from entropyx.drift.forecast import (
    WEATHER_LEGEND,
    Verdict,
    build_assessment,
    classify,
    detect_cold_front,
    detect_heat_spike,
    detect_heat_wave,
    improved_files,
    new_files,
    removed_files,
    trend,
    worsened_files,
)
from entropyx.drift.models import FileEntry, RepoSnapshot, SnapshotReport, SnapshotSummary

_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_report(scores, files=(), sloc=1000, file_count=10) -> SnapshotReport:
    history = tuple(
        RepoSnapshot(f"c{i}", _T0 + timedelta(days=i), file_count, sloc, s) for i, s in enumerate(scores)
    )
    return SnapshotReport(
        generated="2024-02-01T00:00:00+00:00",
        commit_count=len(history),
        summary=SnapshotSummary(drift_score=scores[-1] if scores else 0.0, files=file_count, sloc=sloc),
        history=history,
        latest_files=tuple(files),
    )


class TestDetectors:
    def test_trend(self):
        assert trend([1.0, 2.0, 4.0]) == pytest.approx(1.5)
        assert trend([1.0]) == 0.0
        assert trend([]) == 0.0

    def test_heat_spike(self):
        assert detect_heat_spike([0.5, 0.5, 0.5, 0.5, 2.5])

    def test_no_heat_spike_on_steady_climb(self):
        assert not detect_heat_spike([0.0, 0.25, 0.5, 0.75, 1.0])

    def test_no_heat_spike_on_short_series(self):
        assert not detect_heat_spike([0.1, 5.0])

    def test_heat_wave_plateau(self):
        assert detect_heat_wave([0.4, 0.4, 1.5, 1.6, 1.5])

    def test_no_heat_wave_on_continuing_climb(self):
        assert not detect_heat_wave([0.4, 0.7, 1.0, 1.3, 1.6])

    def test_no_heat_wave_on_short_series(self):
        assert not detect_heat_wave([0.4, 1.5, 1.5, 1.5])

    def test_cold_front(self):
        assert detect_cold_front([2.0, 1.7, 1.4, 1.1])

    def test_no_cold_front_when_rising(self):
        assert not detect_cold_front([0.5, 0.8, 1.1, 1.4])

    def test_no_cold_front_on_short_series(self):
        assert not detect_cold_front([2.0, 1.0, 0.5])


class TestClassify:
    def test_heat_wave_beats_simultaneous_spike(self):
        series = [0.4, 0.4, 1.5, 1.6, 1.5]
        assert detect_heat_spike(series)
        assert classify(0.4, 1.5, series) is Verdict.HEAT_WAVE

    def test_heat_spike(self):
        assert classify(0.5, 2.5, [0.5, 0.5, 0.5, 0.5, 2.5]) is Verdict.HEAT_SPIKE

    def test_cold_front(self):
        assert classify(2.0, 1.1, [2.0, 1.7, 1.4, 1.1]) is Verdict.COLD_FRONT

    def test_warming(self):
        assert classify(0.5, 0.6, [0.5, 0.52, 0.54, 0.56, 0.58, 0.6]) is Verdict.WARMING

    def test_cooling(self):
        assert classify(0.6, 0.58, [0.6, 0.595, 0.59, 0.585, 0.58]) is Verdict.COOLING

    def test_stable(self):
        assert classify(0.5, 0.5, [0.5, 0.5, 0.5]) is Verdict.STABLE

    def test_stable_without_history(self):
        assert classify(0.5, 0.51, []) is Verdict.STABLE

    def test_legend_lists_every_verdict_once(self):
        assert set(WEATHER_LEGEND) == set(Verdict)
        assert len(WEATHER_LEGEND) == len(Verdict)

    def test_label_combines_emoji_and_title(self):
        assert Verdict.HEAT_WAVE.label == f"{Verdict.HEAT_WAVE.emoji} Heat Wave"


class TestFileComparison:
    baseline = make_report(
        [1.0],
        files=[FileEntry("a.py", badness=1.0), FileEntry("b.py", badness=2.0), FileEntry("gone.py", badness=0.5)],
    )
    current = make_report(
        [1.2],
        files=[FileEntry("a.py", badness=1.8), FileEntry("b.py", badness=1.0), FileEntry("new.py", badness=0.3)],
    )

    def test_worsened(self):
        assert [f.path for f in worsened_files(self.baseline, self.current)] == ["a.py"]

    def test_improved(self):
        assert [f.path for f in improved_files(self.baseline, self.current)] == ["b.py"]

    def test_new_and_removed(self):
        assert [f.path for f in new_files(self.baseline, self.current)] == ["new.py"]
        assert [f.path for f in removed_files(self.baseline, self.current)] == ["gone.py"]


class TestBuildAssessment:
    def test_verdict_matches_classify(self):
        baseline = make_report([0.4])
        current = make_report([0.4, 0.4, 1.5, 1.6, 1.5])
        assessment = build_assessment(baseline, current)
        assert assessment.verdict is Verdict.HEAT_WAVE
        assert assessment.label == Verdict.HEAT_WAVE.label
        assert assessment.summary == Verdict.HEAT_WAVE.summary

    def test_unchanged_observation(self):
        report = make_report([0.5, 0.5, 0.5])
        observations = build_assessment(report, report).observations
        assert any("virtually unchanged" in o for o in observations)

    def test_growth_with_rising_drift(self):
        baseline = make_report([0.5], sloc=1000, file_count=10)
        current = make_report([0.5, 0.9], sloc=1500, file_count=12)
        observations = build_assessment(baseline, current).observations
        assert any("rose by 0.4000" in o for o in observations)
        assert any("grew by 500 SLOC with rising drift" in o for o in observations)
        assert any("2 new file(s)" in o for o in observations)

    def test_hotter_files_reported(self):
        observations = build_assessment(TestFileComparison.baseline, TestFileComparison.current).observations
        assert any("running hotter" in o and "a.py" in o for o in observations)
        assert any("cooled down" in o and "b.py" in o for o in observations)
