"""Trend classification of drift scores into weather-style verdicts.

Given a baseline and a current snapshot, ``classify`` picks exactly one
Verdict from the change in headline score and the shape of the current
snapshot's score history. ``build_assessment`` adds human-readable
observations for reports.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..math import Statistics
from .models import FileEntry, SnapshotReport

ELEVATION_THRESHOLD = 0.05
TREND_EPSILON = 0.001
WARMING_DELTA = 0.01
SPIKE_SIGMA = 1.5
COLD_FRONT_RATIO = 0.7
DEFAULT_WINDOW = 3
BADNESS_TOLERANCE = 1e-9


class Verdict(Enum):
    STABLE = (
        "Stable",
        "⚖️",
        "Drift is flat within normal variability; no significant structural change.",
        "Drift is flat within normal variability. No significant structural change "
        "was detected and the codebase temperature is holding steady.",
    )
    WARMING = (
        "Warming",
        "🌡️",
        "Drift is trending up steadily; structural cost accumulates commit by commit.",
        "Drift is creeping upward. There is no immediate crisis, but structural "
        "complexity is accumulating, so keep an eye on the hot spots.",
    )
    COOLING = (
        "Cooling",
        "🧊",
        "Drift is trending downward; stabilization or refactoring is paying off.",
        "Drift is trending downward and the codebase is stabilizing. Refactoring "
        "and cleanup are having a measurable effect.",
    )
    HEAT_SPIKE = (
        "Heat Spike",
        "🔥",
        "Drift jumps sharply in a single step; a regression event was detected.",
        "Drift spiked sharply. A single regression event has disrupted the "
        "structural balance of the codebase; investigate the recent commits.",
    )
    HEAT_WAVE = (
        "Heat Wave",
        "♨️",
        "Drift stays elevated across a sustained window; cost accumulates unchecked.",
        "Drift has stayed elevated across several commits without correction. "
        "Consider a focused refactoring session.",
    )
    COLD_FRONT = (
        "Cold Front",
        "❄️",
        "Drift drops consistently over several commits; focused cleanup is working.",
        "A sustained drift reduction is underway. Focused refactoring or cleanup "
        "is producing a meaningful structural improvement.",
    )

    def __init__(self, title: str, emoji: str, description: str, summary: str):
        self.title = title
        self.emoji = emoji
        self.description = description
        self.summary = summary

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.title}"


# Display order for legends
WEATHER_LEGEND: tuple[Verdict, ...] = (
    Verdict.STABLE,
    Verdict.WARMING,
    Verdict.COOLING,
    Verdict.HEAT_SPIKE,
    Verdict.HEAT_WAVE,
    Verdict.COLD_FRONT,
)


@dataclass(frozen=True)
class Assessment:
    verdict: Verdict
    label: str
    summary: str
    observations: tuple[str, ...]


def trend(series: Sequence[float]) -> float:
    """Mean first difference; 0 for fewer than two points."""
    steps = Statistics.first_differences(series)
    return Statistics.mean(steps) if steps else 0.0


def detect_heat_spike(series: Sequence[float]) -> bool:
    """Largest single step is a 1.5σ outlier and above the elevation floor."""
    if len(series) < 3:
        return False
    steps = Statistics.first_differences(series)
    mean = Statistics.mean(steps)
    sigma = Statistics.population_std(steps)
    biggest = max(steps)
    return biggest > mean + SPIKE_SIGMA * sigma and biggest > ELEVATION_THRESHOLD


def detect_heat_wave(series: Sequence[float], min_window: int = DEFAULT_WINDOW) -> bool:
    """
    The last ``min_window`` points sit above a reference point and form a
    plateau rather than a continuing climb.
    """
    n = len(series)
    if n < min_window + 2:
        return False

    ref_idx = n - min_window - 1
    ref = series[ref_idx]
    if any(v <= ref + ELEVATION_THRESHOLD for v in series[ref_idx + 1 :]):
        return False

    elevation = series[ref_idx + 1] - ref
    window_rise = series[-1] - series[ref_idx + 1]
    return elevation > ELEVATION_THRESHOLD and abs(window_rise) < elevation


def detect_cold_front(series: Sequence[float], min_window: int = DEFAULT_WINDOW) -> bool:
    """At least 70% of the last ``min_window`` steps are declines."""
    n = len(series)
    if n < min_window + 1:
        return False
    declines = sum(1 for i in range(n - min_window, n) if series[i] < series[i - 1])
    return declines >= math.ceil(COLD_FRONT_RATIO * min_window)


def classify(baseline_score: float, current_score: float, current_series: Sequence[float]) -> Verdict:
    """First matching rule wins; a heat wave outranks a simultaneous spike."""
    delta = current_score - baseline_score

    if current_score > baseline_score and detect_heat_wave(current_series):
        return Verdict.HEAT_WAVE
    if delta > 0 and detect_heat_spike(current_series):
        return Verdict.HEAT_SPIKE
    if delta < -ELEVATION_THRESHOLD and detect_cold_front(current_series):
        return Verdict.COLD_FRONT

    slope = trend(current_series)
    if slope > TREND_EPSILON and delta > WARMING_DELTA:
        return Verdict.WARMING
    if slope < -TREND_EPSILON and delta <= 0:
        return Verdict.COOLING
    return Verdict.STABLE


def _badness_by_path(report: SnapshotReport) -> dict[str, float]:
    return {f.path: f.badness for f in report.latest_files}


def worsened_files(baseline: SnapshotReport, current: SnapshotReport) -> list[FileEntry]:
    """Files present in both whose badness rose, biggest rise first."""
    before = _badness_by_path(baseline)
    hits = [
        f
        for f in current.latest_files
        if f.path in before and f.badness > before[f.path] + BADNESS_TOLERANCE
    ]
    return sorted(hits, key=lambda f: f.badness - before[f.path], reverse=True)


def improved_files(baseline: SnapshotReport, current: SnapshotReport) -> list[FileEntry]:
    """Files present in both whose badness fell, biggest drop first."""
    before = _badness_by_path(baseline)
    hits = [
        f
        for f in current.latest_files
        if f.path in before and f.badness < before[f.path] - BADNESS_TOLERANCE
    ]
    return sorted(hits, key=lambda f: f.badness - before[f.path])


def new_files(baseline: SnapshotReport, current: SnapshotReport) -> list[FileEntry]:
    known = {f.path for f in baseline.latest_files}
    return sorted(
        (f for f in current.latest_files if f.path not in known),
        key=lambda f: f.badness,
        reverse=True,
    )


def removed_files(baseline: SnapshotReport, current: SnapshotReport) -> list[FileEntry]:
    remaining = {f.path for f in current.latest_files}
    return sorted(
        (f for f in baseline.latest_files if f.path not in remaining),
        key=lambda f: f.badness,
        reverse=True,
    )


def _observations(baseline: SnapshotReport, current: SnapshotReport) -> list[str]:
    b_score = baseline.summary.drift_score
    c_score = current.summary.drift_score
    delta = c_score - b_score
    relative = 0.0 if b_score == 0 else delta / b_score
    sloc_delta = current.summary.sloc - baseline.summary.sloc
    files_delta = current.summary.files - baseline.summary.files

    notes: list[str] = []

    if abs(delta) < TREND_EPSILON:
        notes.append("Drift is virtually unchanged between snapshots; no significant change detected.")
    elif delta < 0:
        notes.append(
            f"Drift dropped by {abs(delta):.4f} ({abs(relative):.1%}) since baseline; the codebase has cooled."
        )
    else:
        notes.append(
            f"Drift rose by {delta:.4f} ({relative:.1%}) since baseline; structural cost is accumulating."
        )

    series = current.score_series
    if len(series) >= 3:
        slope = trend(series)
        if slope > TREND_EPSILON:
            notes.append(f"The codebase is warming within this snapshot, drift rising ~{slope:.4f} per commit.")
        elif slope < -TREND_EPSILON:
            notes.append(
                f"The codebase is cooling within this snapshot, drift falling ~{abs(slope):.4f} per commit."
            )
        else:
            notes.append("Drift is flat within this snapshot; the codebase temperature is stable.")

    if sloc_delta > 0 and delta <= 0:
        notes.append(f"Codebase grew by {sloc_delta:,} SLOC while drift cooled, a sign of controlled growth.")
    elif sloc_delta > 0 and delta > 0:
        notes.append(f"Codebase grew by {sloc_delta:,} SLOC with rising drift; complexity is spreading.")
    elif sloc_delta < 0 and delta < 0:
        notes.append(
            f"Codebase shrank by {abs(sloc_delta):,} SLOC and drift improved, likely effective dead code removal."
        )

    if files_delta > 0:
        notes.append(f"{files_delta} new file(s) added since baseline.")
    elif files_delta < 0:
        notes.append(f"{abs(files_delta)} file(s) removed since baseline.")

    hotter = worsened_files(baseline, current)
    cooler = improved_files(baseline, current)
    if hotter:
        notes.append(
            f"{len(hotter)} file(s) are running hotter (higher badness) than at baseline (e.g. {hotter[0].path})."
        )
    if cooler:
        notes.append(
            f"{len(cooler)} file(s) have cooled down (lower badness) since baseline (e.g. {cooler[0].path})."
        )

    return notes


def build_assessment(baseline: SnapshotReport, current: SnapshotReport) -> Assessment:
    verdict = classify(
        baseline.summary.drift_score, current.summary.drift_score, current.score_series
    )
    return Assessment(
        verdict=verdict,
        label=verdict.label,
        summary=verdict.summary,
        observations=tuple(_observations(baseline, current)),
    )
