"""Absolute grade bands and historical percentile bands for drift scores."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# (exclusive upper bound, grade label, rich colour)
GRADE_BANDS: tuple[tuple[float, str, str], ...] = (
    (0.3, "Excellent", "green"),
    (0.7, "Good", "chartreuse3"),
    (1.2, "Fair", "yellow"),
    (2.0, "Poor", "dark_orange"),
    (float("inf"), "Critical", "red"),
)

# (inclusive upper bound, band key, description)
PERCENTILE_BANDS: tuple[tuple[float, str, str], ...] = (
    (25.0, "near-low", "near the historical low"),
    (50.0, "below-average", "below the historical average"),
    (75.0, "above-average", "above the historical average"),
    (90.0, "near-high", "near the historical high"),
    (float("inf"), "all-time-high", "at or near the all-time high"),
)

MIN_HISTORY_FOR_PERCENTILE = 3


@dataclass(frozen=True)
class Grade:
    label: str
    color: str


@dataclass(frozen=True)
class PercentileBand:
    key: str
    description: str


def grade(score: float) -> Grade:
    for upper, label, color in GRADE_BANDS:
        if score < upper:
            return Grade(label, color)
    _, label, color = GRADE_BANDS[-1]
    return Grade(label, color)


def historical_percentile(current: float, history: Sequence[float]) -> float | None:
    """Share of historical scores at or below ``current``, in percent."""
    if len(history) < MIN_HISTORY_FOR_PERCENTILE:
        return None
    at_or_below = sum(1 for h in history if h <= current)
    return 100.0 * at_or_below / len(history)


def percentile_band(pct: float) -> PercentileBand:
    for upper, key, description in PERCENTILE_BANDS:
        if pct <= upper:
            return PercentileBand(key, description)
    _, key, description = PERCENTILE_BANDS[-1]
    return PercentileBand(key, description)


def percentile_rank(current: float, history: Sequence[float]) -> tuple[float, PercentileBand] | None:
    pct = historical_percentile(current, history)
    if pct is None:
        return None
    return pct, percentile_band(pct)
