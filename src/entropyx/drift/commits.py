"""Per-commit score deltas and outlier commit detection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..math import Statistics
from .models import CommitDelta, RepoSnapshot

OUTLIER_SIGMA = 1.5
MIN_OUTLIER_DELTA = 0.02
# Below this spread every delta counts as equal
SPREAD_TOLERANCE = 1e-12


@dataclass(frozen=True)
class CommitClassification:
    troubled: list[CommitDelta] = field(default_factory=list)  # largest rise first
    heroic: list[CommitDelta] = field(default_factory=list)  # largest drop first


def compute_deltas(history: Sequence[RepoSnapshot]) -> list[CommitDelta]:
    """Score change of each snapshot against its predecessor in time order."""
    ordered = sorted(history, key=lambda s: s.timestamp)
    deltas: list[CommitDelta] = []
    prev: RepoSnapshot | None = None
    for snap in ordered:
        if prev is None:
            deltas.append(CommitDelta(snapshot=snap, delta=0.0, relative_delta=0.0))
        else:
            delta = snap.drift_score - prev.drift_score
            relative = 0.0 if prev.drift_score == 0 else delta / prev.drift_score
            deltas.append(
                CommitDelta(
                    snapshot=snap,
                    delta=delta,
                    relative_delta=relative,
                    sloc_delta=snap.total_sloc - prev.total_sloc,
                    files_delta=snap.total_files - prev.total_files,
                )
            )
        prev = snap
    return deltas


def classify_commits(deltas: Sequence[CommitDelta]) -> CommitClassification:
    """
    Flag commits whose delta is a statistical outlier of the series.

    The first entry carries no real delta and is excluded. A commit is
    troubled when its delta is at least max(0.02, μ + 1.5σ) and heroic when
    at most min(-0.02, μ - 1.5σ), using the population σ. A series whose
    deltas are all equal has no outliers.
    """
    if len(deltas) < 2:
        return CommitClassification()

    candidates = list(deltas[1:])
    values = [d.delta for d in candidates]
    mean = Statistics.mean(values)
    sigma = Statistics.population_std(values)
    if sigma < SPREAD_TOLERANCE:
        return CommitClassification()

    upper = max(MIN_OUTLIER_DELTA, mean + OUTLIER_SIGMA * sigma)
    lower = min(-MIN_OUTLIER_DELTA, mean - OUTLIER_SIGMA * sigma)

    troubled = sorted((d for d in candidates if d.delta >= upper), key=lambda d: d.delta, reverse=True)
    heroic = sorted((d for d in candidates if d.delta <= lower), key=lambda d: d.delta)
    return CommitClassification(troubled=troubled, heroic=heroic)
