"""Entropy and drift analysis engine.

Pure functions over file populations and score histories:

- normalize: min-max scaling of raw per-file measurements
- badness: weighted per-file cost
- score: drift score and per-file entropy contributions
- refactor: focus-selectable refactor ranking
- forecast: weather-style trend verdicts and comparison observations
- commits: per-commit deltas and outlier commits
- grading: grade and percentile bands
"""

from .badness import compute_badness
from .commits import CommitClassification, classify_commits, compute_deltas
from .forecast import WEATHER_LEGEND, Assessment, Verdict, build_assessment, classify
from .grading import grade, percentile_rank
from .models import (
    CodeKind,
    CommitDelta,
    FileEntry,
    FileSample,
    RepoSnapshot,
    SnapshotReport,
    SnapshotSummary,
)
from .normalize import Feature, normalize_all
from .refactor import rank_for_refactor, refactor_scores
from .score import compute_drift, diffusion_contributions, drift_score

__all__ = [
    "Assessment",
    "CodeKind",
    "CommitClassification",
    "CommitDelta",
    "Feature",
    "FileEntry",
    "FileSample",
    "RepoSnapshot",
    "SnapshotReport",
    "SnapshotSummary",
    "Verdict",
    "WEATHER_LEGEND",
    "build_assessment",
    "classify",
    "classify_commits",
    "compute_badness",
    "compute_deltas",
    "compute_drift",
    "diffusion_contributions",
    "drift_score",
    "grade",
    "normalize_all",
    "percentile_rank",
    "rank_for_refactor",
    "refactor_scores",
]
