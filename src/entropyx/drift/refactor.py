"""Refactor priority ranking with a selectable metric focus."""

from __future__ import annotations

from collections.abc import Sequence

from .badness import compute_badness
from .models import FileSample
from .normalize import Feature, is_degenerate, min_max, raw_feature

FOCUS_OVERALL = "overall"

_FOCUS_TOKENS: dict[str, Feature] = {
    "sloc": Feature.SLOC,
    "cc": Feature.CC,
    "mi": Feature.MI,
    "smells": Feature.SMELLS,
    "coupling": Feature.COUPLING,
}


def parse_focus(focus: str | None) -> list[Feature]:
    """
    Parse a comma-separated focus string into recognized features.

    Tokens are trimmed and case-insensitive; unknown tokens are dropped and
    a repeated token counts once, so ``cc,cc,sloc`` averages two features.
    ``overall`` or an empty string yields an empty list.
    """
    if not focus:
        return []
    features: list[Feature] = []
    for token in focus.split(","):
        feature = _FOCUS_TOKENS.get(token.strip().lower())
        if feature is not None and feature not in features:
            features.append(feature)
    return features


def _focus_vector(samples: Sequence[FileSample], feature: Feature) -> list[float]:
    if feature is not Feature.MI:
        return min_max(raw_feature(samples, feature))

    raw = raw_feature(samples, Feature.MI)
    if is_degenerate(raw):
        return [0.0] * len(samples)
    return [1.0 - v for v in min_max(raw)]


def refactor_scores(samples: Sequence[FileSample], focus: str | None = FOCUS_OVERALL) -> list[float]:
    """Higher means a stronger refactor candidate under the given focus."""
    if not samples:
        return []

    features = parse_focus(focus)
    if not features:
        return compute_badness(samples)

    vectors = [_focus_vector(samples, f) for f in features]
    if len(vectors) == 1:
        return vectors[0]
    return [sum(column) / len(vectors) for column in zip(*vectors)]


def rank_for_refactor(
    samples: Sequence[FileSample], focus: str | None = FOCUS_OVERALL, top: int | None = None
) -> list[tuple[FileSample, float]]:
    """Samples paired with their score, highest first (ties keep input order)."""
    scores = refactor_scores(samples, focus)
    ranked = sorted(zip(samples, scores), key=lambda pair: pair[1], reverse=True)
    return ranked[:top] if top is not None else ranked
