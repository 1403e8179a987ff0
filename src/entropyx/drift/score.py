"""Drift score: how evenly badness is spread, scaled by how much there is.

Only files with badness above ACTIVE_EPSILON take part. With p_i = b_i / Σb
over that active set A:

    H      = -Σ p_i log₂ p_i
    H_norm = H / log₂|A|
    drift  = H_norm · (Σb / |A|)

Cost piled into one file scores low; the same cost smeared over many files
scores high.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..math import Entropy
from .badness import compute_badness
from .models import FileSample

ACTIVE_EPSILON = 1e-9


def _active(badness: Sequence[float]) -> list[float]:
    return [b for b in badness if b > ACTIVE_EPSILON]


def drift_score(badness: Sequence[float]) -> float:
    active = _active(badness)
    if len(active) <= 1:
        return 0.0

    total = sum(active)
    if total <= 0:
        return 0.0

    h_norm = Entropy.shannon(active) / math.log2(len(active))
    mean_badness = total / len(active)
    return max(0.0, h_norm * mean_badness)


def compute_drift(samples: Sequence[FileSample]) -> float:
    return drift_score(compute_badness(samples))


def diffusion_contributions(badness: Sequence[float]) -> list[float]:
    """
    Per-file share of the unnormalized entropy H.

    Inactive files get 0; the values sum to H over the active set.
    """
    return Entropy.contributions([b if b > ACTIVE_EPSILON else 0.0 for b in badness])
