"""Per-file badness: weighted sum of normalized cost signals.

badness = W_C·Ĉ + W_L·L̂ + W_S·Ŝ + W_P·P̂ + W_M·(1 − Î)

Each hat term is min-max normalized across the population, so badness is
always relative to the other files in the same snapshot.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import FileSample
from .normalize import normalize_all

WEIGHT_COMPLEXITY = 1.0
WEIGHT_SIZE = 1.0
WEIGHT_SMELLS = 1.0
WEIGHT_COUPLING = 1.0
WEIGHT_MAINTAINABILITY = 1.0


def compute_badness(samples: Sequence[FileSample]) -> list[float]:
    """Return one non-negative badness value per sample, in input order."""
    if not samples:
        return []

    n = normalize_all(samples)
    return [
        WEIGHT_COMPLEXITY * n.cc[i]
        + WEIGHT_SIZE * n.sloc[i]
        + WEIGHT_SMELLS * n.smells[i]
        + WEIGHT_COUPLING * n.coupling[i]
        # MI shared by every file rescales to 0, so each file carries the full W_M
        + WEIGHT_MAINTAINABILITY * (1.0 - n.mi[i])
        for i in range(len(samples))
    ]
