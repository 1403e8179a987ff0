"""Min-max feature normalization across a file population."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..math import Statistics
from .models import FileSample


class Feature(str, Enum):
    CC = "cc"
    SLOC = "sloc"
    SMELLS = "smells"
    COUPLING = "coupling"
    MI = "mi"


_EXTRACTORS: dict[Feature, Callable[[FileSample], float]] = {
    Feature.CC: lambda s: s.cyclomatic_complexity,
    Feature.SLOC: lambda s: math.log(1 + s.sloc),
    Feature.SMELLS: lambda s: float(s.weighted_smells),
    Feature.COUPLING: lambda s: s.coupling,
    Feature.MI: lambda s: s.maintainability_index,
}


@dataclass(frozen=True)
class NormalizedFeatures:
    """Parallel [0, 1] vectors, one entry per sample."""

    cc: list[float]
    sloc: list[float]
    smells: list[float]
    coupling: list[float]
    mi: list[float]

    def get(self, feature: Feature) -> list[float]:
        return getattr(self, feature.value)


def min_max(values: Sequence[float]) -> list[float]:
    """Rescale to [0, 1]; a degenerate population (max == min) maps to 0."""
    return Statistics.min_max(values)


def is_degenerate(values: Sequence[float]) -> bool:
    """True when every value is equal (including a single value)."""
    return len(values) > 0 and max(values) == min(values)


def raw_feature(samples: Sequence[FileSample], feature: Feature) -> list[float]:
    extract = _EXTRACTORS[feature]
    return [extract(s) for s in samples]


def normalize_feature(samples: Sequence[FileSample], feature: Feature) -> list[float]:
    return min_max(raw_feature(samples, feature))


def normalize_all(samples: Sequence[FileSample]) -> NormalizedFeatures:
    return NormalizedFeatures(
        cc=normalize_feature(samples, Feature.CC),
        sloc=normalize_feature(samples, Feature.SLOC),
        smells=normalize_feature(samples, Feature.SMELLS),
        coupling=normalize_feature(samples, Feature.COUPLING),
        mi=normalize_feature(samples, Feature.MI),
    )
