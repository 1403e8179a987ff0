"""Population statistics for score series."""

from collections.abc import Sequence

import numpy as np


class Statistics:
    """Descriptive statistics used by the trend and commit classifiers."""

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        """Compute arithmetic mean (0 for an empty input)."""
        if len(values) == 0:
            return 0.0
        return float(np.mean(np.asarray(values, dtype=float)))

    @staticmethod
    def population_std(values: Sequence[float]) -> float:
        """Compute population standard deviation σ = sqrt(Σ(x-μ)²/N)."""
        if len(values) == 0:
            return 0.0
        return float(np.std(np.asarray(values, dtype=float), ddof=0))

    @staticmethod
    def first_differences(values: Sequence[float]) -> list[float]:
        """Return ``[x[i] - x[i-1] for i >= 1]``."""
        if len(values) < 2:
            return []
        return [float(d) for d in np.diff(np.asarray(values, dtype=float))]

    @staticmethod
    def min_max(values: Sequence[float]) -> list[float]:
        """
        Rescale values to [0, 1] by (x - min) / (max - min).

        A constant input (including a single value) maps to all zeros.
        """
        if len(values) == 0:
            return []
        arr = np.asarray(values, dtype=float)
        lo = float(arr.min())
        hi = float(arr.max())
        span = hi - lo
        if span == 0:
            return [0.0] * len(values)
        return [float(x) for x in (arr - lo) / span]
