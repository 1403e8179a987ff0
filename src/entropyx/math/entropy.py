"""Information theory over non-negative weight vectors."""

import math
from collections.abc import Sequence


class Entropy:
    """Shannon entropy of weight distributions."""

    @staticmethod
    def shannon(weights: Sequence[float]) -> float:
        """
        Compute Shannon entropy H = -Σ p log₂ p with p = w / Σw.

        Zero weights contribute nothing.

        Args:
            weights: Non-negative weights (counts, badness values, ...)

        Returns:
            Entropy in bits
        """
        total = sum(weights)
        if total <= 0:
            return 0.0

        entropy = 0.0
        for w in weights:
            p = w / total
            if p > 0:
                entropy -= p * math.log2(p)

        return entropy

    @staticmethod
    def normalized(weights: Sequence[float]) -> float:
        """
        Normalize entropy by the maximum for this many outcomes.

        H_norm = H / log₂(N)

        Returns:
            Normalized entropy in [0, 1]; 0 when N ≤ 1
        """
        n = len(weights)
        if n <= 1:
            return 0.0
        return Entropy.shannon(weights) / math.log2(n)

    @staticmethod
    def contributions(weights: Sequence[float]) -> list[float]:
        """
        Split H into per-outcome terms -p log₂ p.

        The terms sum to ``Entropy.shannon(weights)``.
        """
        total = sum(weights)
        if total <= 0:
            return [0.0] * len(weights)

        result = []
        for w in weights:
            p = w / total
            result.append(-p * math.log2(p) if p > 0 else 0.0)
        return result
