"""Mathematical utilities for drift analysis."""

from .entropy import Entropy
from .statistics import Statistics

__all__ = [
    "Entropy",
    "Statistics",
]
