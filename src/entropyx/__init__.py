"""EntropyX - track how structural cost spreads through a codebase over time."""

__version__ = "0.1.0"
