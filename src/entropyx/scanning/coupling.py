"""Efferent coupling proxy: the number of import/dependency directives."""

from __future__ import annotations

from collections.abc import Iterable

from .languages import get_language


def count_coupling(lines: Iterable[str], language: str) -> int:
    config = get_language(language)
    if config is None:
        return 0
    return sum(1 for raw in lines if (line := raw.strip()) and config.is_dependency(line))
