"""Source-line counting: non-blank lines that are not comments."""

from __future__ import annotations

from collections.abc import Iterable

from .languages import get_language


def count_sloc(lines: Iterable[str], language: str) -> int:
    """
    Count source lines of code.

    Blank lines are skipped for every language. C-style languages also skip
    ``//`` lines and ``/* ... */`` blocks; a line that opens a block without
    closing it suppresses everything up to and including the closing line.
    Unknown languages count every non-blank line.
    """
    config = get_language(language)
    c_style = config.c_style_comments if config else False
    prefixes = config.line_comment_prefixes if config else ()

    in_block = False
    count = 0
    for raw in lines:
        line = raw.strip()

        if in_block:
            if "*/" in line:
                in_block = False
            continue

        if not line:
            continue

        if c_style and line.startswith("/*"):
            if "*/" not in line:
                in_block = True
            continue

        if c_style and line.startswith("//"):
            continue

        if prefixes and line.startswith(prefixes):
            continue

        count += 1

    return count
