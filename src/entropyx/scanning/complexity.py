"""Cyclomatic complexity and smells from the external ``lizard`` tool.

lizard reports one CSV row per function:

    NLOC, CCN, tokens, params, length, location, file, function, ...

Rows are grouped per file into an average CCN plus smell counts by CCN band.
When lizard is missing or fails, every file simply has no complexity data.
"""

from __future__ import annotations

import csv
import io
import os
import subprocess
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger(__name__)

LIZARD_COMMAND = "lizard"

# Per-function CCN bands
SMELL_HIGH_CCN = 20
SMELL_MEDIUM_CCN = 15
SMELL_LOW_CCN = 10

_CCN_COLUMN = 1
_FILE_COLUMN = 6


@dataclass(frozen=True)
class ComplexityResult:
    avg_cyclomatic_complexity: float
    smells_high: int
    smells_medium: int
    smells_low: int


def summarize(ccns: list[float]) -> ComplexityResult:
    return ComplexityResult(
        avg_cyclomatic_complexity=sum(ccns) / len(ccns) if ccns else 0.0,
        smells_high=sum(1 for c in ccns if c > SMELL_HIGH_CCN),
        smells_medium=sum(1 for c in ccns if SMELL_MEDIUM_CCN < c <= SMELL_HIGH_CCN),
        smells_low=sum(1 for c in ccns if SMELL_LOW_CCN < c <= SMELL_MEDIUM_CCN),
    )


def parse_csv_output(output: str, root: str | Path) -> dict[str, ComplexityResult]:
    """
    Group lizard CSV rows by file, keyed by POSIX path relative to ``root``.

    Rows with fewer than seven columns or a non-numeric CCN (including a
    header row) are skipped.
    """
    root_str = str(root)
    per_file: dict[str, list[float]] = defaultdict(list)

    for row in csv.reader(io.StringIO(output)):
        if len(row) <= _FILE_COLUMN:
            continue
        try:
            ccn = float(row[_CCN_COLUMN])
        except ValueError:
            continue

        file_path = row[_FILE_COLUMN].strip()
        if os.path.isabs(file_path):
            file_path = os.path.relpath(file_path, root_str)
        per_file[Path(file_path).as_posix()].append(ccn)

    return {path: summarize(ccns) for path, ccns in per_file.items()}


class LizardAnalyzer:
    """Runs ``lizard --csv`` over a directory."""

    def __init__(self, timeout: int = 300, command: str = LIZARD_COMMAND):
        self.timeout = timeout
        self.command = command

    def analyze_directory(self, path: str | Path) -> dict[str, ComplexityResult]:
        root = Path(path).resolve()
        try:
            result = subprocess.run(
                [self.command, "--csv", str(root)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            logger.debug(f"{self.command} not installed; complexity data unavailable")
            return {}
        except subprocess.TimeoutExpired:
            logger.warning(f"{self.command} timed out after {self.timeout}s on {root}")
            return {}

        if not result.stdout.strip():
            if result.returncode != 0:
                logger.warning(f"{self.command} failed: {result.stderr.strip()}")
            return {}

        return parse_csv_output(result.stdout, root)
