"""Compare command: evolutionary assessment of two data.json snapshots."""

from pathlib import Path
from typing import Optional

import typer

from ..drift import build_assessment
from ..reporting import ConsoleReporter, generate_comparison_report, load_snapshot_file
from . import app
from ._common import command_errors, console, written


@app.command()
def compare(
    baseline: Path = typer.Argument(..., help="Path to the baseline data.json file"),
    current: Path = typer.Argument(..., help="Path to the current data.json file"),
    html: Optional[Path] = typer.Option(None, "--html", help="Write an HTML comparison report to this file"),
):
    """
    Compare two snapshots and forecast where drift is heading.

    [bold cyan]Examples:[/bold cyan]

      entropyx compare last-release.json report.json --html compare.html
    """
    with command_errors():
        before = load_snapshot_file(baseline)
        after = load_snapshot_file(current)
        assessment = build_assessment(before, after)

        ConsoleReporter(console).report_comparison(before, after, assessment)

        if html is not None:
            with console.status("Generating HTML comparison report..."):
                html.write_text(generate_comparison_report(before, after, assessment), encoding="utf-8")
            written("HTML comparison report", html)
