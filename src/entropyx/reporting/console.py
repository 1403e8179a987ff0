"""Rich console rendering for scans, history, heatmaps and comparisons."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from pathlib import PurePosixPath
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..drift.commits import CommitClassification
from ..drift.forecast import WEATHER_LEGEND, Assessment, Verdict
from ..drift.grading import grade, percentile_rank
from ..drift.models import FileSample, RepoSnapshot, SnapshotReport

BAR_WIDTH = 40
HEAT_CELLS = 10

_VERDICT_STYLES: dict[Verdict, str] = {
    Verdict.STABLE: "grey62",
    Verdict.WARMING: "yellow",
    Verdict.COOLING: "cyan",
    Verdict.HEAT_SPIKE: "bold red",
    Verdict.HEAT_WAVE: "red",
    Verdict.COLD_FRONT: "bold cyan",
}


def traffic_light_hex(t: float) -> str:
    """Green (#00C800) → yellow (#C8C800) → red (#C80000) for t in [0, 1]."""
    t = min(1.0, max(0.0, t))
    if t <= 0.5:
        r, g = int(t * 2.0 * 200), 200
    else:
        r, g = 200, int((1.0 - t) * 2.0 * 200)
    return f"#{r:02X}{g:02X}00"


def heat_bar(t: float) -> str:
    filled = max(0, min(HEAT_CELLS, round(t * HEAT_CELLS)))
    return "█" * filled + "░" * (HEAT_CELLS - filled)


def _bar(value: float, max_value: float, width: int = BAR_WIDTH) -> str:
    if max_value <= 0:
        return ""
    return "█" * max(1, round(value / max_value * width)) if value > 0 else ""


def _short(identifier: str, n: int = 8) -> str:
    return identifier[:n]


class ConsoleReporter:
    """Prints analysis results to a rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    # ── scans ─────────────────────────────────────────────────────

    def report_commit(self, snapshot: RepoSnapshot) -> None:
        self.console.print(
            f"[bold cyan]Commit:[/bold cyan] [yellow]{_short(snapshot.identifier)}[/yellow]  "
            f"[dim]{snapshot.timestamp:%Y-%m-%d %H:%M:%S %z}[/dim]  "
            f"Files: [green]{snapshot.total_files}[/green]  "
            f"SLOC: [green]{snapshot.total_sloc}[/green]  "
            f"Drift: [magenta]{snapshot.drift_score:.4f}[/magenta]"
        )

    def report_language_scan(self, results: Sequence[tuple[str, str]]) -> None:
        table = Table(box=box.ROUNDED)
        table.add_column("File")
        table.add_column("Language")
        for path, language in results:
            table.add_row(escape(path), language)
        self.console.print(table)

    def report_file_metrics(self, samples: Sequence[FileSample]) -> None:
        if not samples:
            self.console.print("[dim]No source files found.[/dim]")
            return
        table = Table(box=box.ROUNDED)
        table.add_column("File")
        table.add_column("Language")
        table.add_column("Kind")
        table.add_column("SLOC", justify="right")
        table.add_column("CC", justify="right")
        table.add_column("MI", justify="right")
        table.add_column("Smells H/M/L", justify="right")
        table.add_column("Coupling", justify="right")
        for s in sorted(samples, key=lambda s: s.path):
            table.add_row(
                escape(s.path),
                s.language or "-",
                s.kind.value,
                str(s.sloc),
                f"{s.cyclomatic_complexity:.1f}",
                f"{s.maintainability_index:.1f}",
                f"{s.smells_high}/{s.smells_medium}/{s.smells_low}",
                f"{s.coupling:.0f}",
            )
        self.console.print(table)

    def report_scan_summary(self, file_count: int, total_sloc: int, score: float) -> None:
        g = grade(score)
        self.console.print(
            f"\n[bold]Total files:[/bold] [green]{file_count}[/green]  "
            f"[bold]Total SLOC:[/bold] [green]{total_sloc:,}[/green]  "
            f"[bold]Drift:[/bold] [magenta]{score:.4f}[/magenta] "
            f"([{g.color}]{g.label}[/{g.color}])"
        )

    def report_top_files(self, samples: Sequence[FileSample], top: int = 10) -> None:
        """Bar listing by cyclomatic complexity, or by SLOC when no CC data exists."""
        has_cc = any(s.cyclomatic_complexity > 0 for s in samples)
        if has_cc:
            ranked = sorted(
                (s for s in samples if s.cyclomatic_complexity > 0),
                key=lambda s: s.cyclomatic_complexity,
                reverse=True,
            )[:top]
            values = [s.cyclomatic_complexity for s in ranked]
            title = "Top files by Cyclomatic Complexity"
        else:
            ranked = sorted((s for s in samples if s.sloc > 0), key=lambda s: s.sloc, reverse=True)[:top]
            values = [float(s.sloc) for s in ranked]
            title = "Top files by SLOC"

        if not ranked:
            return
        self._bar_table(title, [PurePosixPath(s.path).name for s in ranked], values)

    def report_smells(self, samples: Sequence[FileSample], top: int = 10) -> None:
        ranked = sorted(
            (s for s in samples if s.total_smells > 0), key=lambda s: s.weighted_smells, reverse=True
        )[:top]
        if not ranked:
            return
        self._bar_table(
            "Top files by Code Smells (weighted H×3 + M×2 + L×1)",
            [PurePosixPath(s.path).name for s in ranked],
            [float(s.weighted_smells) for s in ranked],
        )

    def _bar_table(self, title: str, labels: Sequence[str], values: Sequence[float]) -> None:
        peak = max(values) if values else 0.0
        table = Table(title=f"[bold]{escape(title)}[/bold]", box=box.SIMPLE, show_header=False)
        table.add_column("Label")
        table.add_column("Bar")
        table.add_column("Value", justify="right")
        for label, value in zip(labels, values):
            color = traffic_light_hex(value / peak if peak else 0.0)
            shown = f"{value:.1f}" if value != int(value) else f"{int(value)}"
            table.add_row(escape(label), f"[{color}]{_bar(value, peak)}[/{color}]", shown)
        self.console.print()
        self.console.print(table)

    def report_sloc_by_language(self, samples: Sequence[FileSample]) -> None:
        totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
        for s in samples:
            lang = s.language or "Other"
            totals[lang][0] += 1
            totals[lang][1] += s.sloc
        if not totals:
            return
        table = Table(title="[bold]SLOC by language[/bold]", box=box.ROUNDED)
        table.add_column("Language")
        table.add_column("Files", justify="right")
        table.add_column("SLOC", justify="right")
        for lang, (files, sloc) in sorted(totals.items(), key=lambda kv: kv[1][1], reverse=True):
            table.add_row(lang, str(files), f"{sloc:,}")
        self.console.print(table)

    # ── history ───────────────────────────────────────────────────

    def report_history(self, history: Sequence[RepoSnapshot]) -> None:
        if not history:
            return
        peak = max(s.drift_score for s in history)
        table = Table(title="[bold]Drift score per commit[/bold]", box=box.SIMPLE)
        table.add_column("Commit", style="yellow")
        table.add_column("Date", style="dim")
        table.add_column("Files", justify="right")
        table.add_column("SLOC", justify="right")
        table.add_column("Drift", justify="right", style="magenta")
        table.add_column("")
        for s in history:
            table.add_row(
                _short(s.identifier, 7),
                f"{s.timestamp:%Y-%m-%d}",
                str(s.total_files),
                f"{s.total_sloc:,}",
                f"{s.drift_score:.4f}",
                f"[magenta]{_bar(s.drift_score, peak)}[/magenta]",
            )
        self.console.print()
        self.console.print(table)

    def report_notable_events(self, classification: CommitClassification) -> None:
        if not classification.troubled and not classification.heroic:
            self.console.print("[dim]No notable commits: every change is within normal variability.[/dim]")
            return
        for title, style, deltas in (
            ("Troubled commits (drift jumped)", "red", classification.troubled),
            ("Heroic commits (drift dropped)", "green", classification.heroic),
        ):
            if not deltas:
                continue
            table = Table(title=f"[bold {style}]{title}[/bold {style}]", box=box.ROUNDED)
            table.add_column("Commit", style="yellow")
            table.add_column("Date", style="dim")
            table.add_column("Δ Drift", justify="right")
            table.add_column("Δ %", justify="right")
            table.add_column("Δ SLOC", justify="right")
            table.add_column("Δ Files", justify="right")
            for d in deltas:
                table.add_row(
                    _short(d.snapshot.identifier),
                    f"{d.snapshot.timestamp:%Y-%m-%d}",
                    f"[{style}]{d.delta:+.4f}[/{style}]",
                    f"{d.relative_delta:+.1%}",
                    f"{d.sloc_delta:+,}",
                    f"{d.files_delta:+d}",
                )
            self.console.print(table)

    def report_assessment(
        self,
        current: RepoSnapshot,
        previous: Optional[RepoSnapshot],
        history: Sequence[RepoSnapshot],
    ) -> None:
        g = grade(current.drift_score)
        self.console.print("\n[bold cyan]Health assessment[/bold cyan]")
        self.console.print(
            f"  Drift score: [magenta]{current.drift_score:.4f}[/magenta]  "
            f"Grade: [{g.color}]{g.label}[/{g.color}]"
        )
        if previous is not None:
            delta = current.drift_score - previous.drift_score
            color = "red" if delta > 0 else "green" if delta < 0 else "dim"
            self.console.print(
                f"  Change vs previous commit ({_short(previous.identifier)}): [{color}]{delta:+.4f}[/{color}]"
            )
        rank = percentile_rank(current.drift_score, [s.drift_score for s in history])
        if rank is not None:
            pct, band = rank
            self.console.print(f"  Historical percentile: {pct:.0f}% ({band.description})")
        else:
            self.console.print("  [dim]Not enough history for a percentile (need at least 3 scans).[/dim]")

    # ── heatmap / refactor ────────────────────────────────────────

    def report_heatmap(self, samples: Sequence[FileSample], badness: Sequence[float]) -> None:
        """Files hottest first, coloured by badness relative to the hottest file."""
        if not samples:
            self.console.print("[dim]No files to display.[/dim]")
            return
        peak = max(badness) if badness else 0.0
        if peak == 0:
            peak = 1.0

        table = Table(box=box.ROUNDED)
        table.add_column("Heat")
        table.add_column("File")
        table.add_column("SLOC", justify="right")
        table.add_column("CC", justify="right")
        table.add_column("Coupling", justify="right")
        table.add_column("Badness", justify="right")
        for s, b in sorted(zip(samples, badness), key=lambda pair: pair[1], reverse=True):
            t = b / peak
            color = traffic_light_hex(t)
            table.add_row(
                f"[{color}]{heat_bar(t)}[/{color}]",
                escape(s.path),
                str(s.sloc),
                f"{s.cyclomatic_complexity:.1f}",
                f"{s.coupling:.1f}",
                f"[{color}]{b:.3f}[/{color}]",
            )
        self.console.print(table)

    def report_refactor_list(self, ranked: Sequence[tuple[FileSample, float]], focus: str) -> None:
        if not ranked:
            self.console.print("[dim]No source files found.[/dim]")
            return
        peak = max(score for _, score in ranked) or 1.0
        table = Table(title=f"[bold]Refactor candidates[/bold] (focus: {escape(focus)})", box=box.ROUNDED)
        table.add_column("#", justify="right")
        table.add_column("File")
        table.add_column("Score", justify="right")
        table.add_column("SLOC", justify="right")
        table.add_column("CC", justify="right")
        table.add_column("MI", justify="right")
        table.add_column("Smells", justify="right")
        table.add_column("Coupling", justify="right")
        for i, (s, score) in enumerate(ranked, start=1):
            color = traffic_light_hex(score / peak)
            table.add_row(
                str(i),
                escape(s.path),
                f"[{color}]{score:.3f}[/{color}]",
                str(s.sloc),
                f"{s.cyclomatic_complexity:.1f}",
                f"{s.maintainability_index:.1f}",
                str(s.weighted_smells),
                f"{s.coupling:.0f}",
            )
        self.console.print(table)

    # ── tools ─────────────────────────────────────────────────────

    def report_detected_languages(self, languages: Sequence[str]) -> None:
        if languages:
            self.console.print(f"[bold]Detected languages:[/bold] {', '.join(languages)}")
        else:
            self.console.print("[dim]No supported languages detected.[/dim]")

    def report_tool_available(self, tool: str) -> None:
        self.console.print(f"[green]✓[/green] {tool} is available")

    def report_tool_missing(self, tool: str, instructions: str) -> None:
        self.console.print(f"[red]✗[/red] {tool} is missing. Install with: [cyan]{escape(instructions)}[/cyan]")

    # ── comparison ────────────────────────────────────────────────

    def report_comparison(
        self, baseline: SnapshotReport, current: SnapshotReport, assessment: Assessment
    ) -> None:
        style = _VERDICT_STYLES[assessment.verdict]
        self.console.print("\n[bold cyan]EntropyX evolutionary assessment[/bold cyan]\n")
        self.console.print(f"[bold]Forecast:[/bold] [{style}]{escape(assessment.label)}[/{style}]")
        self.console.print(f"[dim]{escape(assessment.summary)}[/dim]\n")

        table = Table(box=box.ROUNDED)
        table.add_column("Metric")
        table.add_column("Baseline", justify="right")
        table.add_column("Current", justify="right")
        table.add_column("Delta", justify="right")

        def row(label: str, before: float, after: float, fmt: str, higher_is_bad: bool) -> None:
            delta = after - before
            color = "dim"
            if higher_is_bad and delta > 0:
                color = "red"
            elif higher_is_bad and delta < 0:
                color = "green"
            table.add_row(label, format(before, fmt), format(after, fmt), f"[{color}]{delta:+{fmt}}[/{color}]")

        row("Drift score", baseline.summary.drift_score, current.summary.drift_score, ".4f", True)
        row("Files", baseline.summary.files, current.summary.files, "d", False)
        row("SLOC", baseline.summary.sloc, current.summary.sloc, ",d", False)
        row("Commits", baseline.commit_count, current.commit_count, "d", False)
        self.console.print(table)

        if assessment.observations:
            self.console.print("\n[bold]Observations:[/bold]")
            for note in assessment.observations:
                self.console.print(f"  • {escape(note)}")

        self.console.print()
        self.report_weather_legend()

    def report_weather_legend(self) -> None:
        legend = Table(title="[dim]Drift forecast legend[/dim]", box=box.ROUNDED)
        legend.add_column("Condition")
        legend.add_column("Meaning", style="dim")
        for verdict in WEATHER_LEGEND:
            legend.add_row(f"{verdict.emoji} [bold]{verdict.title}[/bold]", verdict.description)
        self.console.print(legend)
