"""Self-contained HTML reports.

Every page is rendered server-side with escaped strings and inline SVG
charts, so reports open from a local file with no network access. The data
behind each page is also embedded as a JSON blob for scripting.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from html import escape
from typing import Optional

from ..drift.badness import compute_badness
from ..drift.commits import CommitClassification, CommitDelta
from ..drift.forecast import (
    WEATHER_LEGEND,
    Assessment,
    improved_files,
    new_files,
    removed_files,
    worsened_files,
)
from ..drift.grading import grade, percentile_rank
from ..drift.models import FileEntry, FileSample, RepoSnapshot, SnapshotReport
from .console import traffic_light_hex

TOP_FILES = 10

_STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #0d1117; color: #c9d1d9; font-size: 14px; line-height: 1.5; }
header { padding: 24px 32px; border-bottom: 1px solid #21262d; }
header h1 { font-size: 24px; color: #58a6ff; }
header .subtitle { color: #8b949e; font-size: 13px; }
section { padding: 24px 32px; }
h2 { font-size: 18px; color: #58a6ff; margin-bottom: 12px; }
.stats { display: flex; gap: 16px; flex-wrap: wrap; }
.stat { background: #161b22; padding: 8px 16px; border-radius: 6px; border: 1px solid #21262d; }
.stat-value { font-size: 20px; font-weight: 600; }
.stat-label { font-size: 12px; text-transform: uppercase; letter-spacing: 0.5px; color: #8b949e; }
table { border-collapse: collapse; width: 100%; background: #161b22; border: 1px solid #21262d; }
th, td { padding: 6px 10px; border-bottom: 1px solid #21262d; text-align: left; }
td.num, th.num { text-align: right; font-variant-numeric: tabular-nums; }
.up { color: #f85149; } .down { color: #3fb950; } .muted { color: #8b949e; }
.verdict { background: #161b22; border: 1px solid #21262d; border-left: 4px solid #58a6ff; border-radius: 8px; padding: 16px; }
.verdict .label { font-size: 20px; font-weight: 600; }
ul.obs { margin-left: 20px; }
svg.chart { background: #161b22; border: 1px solid #21262d; border-radius: 8px; }
footer { padding: 24px 32px; text-align: center; color: #484f58; font-size: 12px; border-top: 1px solid #21262d; }
"""


def _page(title: str, subtitle: str, body: str, data: dict) -> str:
    # </ inside the JSON blob must not close the script element
    blob = json.dumps(data).replace("</", "<\\/")
    generated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape(title)}</title>
<style>{_STYLE}</style>
</head>
<body>
<header><h1>{escape(title)}</h1><div class="subtitle">{escape(subtitle)}</div></header>
{body}
<footer>Generated by EntropyX on {generated}</footer>
<script type="application/json" id="entropyx-data">{blob}</script>
</body>
</html>
"""


def _stat(label: str, value: str, css: str = "") -> str:
    return (
        f'<div class="stat"><div class="stat-value {css}">{escape(value)}</div>'
        f'<div class="stat-label">{escape(label)}</div></div>'
    )


def _line_chart(series: Sequence[tuple[str, Sequence[float]]], width: int = 900, height: int = 220) -> str:
    """Inline SVG polyline chart; each entry is (css colour, values)."""
    all_values = [v for _, values in series for v in values]
    if not all_values:
        return '<p class="muted">No history available.</p>'
    lo, hi = min(all_values), max(all_values)
    span = (hi - lo) or 1.0
    pad = 16

    lines = []
    for color, values in series:
        if not values:
            continue
        step = (width - 2 * pad) / max(1, len(values) - 1)
        points = " ".join(
            f"{pad + i * step:.1f},{height - pad - (v - lo) / span * (height - 2 * pad):.1f}"
            for i, v in enumerate(values)
        )
        lines.append(f'<polyline fill="none" stroke="{color}" stroke-width="2" points="{points}"/>')

    return (
        f'<svg class="chart" viewBox="0 0 {width} {height}" width="100%" height="{height}">'
        f'<text x="{pad}" y="{pad}" fill="#8b949e" font-size="11">{hi:.4f}</text>'
        f'<text x="{pad}" y="{height - 4}" fill="#8b949e" font-size="11">{lo:.4f}</text>'
        + "".join(lines)
        + "</svg>"
    )


def _file_rows(samples: Sequence[FileSample], badness: Sequence[float], limit: int) -> str:
    peak = max(badness) if badness else 0.0
    ranked = sorted(zip(samples, badness), key=lambda pair: pair[1], reverse=True)[:limit]
    rows = []
    for s, b in ranked:
        color = traffic_light_hex(b / peak if peak else 0.0)
        rows.append(
            f"<tr><td>{escape(s.path)}</td><td>{escape(s.language)}</td>"
            f'<td class="num">{s.sloc}</td><td class="num">{s.cyclomatic_complexity:.1f}</td>'
            f'<td class="num">{s.maintainability_index:.1f}</td><td class="num">{s.weighted_smells}</td>'
            f'<td class="num">{s.coupling:.0f}</td>'
            f'<td class="num" style="color:{color}">{b:.3f}</td></tr>'
        )
    return (
        "<table><tr><th>File</th><th>Language</th><th class=num>SLOC</th><th class=num>CC</th>"
        "<th class=num>MI</th><th class=num>Smells</th><th class=num>Coupling</th>"
        "<th class=num>Badness</th></tr>" + "".join(rows) + "</table>"
    )


def _delta_rows(deltas: Sequence[CommitDelta], css: str) -> str:
    rows = "".join(
        f"<tr><td>{escape(d.snapshot.identifier[:8])}</td><td>{d.snapshot.timestamp:%Y-%m-%d}</td>"
        f'<td class="num {css}">{d.delta:+.4f}</td><td class="num">{d.relative_delta:+.1%}</td>'
        f'<td class="num">{d.sloc_delta:+,}</td><td class="num">{d.files_delta:+d}</td></tr>'
        for d in deltas
    )
    return (
        "<table><tr><th>Commit</th><th>Date</th><th class=num>Δ Drift</th><th class=num>Δ %</th>"
        "<th class=num>Δ SLOC</th><th class=num>Δ Files</th></tr>" + rows + "</table>"
    )


def _history_data(history: Sequence[RepoSnapshot]) -> list[dict]:
    return [
        {
            "hash": s.identifier,
            "date": s.timestamp.isoformat(),
            "entropy": s.drift_score,
            "files": s.total_files,
            "sloc": s.total_sloc,
        }
        for s in history
    ]


def generate_history_report(
    history: Sequence[RepoSnapshot],
    latest_files: Sequence[FileSample],
    classification: CommitClassification,
) -> str:
    """Drift over time, notable commits and the hottest files of the latest scan."""
    last = history[-1] if history else None
    score = last.drift_score if last else 0.0
    g = grade(score)
    badness = compute_badness(latest_files)

    stats = "".join(
        [
            _stat("Drift score", f"{score:.4f}"),
            _stat("Grade", g.label),
            _stat("Commits", str(len(history))),
            _stat("Files", str(last.total_files if last else 0)),
            _stat("SLOC", f"{last.total_sloc if last else 0:,}"),
        ]
    )

    sections = [
        f'<section><div class="stats">{stats}</div></section>',
        f"<section><h2>Drift over time</h2>{_line_chart([('#c678dd', [s.drift_score for s in history])])}</section>",
    ]
    if classification.troubled:
        sections.append(
            f"<section><h2>Troubled commits</h2>{_delta_rows(classification.troubled, 'up')}</section>"
        )
    if classification.heroic:
        sections.append(
            f"<section><h2>Heroic commits</h2>{_delta_rows(classification.heroic, 'down')}</section>"
        )
    if latest_files:
        sections.append(
            f"<section><h2>Hottest files</h2>{_file_rows(latest_files, badness, TOP_FILES)}</section>"
        )

    return _page(
        "EntropyX Report",
        f"{len(history)} commit(s) analysed",
        "\n".join(sections),
        {"history": _history_data(history)},
    )


def generate_drilldown(
    current: RepoSnapshot,
    samples: Sequence[FileSample],
    history: Sequence[RepoSnapshot],
    previous: Optional[RepoSnapshot] = None,
) -> str:
    """Single-commit health page: grade, percentile, change vs previous, all files."""
    g = grade(current.drift_score)
    stats = [
        _stat("Drift score", f"{current.drift_score:.4f}"),
        _stat("Grade", g.label),
        _stat("Files", str(current.total_files)),
        _stat("SLOC", f"{current.total_sloc:,}"),
    ]
    if previous is not None:
        delta = current.drift_score - previous.drift_score
        stats.append(_stat("Δ vs previous", f"{delta:+.4f}", "up" if delta > 0 else "down" if delta < 0 else ""))
    rank = percentile_rank(current.drift_score, [s.drift_score for s in history])
    if rank is not None:
        pct, band = rank
        stats.append(_stat("Percentile", f"{pct:.0f}% ({band.key})"))

    badness = compute_badness(samples)
    body = "\n".join(
        [
            f'<section><div class="stats">{"".join(stats)}</div></section>',
            f"<section><h2>Drift over time</h2>{_line_chart([('#c678dd', [s.drift_score for s in history])])}</section>",
            f"<section><h2>Files</h2>{_file_rows(samples, badness, len(samples))}</section>",
        ]
    )
    return _page(
        "EntropyX Drilldown",
        f"Commit {current.identifier[:8]} · {current.timestamp:%Y-%m-%d %H:%M}",
        body,
        {"commit": current.identifier, "history": _history_data(history)},
    )


def generate_refactor_report(ranked: Sequence[tuple[FileSample, float]], focus: str) -> str:
    samples = [s for s, _ in ranked]
    scores = [score for _, score in ranked]
    body = f"<section><h2>Top {len(ranked)} refactor candidates</h2>{_file_rows(samples, scores, len(ranked))}</section>"
    return _page(
        "EntropyX Refactor Report",
        f"Focus: {focus}",
        body,
        {"focus": focus, "files": [{"path": s.path, "score": score} for s, score in ranked]},
    )


def _entry_rows(entries: Sequence[FileEntry], baseline: dict[str, float]) -> str:
    rows = []
    for f in entries[:TOP_FILES]:
        before = baseline.get(f.path)
        delta = "" if before is None else f"{f.badness - before:+.3f}"
        rows.append(
            f"<tr><td>{escape(f.path)}</td><td class=num>{f.sloc}</td>"
            f"<td class=num>{f.badness:.3f}</td><td class=num>{delta}</td></tr>"
        )
    return (
        "<table><tr><th>File</th><th class=num>SLOC</th><th class=num>Badness</th>"
        "<th class=num>Δ Badness</th></tr>" + "".join(rows) + "</table>"
    )


def generate_comparison_report(
    baseline: SnapshotReport, current: SnapshotReport, assessment: Assessment
) -> str:
    before = {f.path: f.badness for f in baseline.latest_files}
    delta = current.summary.drift_score - baseline.summary.drift_score

    stats = "".join(
        [
            _stat("Baseline drift", f"{baseline.summary.drift_score:.4f}"),
            _stat("Current drift", f"{current.summary.drift_score:.4f}"),
            _stat("Δ Drift", f"{delta:+.4f}", "up" if delta > 0 else "down" if delta < 0 else ""),
            _stat("Δ Files", f"{current.summary.files - baseline.summary.files:+d}"),
            _stat("Δ SLOC", f"{current.summary.sloc - baseline.summary.sloc:+,}"),
        ]
    )
    observations = "".join(f"<li>{escape(o)}</li>" for o in assessment.observations)
    legend = "".join(
        f"<tr><td>{v.emoji} <b>{escape(v.title)}</b></td><td class=muted>{escape(v.description)}</td></tr>"
        for v in WEATHER_LEGEND
    )

    sections = [
        f'<section><div class="verdict"><div class="label">{escape(assessment.label)}</div>'
        f"<p>{escape(assessment.summary)}</p></div></section>",
        f'<section><div class="stats">{stats}</div></section>',
        f'<section><h2>Observations</h2><ul class="obs">{observations}</ul></section>',
        "<section><h2>Drift over time</h2>"
        + _line_chart([("#60a5fa", baseline.score_series), ("#f97316", current.score_series)])
        + '<p class="muted">Blue: baseline history. Orange: current history.</p></section>',
    ]
    for title, entries in (
        ("Files running hotter", worsened_files(baseline, current)),
        ("Files that cooled down", improved_files(baseline, current)),
        ("New files", new_files(baseline, current)),
        ("Removed files", removed_files(baseline, current)),
    ):
        if entries:
            sections.append(f"<section><h2>{title}</h2>{_entry_rows(entries, before)}</section>")
    sections.append(f"<section><h2>Forecast legend</h2><table>{legend}</table></section>")

    return _page(
        "EntropyX Evolutionary Comparison",
        f"Baseline {baseline.generated[:10]} vs current {current.generated[:10]}",
        "\n".join(sections),
        {
            "verdict": assessment.verdict.name,
            "observations": list(assessment.observations),
            "baseline": _history_data(baseline.history),
            "current": _history_data(current.history),
        },
    )
