"""Rendering: console tables, HTML pages and data.json snapshots."""

from .console import ConsoleReporter, heat_bar, traffic_light_hex
from .html import (
    generate_comparison_report,
    generate_drilldown,
    generate_history_report,
    generate_refactor_report,
)
from .snapshot_json import generate_data_json, load_snapshot_file, parse_data_json, write_snapshot_file

__all__ = [
    "ConsoleReporter",
    "generate_comparison_report",
    "generate_data_json",
    "generate_drilldown",
    "generate_history_report",
    "generate_refactor_report",
    "heat_bar",
    "load_snapshot_file",
    "parse_data_json",
    "traffic_light_hex",
    "write_snapshot_file",
]
