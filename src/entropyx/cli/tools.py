"""Tool availability commands."""

from pathlib import Path

import typer

from ..logging_config import get_logger
from ..reporting import ConsoleReporter
from ..scanning import ToolProcurement, detect_language
from ..scanning.tools import BASE_TOOLS, current_platform
from . import app, check_app
from ._common import build_pipeline, command_errors, console, resolve_config

logger = get_logger(__name__)


def _check(ctx: typer.Context, path: Path) -> None:
    config = resolve_config(ctx)
    procurement = ToolProcurement()
    reporter = ConsoleReporter(console)
    platform = current_platform()

    if path.is_dir():
        languages = sorted({detect_language(rel) for rel in build_pipeline(config).discover(path)})
    else:
        logger.warning(f"Path '{path}' does not exist")
        languages = []
    reporter.report_detected_languages(languages)

    required = sorted({tool for lang in languages for tool in procurement.required_tools(lang)})
    for tool in required or sorted(BASE_TOOLS):
        if procurement.check_tool(tool):
            reporter.report_tool_available(tool)
        else:
            reporter.report_tool_missing(tool, procurement.install_instructions(tool, platform))


@check_app.command("tools")
def check_tools(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan for language detection"),
):
    """Verify external tool availability and show install instructions."""
    with command_errors():
        _check(ctx, path)


@app.command("tools", hidden=True)
def tools(
    ctx: typer.Context,
    path: Path = typer.Argument(Path("."), help="Directory to scan for language detection"),
):
    """Alias of [bold]check tools[/bold]."""
    with command_errors():
        _check(ctx, path)
