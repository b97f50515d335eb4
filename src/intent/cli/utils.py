"""
Shared CLI helpers: version, logging setup, issue rendering.
"""

from __future__ import annotations

import logging
import os
import platform

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from intent.core.errors import IntentError
from intent.core.ir import Severity, ValidationIssue

console = Console()
err_console = Console(stderr=True)

LOG_LEVEL_ENV = "INTENT_LOG_LEVEL"

_SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


def get_version() -> str:
    """Get Intent version."""
    from intent import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"Intent {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging from ``--verbose`` or ``INTENT_LOG_LEVEL``."""
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def fail(error: IntentError | str) -> typer.Exit:
    """Print an error and return the Exit to raise."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", markup=True, highlight=False)
    return typer.Exit(code=1)


def print_issues(issues: list[ValidationIssue], title: str) -> None:
    """Render issues as a table; prints nothing when there are none."""
    if not issues:
        return
    table = Table(title=title, show_lines=False)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Code", no_wrap=True, min_width=max(len(issue.code) for issue in issues))
    table.add_column("Message")
    table.add_column("Path")
    for issue in issues:
        style = _SEVERITY_STYLES.get(issue.severity, "")
        message = escape(issue.message)
        if issue.suggestion:
            message += f"\n→ {escape(issue.suggestion)}"
        table.add_row(f"[{style}]{issue.severity}[/{style}]", issue.code, message, escape(issue.path))
    console.print(table)
