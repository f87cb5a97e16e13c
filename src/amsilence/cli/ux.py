"""
CLI output helpers built on rich.

Environment handling:
- Respects NO_COLOR and FORCE_COLOR environment variables
- Falls back to plain text in non-interactive environments (pipes, CI)
"""

from __future__ import annotations

import os
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

AMSILENCE_THEME = Theme(
    {
        "info": "#88C0D0",
        "success": "#A3BE8C",
        "warning": "#EBCB8B",
        "error": "#BF616A bold",
        "muted": "#D8DEE9",
    }
)


def _is_interactive() -> bool:
    """Check if we're in an interactive terminal environment."""
    ci_vars = ["CI", "GITHUB_ACTIONS", "JENKINS_URL", "GITLAB_CI", "CIRCLECI", "TRAVIS"]
    if any(os.environ.get(var) for var in ci_vars):
        return False
    return sys.stdout.isatty()


def _should_use_color() -> bool:
    """Check if we should use colored output."""
    # https://no-color.org/
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return _is_interactive()


console = Console(
    theme=AMSILENCE_THEME,
    force_terminal=os.environ.get("FORCE_COLOR") is not None,
    no_color=not _should_use_color(),
)


def success(message: str) -> None:
    console.print(f"[success]✓ {escape(message)}[/success]")


def error(message: str) -> None:
    console.print(f"[error]✗ {escape(message)}[/error]")


def warning(message: str) -> None:
    console.print(f"[warning]⚠ {escape(message)}[/warning]")


def info(message: str) -> None:
    console.print(f"[info]ℹ {escape(message)}[/info]")


def print_table(
    title: str,
    columns: list[str],
    rows: list[list[str]],
    show_header: bool = True,
) -> None:
    """Print a formatted table."""
    table = Table(title=title, show_header=show_header)

    for col in columns:
        table.add_column(col)

    for row in rows:
        table.add_row(*row)

    console.print(table)
