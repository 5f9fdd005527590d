"""Shared console helpers for jlscaffold.

Every status line the generator prints goes through the single Rich
``console`` defined here, so callers (and tests) can redirect or silence it
in one place.  Messages are escaped before printing: paths and error texts
may contain square brackets that Rich would otherwise read as markup.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: Mapping[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value table.

    Args:
        data: Mapping of label -> value; values are shown with ``str()``.
        title: Table title.
    """
    table = Table(title=title, show_header=False, title_style="bold cyan")
    table.add_column("Field", style="dim", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
