"""CLI UI components (Rich).

Keeps console/logging details out of the command functions.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table


def configure_logging(*, verbose: bool = False, console: Console | None = None) -> None:
    """Route the root logger to a Rich handler on stderr.

    WARNING and above by default, everything with `--verbose`.
    """

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_message(console: Console, text: str) -> None:
    """Print a selector message verbatim (tags may contain `[` or `*`)."""

    console.print(text, markup=False, highlight=False)


def print_error(console: Console, text: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {text}", highlight=False)


def build_doctor_table() -> Table:
    table = Table(title="music_selection doctor")
    table.add_column("Check", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
