"""Dry-run rendering of a copy plan.

Shows every source → target pair as a Rich table, falling back to
plain stderr lines when Rich is not installed.
"""

from __future__ import annotations

import sys
from pathlib import Path

from distill_copy.cli.console import console, escape_markup
from distill_copy.core.models import CopyPlan


def _relative_or_full(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def render_plan(plan: CopyPlan, from_dir: Path, to_dir: Path) -> None:
    """Print *plan* with paths shown relative to their roots."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        print(f"Copy plan: {from_dir} -> {to_dir}", file=sys.stderr)
        for item in plan.copies:
            print(f"  {item.source} -> {item.target}", file=sys.stderr)
        print(f"{len(plan)} files", file=sys.stderr)
        return

    table = Table(
        title=f"Copy plan ({len(plan)} files)",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=5)
    table.add_column(f"Source ({escape_markup(from_dir)})", overflow="fold")
    table.add_column(f"Target ({escape_markup(to_dir)})", overflow="fold")

    for index, item in enumerate(plan.copies, start=1):
        table.add_row(
            str(index),
            escape_markup(_relative_or_full(item.source, from_dir)),
            escape_markup(_relative_or_full(item.target, to_dir)),
        )

    console.print()
    console.print(table)
    console.print()
