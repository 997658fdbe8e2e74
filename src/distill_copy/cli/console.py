"""CLI console helpers with optional Rich support.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
and the copy itself keep working when it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from distill_copy.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def escape_markup(text: object) -> str:
    """Escape Rich markup in *text* so brackets from logs and paths print literally.

    Without Rich nothing is parsed, so the text is returned unchanged.
    """
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return str(text)
    return escape(str(text))


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object, markup: bool = True) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects, markup=markup, highlight=markup)


console = _ConsoleProxy()
