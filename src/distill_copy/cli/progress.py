"""Rich-based progress display driven by copy progress events.

Bridges the :class:`~distill_copy.core.models.CopyProgress` callback of
the copy provider with a Rich :class:`~rich.progress.Progress` bar.

Design
------
* :class:`CopyProgressHook` manages a Rich Progress context.
* :meth:`__call__` is the callback passed to the copy service.
* Shutdown-safe: if the progress bar is already stopped, calls are
  silently ignored.
"""

from __future__ import annotations

from contextlib import AbstractContextManager, nullcontext
from typing import Any

from distill_copy.cli.console import escape_markup, get_rich_console
from distill_copy.core.models import CopyProgress
from distill_copy.exceptions import EnvironmentError


class CopyProgressHook:
    """Callable progress-hook adapter for Rich.

    Usage::

        with CopyProgressHook(total=len(plan)) as hook:
            service.copy(plan, progress_callback=hook)
    """

    def __init__(self, total: int | None = None) -> None:
        try:
            from rich.progress import (
                BarColumn,
                MofNCompleteColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeElapsedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=get_rich_console(),
            transient=False,
        )
        self._total: int | None = total
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> CopyProgressHook:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Hook callback
    # ------------------------------------------------------------------

    def __call__(self, event: CopyProgress) -> None:
        """Copy-progress callback."""
        if not self._started:
            return

        if self._task_id is None:
            self._task_id = self._progress.add_task(
                "Copying",
                total=self._total if self._total is not None else event.total,
            )

        if event.status == "copying":
            self._progress.update(
                self._task_id,
                total=event.total,
                completed=event.completed,
                description=escape_markup(_display_name(event)),
            )
        elif event.status == "finished":
            self._progress.update(
                self._task_id,
                total=event.total,
                completed=event.total,
                description="Copied",
            )


def progress_hook(enabled: bool, total: int) -> AbstractContextManager[Any]:
    """Return a :class:`CopyProgressHook`, or a no-op context when unavailable.

    The no-op context yields ``None`` so it can be passed straight through
    as ``progress_callback``.
    """
    if not enabled:
        return nullcontext(None)
    try:
        return CopyProgressHook(total=total)
    except EnvironmentError:
        return nullcontext(None)


def _display_name(event: CopyProgress) -> str:
    """Short file name for the progress description."""
    if event.path is None:
        return "Copying"
    name = event.path.name
    if len(name) > 40:
        name = name[:37] + "..."
    return name
