"""Threaded implementation of :class:`~distill_copy.core.protocols.CopyProvider`.

Copies a :class:`~distill_copy.core.models.CopyPlan` with a thread pool.
Target folders are created on demand, read-only targets are made
writable before being overwritten, and timestamps are preserved.

Progress events are emitted from the calling thread as copies complete,
so callbacks need no locking.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from distill_copy.core.models import CopyPlan, CopyProgress, CopyResult, FileCopy
from distill_copy.exceptions import CopyFailedError, InvalidParameterError
from distill_copy.utils import DEFAULT_COPY_THREADS


def copy_one(item: FileCopy) -> int:
    """Copy a single file and return the number of bytes written."""
    item.target.parent.mkdir(parents=True, exist_ok=True)
    if item.target.exists():
        _make_writable(item.target)
    shutil.copy2(item.source, item.target)
    return item.target.stat().st_size


def _make_writable(path: Path) -> None:
    mode = path.stat().st_mode
    if not mode & stat.S_IWRITE:
        os.chmod(path, mode | stat.S_IWRITE)


class ThreadedFileCopier:
    """Concrete :class:`CopyProvider` backed by a thread pool."""

    def copy_files(
        self,
        plan: CopyPlan,
        *,
        threads: int = DEFAULT_COPY_THREADS,
        progress_callback: Callable[[CopyProgress], None] | None = None,
    ) -> CopyResult:
        """Copy every pair in *plan*.

        All copies are attempted even if some fail.

        Raises
        ------
        InvalidParameterError
            If *threads* is below 1.
        CopyFailedError
            If any file could not be copied.
        """
        if threads < 1:
            raise InvalidParameterError(f"Thread count must be at least 1, got {threads}.")

        total = len(plan)
        completed = 0
        bytes_copied = 0
        failures: list[tuple[FileCopy, OSError]] = []

        if total:
            workers = min(threads, total)
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="distill-copy") as pool:
                futures = {pool.submit(copy_one, item): item for item in plan.copies}
                for future in as_completed(futures):
                    item = futures[future]
                    try:
                        bytes_copied += future.result()
                    except OSError as exc:
                        failures.append((item, exc))
                        continue
                    completed += 1
                    if progress_callback is not None:
                        progress_callback(
                            CopyProgress(
                                status="copying",
                                completed=completed,
                                total=total,
                                path=item.target,
                            )
                        )

        if failures:
            first_item, first_exc = failures[0]
            raise CopyFailedError(
                f"Failed to copy {len(failures)} of {total} files; "
                f"first failure: {first_item.source} -> {first_item.target}: {first_exc}",
                hint="Check permissions and free space in the destination tree.",
            ) from first_exc

        if progress_callback is not None:
            progress_callback(CopyProgress(status="finished", completed=completed, total=total))

        return CopyResult(files_copied=completed, bytes_copied=bytes_copied)
