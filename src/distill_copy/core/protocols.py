"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from distill_copy.core.models import CopyPlan, CopyProgress, CopyResult, DistillRequest


class FileSetProvider(Protocol):
    """Contract for backends that compute a distill file set."""

    def generate_file_set(self, request: DistillRequest) -> list[Path]:
        """Return absolute paths of every file the requested maps need.

        Implementations must map all backend-specific exceptions to
        :class:`~distill_copy.exceptions.DistillCopyError` subclasses.

        Raises
        ------
        CommandletFailedError
            When the commandlet cannot run or exits with an error.
        ManifestError
            When the produced manifest is missing, empty or lists
            files that do not exist.
        """
        ...  # pragma: no cover


class CopyProvider(Protocol):
    """Contract for bulk file-copy backends."""

    def copy_files(
        self,
        plan: CopyPlan,
        *,
        threads: int,
        progress_callback: Callable[[CopyProgress], None] | None = None,
    ) -> CopyResult:
        """Copy every pair in *plan*, creating target folders as needed.

        Raises
        ------
        CopyFailedError
            When any file could not be copied.
        """
        ...  # pragma: no cover
