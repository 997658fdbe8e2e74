"""Custom exception hierarchy for distill-copy.

All exceptions that cross layer boundaries must inherit from
:class:`DistillCopyError`.  Raw ``OSError`` and ``subprocess`` failures
must not propagate beyond the infrastructure layer — they are caught
and re-raised as a typed subclass defined here.

Hierarchy
---------
DistillCopyError
├── InvalidParameterError
├── EditorNotFoundError
├── CommandletFailedError
├── ManifestError
├── PathRemapError
├── CopyFailedError
└── EnvironmentError
"""

from __future__ import annotations


class DistillCopyError(Exception):
    """Base exception for all distill-copy errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Parameters ------------------------------------------------------------

class InvalidParameterError(DistillCopyError):
    """Raised when a command parameter is missing or malformed."""


# --- Commandlet ------------------------------------------------------------

class EditorNotFoundError(DistillCopyError):
    """Raised when the editor executable cannot be located."""


class CommandletFailedError(DistillCopyError):
    """Raised when the commandlet cannot be launched or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        exit_code: int | None = None,
        log_file: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.exit_code: int | None = exit_code
        self.log_file: str | None = log_file


class ManifestError(DistillCopyError):
    """Raised when the commandlet manifest is missing, empty or stale."""


# --- Copy ------------------------------------------------------------------

class PathRemapError(DistillCopyError):
    """Raised when a source file does not live under the source root."""


class CopyFailedError(DistillCopyError):
    """Raised when one or more files could not be copied."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(DistillCopyError):
    """Raised when a required runtime dependency is not available."""
