"""Domain models for distill-copy.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependencies
on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Command request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DistillRequest:
    """Everything needed to run the commandlet and mirror its file set."""

    project: Path
    """Project file handed to the editor."""

    manifest_file: Path
    """Path the commandlet writes its file list to."""

    editor_exe: Path
    """Resolved editor executable that runs the commandlet."""

    maps: tuple[str, ...]
    """Map identifiers whose dependencies are gathered."""

    from_dir: Path
    """Root every listed source file lives under."""

    to_dir: Path
    """Root the files are mirrored into."""

    parameters: str = ""
    """Extra arguments appended verbatim to the commandlet line."""

    log_dir: Path | None = None
    """Folder for the commandlet log, or ``None`` for the manifest folder."""

    verbose: bool = False
    """Echo commandlet output and raise its stdout verbosity."""


# ---------------------------------------------------------------------------
# Copy plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FileCopy:
    """A single source → target pair."""

    source: Path
    target: Path


@dataclass(frozen=True, slots=True)
class CopyPlan:
    """Immutable, ordered collection of :class:`FileCopy` entries.

    Each source appears exactly once.
    """

    copies: tuple[FileCopy, ...]

    @property
    def sources(self) -> list[Path]:
        return [item.source for item in self.copies]

    @property
    def targets(self) -> list[Path]:
        return [item.target for item in self.copies]

    def __len__(self) -> int:
        return len(self.copies)

    def __bool__(self) -> bool:
        return len(self.copies) > 0


# ---------------------------------------------------------------------------
# Progress / outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CopyProgress:
    """Progress event emitted by a copy provider."""

    status: str
    """``"copying"`` after each file, ``"finished"`` once at the end."""

    completed: int
    total: int
    path: Path | None = None
    """Target just written, or ``None`` for the final event."""


@dataclass(frozen=True, slots=True)
class CopyResult:
    """Summary of a completed bulk copy."""

    files_copied: int
    bytes_copied: int
