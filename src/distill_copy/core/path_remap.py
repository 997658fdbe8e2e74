"""Source → destination path remapping.

Every function here is a pure path transformation: the filesystem is
never touched.  Callers pass absolute paths.

Contract
--------
For every source ``s`` under ``from_dir`` the target is
``to_dir / s.relative_to(from_dir)``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from distill_copy.core.models import CopyPlan, FileCopy
from distill_copy.exceptions import InvalidParameterError, PathRemapError


def remap_path(source: Path, from_dir: Path, to_dir: Path) -> Path:
    """Return the location of *source* once mirrored into *to_dir*.

    Raises
    ------
    PathRemapError
        If *source* does not live under *from_dir*.
    """
    try:
        relative = source.relative_to(from_dir)
    except ValueError as exc:
        raise PathRemapError(
            f"{source} is not under the source directory {from_dir}.",
            hint="Check that FromDir is the root the commandlet lists files from.",
        ) from exc
    return to_dir / relative


def build_copy_plan(
    sources: Iterable[Path],
    from_dir: Path,
    to_dir: Path,
) -> CopyPlan:
    """Pair each distinct source with its remapped target.

    Input order is kept.  A source listed twice only gets the first
    entry, so the copy never writes the same target concurrently.

    Raises
    ------
    InvalidParameterError
        If *from_dir* and *to_dir* are the same directory.
    PathRemapError
        If any source falls outside *from_dir*.
    """
    if from_dir == to_dir:
        raise InvalidParameterError(
            f"FromDir and ToDir are the same directory: {from_dir}",
            hint="Copy into a different destination tree.",
        )

    seen: set[Path] = set()
    copies: list[FileCopy] = []
    for source in sources:
        if source in seen:
            continue
        seen.add(source)
        copies.append(FileCopy(source=source, target=remap_path(source, from_dir, to_dir)))
    return CopyPlan(copies=tuple(copies))
