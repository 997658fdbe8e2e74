"""Infrastructure: editor executable detection and platform guidance.

Locates the editor binary that runs the commandlet, trying in order:

1. the value as given, when it names an existing file;
2. ``<engine_root>/Engine/Binaries/<Platform>/<exe>`` when an engine
   root is known;
3. the system PATH via :func:`shutil.which`.

Rules
-----
* No subprocess — detection only.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from distill_copy.exceptions import EditorNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EditorStatus:
    """Result of an editor detection probe.

    Attributes
    ----------
    found : bool
        Whether an editor executable was located.
    path : Path | None
        Absolute path to the editor binary, or ``None``.
    detail : str
        Human-readable status string (e.g. ``"found at …"``).
    searched : tuple[str, ...]
        Locations that were probed, in order.  Used for error hints.
    """

    found: bool
    path: Path | None
    detail: str
    searched: tuple[str, ...]


# ---------------------------------------------------------------------------
# Platform helpers
# ---------------------------------------------------------------------------

def platform_binaries_folder() -> str:
    """Return the ``Engine/Binaries`` sub-folder for the host OS."""
    system = platform.system().lower()
    if system == "windows":
        return "Win64"
    if system == "darwin":
        return "Mac"
    return "Linux"


def default_editor_exe() -> str:
    """Return the command-line editor binary name for the host OS."""
    if platform.system().lower() == "windows":
        return "UE4Editor-Cmd.exe"
    return "UE4Editor"


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_editor(exe: str | None = None, engine_root: Path | None = None) -> EditorStatus:
    """Probe for the editor executable.

    Returns an :class:`EditorStatus` regardless of the outcome — the
    caller decides whether to abort or merely warn.
    """
    name = exe or default_editor_exe()
    searched: list[str] = []

    direct = Path(name)
    searched.append(str(direct))
    if direct.is_file():
        return _found(direct, searched)

    if engine_root is not None and not direct.is_absolute():
        candidate = engine_root / "Engine" / "Binaries" / platform_binaries_folder() / direct
        searched.append(str(candidate))
        if candidate.is_file():
            return _found(candidate, searched)

    searched.append(f"PATH:{name}")
    on_path = shutil.which(name)
    if on_path is not None:
        return _found(Path(on_path), searched)

    return EditorStatus(
        found=False,
        path=None,
        detail="not found",
        searched=tuple(searched),
    )


def require_editor(exe: str | None = None, engine_root: Path | None = None) -> Path:
    """Locate the editor or raise :class:`EditorNotFoundError`."""
    status = detect_editor(exe, engine_root)
    if not status.found or status.path is None:
        hint_lines = ["Looked in:"]
        hint_lines.extend(f"  {location}" for location in status.searched)
        if engine_root is None:
            hint_lines.append("Pass --engine-root or a full -UE4Exe path.")
        raise EditorNotFoundError(
            f"Editor executable not found: {exe or default_editor_exe()}",
            hint="\n".join(hint_lines),
        )
    return status.path


def _found(path: Path, searched: list[str]) -> EditorStatus:
    resolved = path.resolve()
    return EditorStatus(
        found=True,
        path=resolved,
        detail=f"found at {resolved}",
        searched=tuple(searched),
    )
