"""Infrastructure layer — external system integration.

This layer wraps all interaction with the editor process and the
filesystem.  Every raw ``OSError`` or process failure must be caught
here and re-raised as a
:class:`~distill_copy.exceptions.DistillCopyError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from distill_copy.infra.commandlet_runner import CommandletFileSetProvider
from distill_copy.infra.editor_detector import EditorStatus, detect_editor, require_editor
from distill_copy.infra.file_copier import ThreadedFileCopier

__all__: list[str] = [
    "CommandletFileSetProvider",
    "EditorStatus",
    "ThreadedFileCopier",
    "detect_editor",
    "require_editor",
]
