"""Core / service layer — business logic and path transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or process I/O.
* No imports from ``cli`` or ``infra``.
"""

from distill_copy.core.distill_service import DistillCopyService
from distill_copy.core.map_list import split_maps
from distill_copy.core.models import (
    CopyPlan,
    CopyProgress,
    CopyResult,
    DistillRequest,
    FileCopy,
)
from distill_copy.core.path_remap import build_copy_plan, remap_path
from distill_copy.core.protocols import CopyProvider, FileSetProvider

__all__: list[str] = [
    "CopyPlan",
    "CopyProgress",
    "CopyProvider",
    "CopyResult",
    "DistillCopyService",
    "DistillRequest",
    "FileCopy",
    "FileSetProvider",
    "build_copy_plan",
    "remap_path",
    "split_maps",
]
