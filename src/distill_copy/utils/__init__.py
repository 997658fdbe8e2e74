"""Shared utilities — constants and defaults used across layers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from __future__ import annotations

COMMANDLET_NAME: str = "GenerateDistillFileSets"
"""Editor commandlet that lists the files required by a set of maps."""

MAP_SEPARATORS: tuple[str, ...] = ("+", ";")
"""Characters that delimit entries in the ``Maps`` parameter."""

DEFAULT_COPY_THREADS: int = 64
"""Worker count for the threaded bulk copy."""

BUILD_MACHINE_ENV_VAR: str = "IsBuildMachine"
"""Environment variable set to ``1`` on build machines."""
