"""Shared pytest fixtures and configuration for the distill-copy test suite.

Guidelines
----------
* No real editor is ever launched — the process boundary is mocked.
* File copies only touch ``tmp_path``.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from distill_copy.core.models import DistillRequest


@pytest.fixture
def make_request(tmp_path: Path) -> Callable[..., DistillRequest]:
    """Factory for :class:`DistillRequest` rooted in ``tmp_path``."""

    def _factory(**overrides: Any) -> DistillRequest:
        defaults: dict[str, Any] = {
            "project": tmp_path / "Game" / "Game.uproject",
            "manifest_file": tmp_path / "Saved" / "Distill" / "Manifest.txt",
            "editor_exe": tmp_path / "Engine" / "UE4Editor",
            "maps": ("Entry", "Level01"),
            "from_dir": tmp_path / "Game",
            "to_dir": tmp_path / "Out",
        }
        defaults.update(overrides)
        return DistillRequest(**defaults)

    return _factory


@pytest.fixture
def source_tree(tmp_path: Path) -> list[Path]:
    """A small source tree under ``tmp_path/Game`` with nested folders."""
    files = [
        tmp_path / "Game" / "Content" / "Maps" / "Entry.umap",
        tmp_path / "Game" / "Content" / "Props" / "Chair.uasset",
        tmp_path / "Game" / "Config" / "DefaultGame.ini",
    ]
    for index, path in enumerate(files):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * (index + 1) * 10)
    return files
