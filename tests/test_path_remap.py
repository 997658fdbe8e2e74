"""Tests for path remapping and copy-plan construction (core/path_remap.py).

All tests are pure path arithmetic — nothing touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from distill_copy.core.path_remap import build_copy_plan, remap_path
from distill_copy.exceptions import InvalidParameterError, PathRemapError

FROM = Path("/work/Game")
TO = Path("/out/Staged")


class TestRemapPath:
    def test_nested_file(self) -> None:
        source = FROM / "Content" / "Maps" / "Entry.umap"
        assert remap_path(source, FROM, TO) == TO / "Content" / "Maps" / "Entry.umap"

    def test_file_at_root(self) -> None:
        assert remap_path(FROM / "Game.uproject", FROM, TO) == TO / "Game.uproject"

    def test_target_is_to_dir_joined_with_relative_part(self) -> None:
        source = FROM / "a" / "b" / "c.uasset"
        target = remap_path(source, FROM, TO)
        assert target == TO / source.relative_to(FROM)

    def test_outside_from_dir_raises(self) -> None:
        with pytest.raises(PathRemapError, match="not under"):
            remap_path(Path("/elsewhere/file.uasset"), FROM, TO)

    def test_sibling_prefix_is_not_inside(self) -> None:
        with pytest.raises(PathRemapError):
            remap_path(Path("/work/GameExtra/file.uasset"), FROM, TO)

    def test_error_has_hint(self) -> None:
        with pytest.raises(PathRemapError) as exc_info:
            remap_path(Path("/elsewhere/x"), FROM, TO)
        assert exc_info.value.hint is not None


class TestBuildCopyPlan:
    def test_one_target_per_source_in_order(self) -> None:
        sources = [FROM / "b.uasset", FROM / "a" / "c.uasset"]
        plan = build_copy_plan(sources, FROM, TO)

        assert plan.sources == sources
        assert plan.targets == [TO / "b.uasset", TO / "a" / "c.uasset"]
        assert len(plan) == 2

    def test_duplicates_collapse_to_first(self) -> None:
        sources = [FROM / "a.uasset", FROM / "b.uasset", FROM / "a.uasset"]
        plan = build_copy_plan(sources, FROM, TO)

        assert plan.sources == [FROM / "a.uasset", FROM / "b.uasset"]
        assert len(set(plan.targets)) == len(plan)

    def test_empty_input_gives_empty_plan(self) -> None:
        plan = build_copy_plan([], FROM, TO)
        assert not plan
        assert len(plan) == 0

    def test_same_directories_rejected(self) -> None:
        with pytest.raises(InvalidParameterError, match="same directory"):
            build_copy_plan([FROM / "a.uasset"], FROM, FROM)

    def test_any_outside_source_fails_whole_plan(self) -> None:
        with pytest.raises(PathRemapError):
            build_copy_plan([FROM / "a.uasset", Path("/tmp/x.uasset")], FROM, TO)

    def test_accepts_generator(self) -> None:
        plan = build_copy_plan((FROM / name for name in ("x", "y")), FROM, TO)
        assert plan.targets == [TO / "x", TO / "y"]
