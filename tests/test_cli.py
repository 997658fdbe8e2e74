"""CLI integration tests for the copy command (cli/app.py).

The editor process is replaced by a fake ``_run_process`` that writes
the manifest; everything else (remapping, threaded copy, output) runs
for real inside ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from distill_copy.cli import exit_codes
from distill_copy.cli.app import cli, main
from distill_copy.core.models import CopyPlan, CopyResult
from distill_copy.exceptions import (
    CommandletFailedError,
    EditorNotFoundError,
    InvalidParameterError,
    PathRemapError,
)
from distill_copy.infra.commandlet_runner import CommandletFileSetProvider


def _argv(tmp_path: Path, *extra: str, maps: str = "Entry+Level01") -> list[str]:
    editor = tmp_path / "Engine" / "UE4Editor"
    editor.parent.mkdir(parents=True, exist_ok=True)
    editor.write_text("")
    return [
        f"-ProjectPath={tmp_path / 'Game' / 'Game.uproject'}",
        f"-ManifestFile={tmp_path / 'Saved' / 'Manifest.txt'}",
        f"-UE4Exe={editor}",
        f"-Maps={maps}",
        "-Parameters=-targetplatform=LinuxNoEditor",
        f"-FromDir={tmp_path / 'Game'}",
        f"-ToDir={tmp_path / 'Out'}",
        "--no-progress",
        *extra,
    ]


RunProcess = Callable[..., tuple[int, list[str]]]


def _fake_commandlet(files: list[Path]) -> tuple[RunProcess, list[list[str]]]:
    """Stand-in ``_run_process`` that writes *files* into the manifest.

    Returns the function and the list every argv it receives is appended to.
    """
    calls: list[list[str]] = []

    def _run(self: CommandletFileSetProvider, args: list[str]) -> tuple[int, list[str]]:
        calls.append(args)
        output = next(a for a in args if a.startswith("-OutputFolder="))
        name = next(a for a in args if a.startswith("-Output="))
        manifest = Path(output.split("=", 1)[1]) / name.split("=", 1)[1]
        manifest.write_text("\n".join(str(f) for f in files) + "\n", encoding="utf-8")
        return 0, []

    return _run, calls


# ---------------------------------------------------------------------------
# Happy paths
# ---------------------------------------------------------------------------

class TestCopyCommand:
    def test_copies_distill_file_set(self, tmp_path: Path, source_tree: list[Path]) -> None:
        fake, calls = _fake_commandlet(source_tree)
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            code = main(_argv(tmp_path))

        assert code == exit_codes.SUCCESS
        for source in source_tree:
            target = tmp_path / "Out" / source.relative_to(tmp_path / "Game")
            assert target.read_bytes() == source.read_bytes()

        args = calls[0]
        assert "-run=GenerateDistillFileSets" in args
        assert args[3:5] == ["Entry", "Level01"]
        assert "-targetplatform=LinuxNoEditor" in args

    def test_maps_with_semicolons_and_empties(
        self, tmp_path: Path, source_tree: list[Path],
    ) -> None:
        fake, calls = _fake_commandlet(source_tree)
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            main(_argv(tmp_path, maps=";Entry;;Arena+"))
        assert calls[0][3:5] == ["Entry", "Arena"]

    def test_dry_run_copies_nothing(
        self,
        tmp_path: Path,
        source_tree: list[Path],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake, _ = _fake_commandlet(source_tree)
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            code = main(_argv(tmp_path, "--dry-run"))

        assert code == exit_codes.SUCCESS
        assert not (tmp_path / "Out").exists()
        assert "Copy plan" in capsys.readouterr().err

    def test_posix_spellings(self, tmp_path: Path, source_tree: list[Path]) -> None:
        editor = tmp_path / "UE4Editor"
        editor.write_text("")
        argv = [
            "--project-path", str(tmp_path / "Game" / "Game.uproject"),
            "--manifest-file", str(tmp_path / "Saved" / "Manifest.txt"),
            "--ue4-exe", str(editor),
            "--maps", "Entry",
            "--from-dir", str(tmp_path / "Game"),
            "--to-dir", str(tmp_path / "Out"),
            "--threads", "2",
            "--no-progress",
        ]
        fake, _ = _fake_commandlet(source_tree[:1])
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            assert main(argv) == exit_codes.SUCCESS
        assert (tmp_path / "Out" / "Content" / "Maps" / "Entry.umap").is_file()

    def test_threads_forwarded_to_copy(self, tmp_path: Path) -> None:
        with patch("distill_copy.core.distill_service.DistillCopyService") as mock_svc_cls:
            svc = mock_svc_cls.return_value
            svc.generate_file_set.return_value = []
            svc.plan_copy.return_value = CopyPlan(copies=())
            svc.copy.return_value = CopyResult(files_copied=0, bytes_copied=0)
            main(_argv(tmp_path, "--threads", "3"))

        assert svc.copy.call_args.kwargs["threads"] == 3
        assert svc.copy.call_args.kwargs["progress_callback"] is None


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------

class TestCopyCommandErrors:
    def test_missing_parameters_named(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            main([f"-FromDir={tmp_path}"])
        message = str(exc_info.value)
        for name in ("ProjectPath", "ManifestFile", "Maps", "ToDir"):
            assert name in message
        assert "FromDir" not in message

    def test_maps_with_only_separators(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidParameterError, match="No maps"):
            main(_argv(tmp_path, maps="+;"))

    @patch("distill_copy.infra.editor_detector.shutil.which", return_value=None)
    def test_editor_not_found(self, _which: MagicMock, tmp_path: Path) -> None:
        argv = [a for a in _argv(tmp_path) if not a.startswith("-UE4Exe=")]
        argv.append(f"-UE4Exe={tmp_path / 'NoEditor'}")
        with pytest.raises(EditorNotFoundError):
            main(argv)

    def test_commandlet_failure_propagates(self, tmp_path: Path) -> None:
        with patch.object(CommandletFileSetProvider, "_run_process", return_value=(1, ["boom"])):
            with pytest.raises(CommandletFailedError, match="exit code 1"):
                main(_argv(tmp_path))
        assert not (tmp_path / "Out").exists()

    def test_source_outside_from_dir(self, tmp_path: Path) -> None:
        stray = tmp_path / "Elsewhere" / "x.uasset"
        stray.parent.mkdir(parents=True)
        stray.write_text("x")
        fake, _ = _fake_commandlet([stray])
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            with pytest.raises(PathRemapError):
                main(_argv(tmp_path))

    def test_same_from_and_to(self, tmp_path: Path, source_tree: list[Path]) -> None:
        argv = [a for a in _argv(tmp_path) if not a.startswith("-ToDir=")]
        argv.append(f"-ToDir={tmp_path / 'Game' / '.'}")
        fake, _ = _fake_commandlet(source_tree)
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            with pytest.raises(InvalidParameterError, match="same directory"):
                main(argv)

    @pytest.mark.parametrize("threads", ["0", "-4", "many"])
    def test_bad_thread_count_rejected_before_launch(
        self, tmp_path: Path, threads: str, capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake, calls = _fake_commandlet([])
        with patch.object(CommandletFileSetProvider, "_run_process", fake):
            with pytest.raises(SystemExit) as exc_info:
                main(_argv(tmp_path, "--dry-run", "--threads", threads))
        assert exc_info.value.code == 2
        assert calls == []
        assert "--threads" in capsys.readouterr().err

    def test_commandlet_output_with_brackets_reaches_hint(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.argv", ["distill-copy", *_argv(tmp_path)])
        output = ["LogConfig: Reading [/Script/Engine.Engine]"]
        with patch.object(CommandletFileSetProvider, "_run_process", return_value=(1, output)):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Hint:" in err
        assert "[/Script/Engine.Engine]" in err
