"""Editor-commandlet backed implementation of :class:`~distill_copy.core.protocols.FileSetProvider`.

This module is the **only** place in the codebase that launches the
editor.  It runs ``GenerateDistillFileSets``, reads back the manifest it
writes and turns every listed file into an absolute path.  Launch
failures, non-zero exits and manifest problems are re-raised as typed
:class:`~distill_copy.exceptions.DistillCopyError` subclasses.
"""

from __future__ import annotations

import os
import shlex
import subprocess
from collections import deque
from collections.abc import Callable
from pathlib import Path

from distill_copy.core.models import DistillRequest
from distill_copy.exceptions import CommandletFailedError, ManifestError
from distill_copy.utils import BUILD_MACHINE_ENV_VAR, COMMANDLET_NAME

# Lines of commandlet output kept for the failure hint.
_OUTPUT_TAIL_LINES = 20


# ---------------------------------------------------------------------------
# Command line construction (pure)
# ---------------------------------------------------------------------------

def build_commandlet_args(
    editor: Path,
    request: DistillRequest,
    log_file: Path,
    *,
    build_machine: bool = False,
) -> list[str]:
    """Return the argv that runs ``GenerateDistillFileSets`` for *request*."""
    manifest = request.manifest_file
    args = [
        str(editor),
        str(request.project),
        f"-run={COMMANDLET_NAME}",
        *request.maps,
        f"-OutputFolder={manifest.parent}",
        f"-Output={manifest.name}",
    ]
    if request.parameters:
        args.extend(shlex.split(request.parameters, posix=os.name != "nt"))
    args.extend(
        [
            f"-abslog={log_file}",
            "-stdout",
            "-CrashForUAT",
            "-unattended",
            "-NoLogTimes",
        ]
    )
    if build_machine:
        args.append("-buildmachine")
    if request.verbose:
        args.append("-AllowStdOutLogVerbosity")
    return args


def unique_log_path(folder: Path, base_name: str) -> Path:
    """Return ``folder/base_name.txt``, or the first free ``-N`` variant."""
    candidate = folder / f"{base_name}.txt"
    index = 2
    while candidate.exists():
        candidate = folder / f"{base_name}-{index}.txt"
        index += 1
    return candidate


def is_build_machine() -> bool:
    """Return ``True`` when running on a build machine."""
    return os.environ.get(BUILD_MACHINE_ENV_VAR, "") == "1"


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------

class CommandletFileSetProvider:
    """Concrete :class:`FileSetProvider` backed by the editor commandlet.

    Usage::

        provider = CommandletFileSetProvider()
        files = provider.generate_file_set(request)

    Parameters
    ----------
    output_callback:
        Optional callable receiving each line the commandlet prints.
    build_machine:
        Add ``-buildmachine`` to the command line.  Defaults to the
        ``IsBuildMachine`` environment variable.
    """

    def __init__(
        self,
        *,
        output_callback: Callable[[str], None] | None = None,
        build_machine: bool | None = None,
    ) -> None:
        self._output_callback = output_callback
        self._build_machine: bool = is_build_machine() if build_machine is None else build_machine

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def generate_file_set(self, request: DistillRequest) -> list[Path]:
        """Run the commandlet and return the files listed in its manifest.

        Raises
        ------
        CommandletFailedError
            When the editor cannot be launched or exits non-zero.
        ManifestError
            When the manifest is missing, empty or references missing files.
        """
        manifest = request.manifest_file
        if not manifest.name:
            raise ManifestError(f"{COMMANDLET_NAME} needs a full path and file for {manifest}.")

        self._prepare_manifest(manifest)
        log_dir = request.log_dir or manifest.parent
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CommandletFailedError(f"Cannot create log folder {log_dir}: {exc}") from exc
        log_file = unique_log_path(log_dir, COMMANDLET_NAME)

        args = build_commandlet_args(
            request.editor_exe,
            request,
            log_file,
            build_machine=self._build_machine,
        )
        exit_code, tail = self._run_process(args)
        if exit_code != 0:
            hint_lines = [f"See log {log_file}"]
            if tail:
                hint_lines.append("Last output:")
                hint_lines.extend(f"    {line}" for line in tail)
            raise CommandletFailedError(
                f"Editor terminated with exit code {exit_code} while running "
                f"{COMMANDLET_NAME} for {request.project}.",
                hint="\n".join(hint_lines),
                exit_code=exit_code,
                log_file=str(log_file),
            )

        return self._read_manifest(manifest, request.project)

    # ------------------------------------------------------------------
    # Process execution
    # ------------------------------------------------------------------

    def _run_process(self, args: list[str]) -> tuple[int, list[str]]:
        """Run *args*, stream its output and return ``(exit_code, tail)``."""
        tail: deque[str] = deque(maxlen=_OUTPUT_TAIL_LINES)
        try:
            with subprocess.Popen(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            ) as proc:
                for raw_line in proc.stdout or ():
                    line = raw_line.rstrip("\r\n")
                    tail.append(line)
                    if self._output_callback is not None:
                        self._output_callback(line)
                exit_code = proc.wait()
        except OSError as exc:
            raise CommandletFailedError(
                f"Could not launch {args[0]}: {exc}",
                hint="Check that -UE4Exe points at an editor executable.",
            ) from exc
        return exit_code, list(tail)

    # ------------------------------------------------------------------
    # Manifest handling
    # ------------------------------------------------------------------

    @staticmethod
    def _prepare_manifest(manifest: Path) -> None:
        """Create the manifest folder and remove a stale manifest."""
        try:
            manifest.parent.mkdir(parents=True, exist_ok=True)
            manifest.unlink(missing_ok=True)
        except OSError as exc:
            raise ManifestError(f"Cannot prepare manifest {manifest}: {exc}") from exc

    @staticmethod
    def _read_manifest(manifest: Path, project: Path) -> list[Path]:
        """Parse *manifest* into absolute, existing file paths."""
        if not manifest.is_file():
            raise ManifestError(
                f"{COMMANDLET_NAME} did not produce a manifest for {project}.",
                hint=f"Expected {manifest}",
            )
        try:
            lines = manifest.read_text(encoding="utf-8-sig").splitlines()
        except OSError as exc:
            raise ManifestError(f"Cannot read manifest {manifest}: {exc}") from exc

        entries = [line.strip() for line in lines if line.strip()]
        if not entries:
            raise ManifestError(
                f"{COMMANDLET_NAME} for {project} did not produce any files.",
                hint="Check that the maps exist in the project.",
            )

        result: list[Path] = []
        for entry in entries:
            path = Path(os.path.abspath(entry))
            if not path.is_file():
                raise ManifestError(
                    f"{COMMANDLET_NAME} produced {entry}, but {path} doesn't exist.",
                )
            result.append(path)
        return result
