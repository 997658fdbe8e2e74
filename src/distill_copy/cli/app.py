"""CLI application entry point and command routing for distill-copy.

This module is the **sole error boundary** for the entire application.
It catches :class:`~distill_copy.exceptions.DistillCopyError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Parameters follow the automation-tool convention (``-ProjectPath=...``)
and also have POSIX spellings (``--project-path ...``).  Values that
start with ``-`` (typically ``-Parameters``) must use the ``=`` form.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from distill_copy.cli import exit_codes
from distill_copy.cli.console import console, escape_markup
from distill_copy.exceptions import DistillCopyError, InvalidParameterError
from distill_copy.utils import COMMANDLET_NAME, DEFAULT_COPY_THREADS
from distill_copy.version import __version__

if TYPE_CHECKING:
    from distill_copy.core.models import DistillRequest

# (dest, display name) of every parameter the copy cannot run without.
_REQUIRED_PARAMS: tuple[tuple[str, str], ...] = (
    ("project_path", "ProjectPath"),
    ("manifest_file", "ManifestFile"),
    ("maps", "Maps"),
    ("from_dir", "FromDir"),
    ("to_dir", "ToDir"),
)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _thread_count(value: str) -> int:
    """argparse ``type`` for ``--threads``: an integer of at least 1."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid thread count: {value!r}") from None
    if count < 1:
        raise argparse.ArgumentTypeError(f"thread count must be at least 1, got {count}")
    return count


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``distill-copy -ProjectPath=... -ManifestFile=... -Maps=... -FromDir=... -ToDir=...``
    * ``distill-copy doctor``  — environment diagnostics
    * ``distill-copy --version``
    """
    parser = argparse.ArgumentParser(
        prog="distill-copy",
        description=(
            f"Run the {COMMANDLET_NAME} commandlet for a set of maps and copy "
            "the files it lists from FromDir to ToDir."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=["doctor"],
        default=None,
        help="'doctor' runs environment diagnostics instead of copying.",
    )

    params = parser.add_argument_group("command parameters")
    params.add_argument("-ProjectPath", "--project-path", dest="project_path",
                        metavar="PATH", help="Project file passed to the editor.")
    params.add_argument("-ManifestFile", "--manifest-file", dest="manifest_file",
                        metavar="PATH", help="Manifest the commandlet writes its file list to.")
    params.add_argument("-UE4Exe", "--ue4-exe", dest="ue4_exe", metavar="EXE",
                        help="Editor executable running the commandlet.")
    params.add_argument("-Maps", "--maps", dest="maps", metavar="LIST",
                        help="Maps separated by '+' or ';'.")
    params.add_argument("-Parameters", "--parameters", dest="parameters", default="",
                        metavar="ARGS", help="Extra commandlet arguments (use the '=' form).")
    params.add_argument("-FromDir", "--from-dir", dest="from_dir", metavar="DIR",
                        help="Source root of the listed files.")
    params.add_argument("-ToDir", "--to-dir", dest="to_dir", metavar="DIR",
                        help="Destination root.")

    options = parser.add_argument_group("options")
    options.add_argument("--engine-root", type=Path, default=None, metavar="DIR",
                         help="Engine root used to find a bare editor executable name.")
    options.add_argument("--log-dir", type=Path, default=None, metavar="DIR",
                         help="Folder for the commandlet log (default: manifest folder).")
    options.add_argument("--threads", type=_thread_count, default=DEFAULT_COPY_THREADS, metavar="N",
                         help=f"Parallel copy workers (default: {DEFAULT_COPY_THREADS}).")
    options.add_argument("--dry-run", action="store_true",
                         help="Show the copy plan without copying.")
    options.add_argument("--no-progress", action="store_true",
                         help="Disable the progress bar.")
    options.add_argument("-v", "--verbose", action="store_true",
                         help="Echo commandlet output.")
    return parser


# ---------------------------------------------------------------------------
# Request construction
# ---------------------------------------------------------------------------

def _full_path(value: str) -> Path:
    """Absolute, normalised form of *value*."""
    return Path(os.path.abspath(value))


def _has_copy_params(args: argparse.Namespace) -> bool:
    return any(getattr(args, dest) for dest, _ in _REQUIRED_PARAMS)


def _build_request(args: argparse.Namespace) -> DistillRequest:
    """Turn parsed arguments into a :class:`DistillRequest`.

    Raises
    ------
    InvalidParameterError
        If a required parameter is missing or no maps remain after splitting.
    EditorNotFoundError
        If the editor executable cannot be located.
    """
    from distill_copy.core.map_list import split_maps
    from distill_copy.core.models import DistillRequest
    from distill_copy.infra.editor_detector import require_editor

    missing = [name for dest, name in _REQUIRED_PARAMS if not getattr(args, dest)]
    if missing:
        raise InvalidParameterError(
            f"Missing required parameter(s): {', '.join(missing)}",
            hint="Run distill-copy --help for usage.",
        )

    maps = split_maps(args.maps)
    if not maps:
        raise InvalidParameterError(
            f"No maps found in -Maps={args.maps}",
            hint="Separate map names with '+' or ';'.",
        )

    engine_root = _full_path(str(args.engine_root)) if args.engine_root else None
    editor = require_editor(args.ue4_exe, engine_root)

    return DistillRequest(
        project=_full_path(args.project_path),
        manifest_file=_full_path(args.manifest_file),
        editor_exe=editor,
        maps=maps,
        from_dir=_full_path(args.from_dir),
        to_dir=_full_path(args.to_dir),
        parameters=args.parameters or "",
        log_dir=_full_path(str(args.log_dir)) if args.log_dir else None,
        verbose=args.verbose,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _format_size(num_bytes: int) -> str:
    """Convert bytes to a human-readable MB string."""
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def _echo_commandlet_line(line: str) -> None:
    console.print(line, markup=False)


def _handle_copy(args: argparse.Namespace) -> int:
    """Run the commandlet and mirror its file set.

    Flow:
    1. Validate parameters and locate the editor.
    2. Run the commandlet and read back its manifest.
    3. Remap every source from FromDir to ToDir.
    4. Copy in parallel with a progress bar (or print the plan on --dry-run).
    """
    from distill_copy.cli.plan_table import render_plan
    from distill_copy.cli.progress import progress_hook
    from distill_copy.core.distill_service import DistillCopyService
    from distill_copy.infra.commandlet_runner import CommandletFileSetProvider
    from distill_copy.infra.file_copier import ThreadedFileCopier

    request = _build_request(args)

    file_set_provider = CommandletFileSetProvider(
        output_callback=_echo_commandlet_line if args.verbose else None,
    )
    service = DistillCopyService(file_set_provider, ThreadedFileCopier())

    console.print(
        f"\n[bold]Running {COMMANDLET_NAME}…[/bold]  maps={escape_markup('+'.join(request.maps))}\n"
    )
    sources = service.generate_file_set(request)
    plan = service.plan_copy(sources, request.from_dir, request.to_dir)
    console.print(f"[bold]{len(plan)}[/bold] files in the distill file set.")

    if args.dry_run:
        render_plan(plan, request.from_dir, request.to_dir)
        return exit_codes.SUCCESS

    with progress_hook(not args.no_progress, len(plan)) as hook:
        result = service.copy(plan, threads=args.threads, progress_callback=hook)

    console.print(
        f"\n[bold green]Copied {result.files_copied} files[/bold green] "
        f"({_format_size(result.bytes_copied)}) to {escape_markup(request.to_dir)}"
    )
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from distill_copy.cli.doctor import run_doctor

    engine_root = _full_path(str(args.engine_root)) if args.engine_root else None
    return run_doctor(args.ue4_exe, engine_root)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the distill-copy CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "doctor":
        return _handle_doctor(args)

    if not _has_copy_params(args):
        parser.print_help()
        return exit_codes.SUCCESS

    return _handle_copy(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DistillCopyError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
