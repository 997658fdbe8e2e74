"""``distill-copy doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run the commandlet and the copy.

Lives in the CLI layer — it may import from ``infra`` and renders via
Rich.  No business logic resides here.
"""

from __future__ import annotations

import importlib.metadata
import platform
import sys
from pathlib import Path

from distill_copy.cli import exit_codes
from distill_copy.cli.console import console, escape_markup
from distill_copy.infra.commandlet_runner import is_build_machine
from distill_copy.infra.editor_detector import detect_editor, platform_binaries_folder
from distill_copy.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    major, minor = sys.version_info[:2]
    ok = (major, minor) >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _editor_check(ue4_exe: str | None, engine_root: Path | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the editor executable row."""
    status_obj = detect_editor(ue4_exe, engine_root)
    if status_obj.found:
        return "Editor", str(status_obj.path), "[green]OK[/green]"
    return "Editor", "not found", "[yellow]WARN[/yellow]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Rich row."""
    try:
        import rich  # noqa: F401
    except ImportError:
        return "rich", "NOT INSTALLED", "[yellow]WARN[/yellow]"

    try:
        rich_ver = importlib.metadata.version("rich")
    except importlib.metadata.PackageNotFoundError:
        rich_ver = "unknown"
    return "rich", rich_ver, "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform_binaries_folder()})"
    return "OS", value, "[green]OK[/green]"


def _build_machine_check() -> tuple[str, str, str]:
    value = "yes" if is_build_machine() else "no"
    return "Build machine", value, "[green]OK[/green]"


def _version_check() -> tuple[str, str, str]:
    return "distill-copy", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ndistill-copy doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(ue4_exe: str | None = None, engine_root: Path | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _version_check(),
        _python_version_check(),
        _editor_check(ue4_exe, engine_root),
        _rich_check(),
        _os_check(),
        _build_machine_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        if has_failure:
            print("Some checks failed.", file=sys.stderr)
            return exit_codes.GENERAL_ERROR
        print("All checks passed.", file=sys.stderr)
        return exit_codes.SUCCESS

    table = Table(
        title="distill-copy doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=14)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape_markup(value), status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
