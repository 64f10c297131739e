"""``wsx --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can resolve and run workspace bins.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

from wsx.cli import exit_codes
from wsx.cli.console import console
from wsx.exceptions import WsxError
from wsx.infra.node_detector import ToolStatus, detect_node, detect_pnpm
from wsx.infra.workspace_root import detect_workspace_manager, find_workspace_root
from wsx.version import __version__


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


def _tool_check(label: str, status_obj: ToolStatus) -> tuple[str, str, str]:
    """Return (label, value, status) for an executable probe."""
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return label, path_str, "[green]OK[/green]"
    return label, status_obj.version_hint, "[yellow]WARN[/yellow]"


def _workspace_check(start_dir: Path | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the workspace root row."""
    try:
        root = find_workspace_root(start_dir)
    except WsxError:
        return "Workspace", "not found", "[yellow]WARN[/yellow]"
    manager = detect_workspace_manager(root) or "unknown"
    return "Workspace", f"{root} ({manager})", "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _wsx_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the wsx version row."""
    return "wsx", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nwsx doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(start_dir: Path | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
        Missing Node, pnpm, or workspace are warnings only.
    """
    node_status = detect_node()
    checks = [
        _wsx_version_check(),
        _python_version_check(),
        _tool_check("node", node_status),
        _tool_check("pnpm", detect_pnpm()),
        _workspace_check(start_dir),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="wsx doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    # Node is only needed for .js/.mjs/.cjs bins, so guidance is advisory.
    if not node_status.found and node_status.install_commands:
        console.print("[yellow]Node.js was not found.[/yellow]")
        console.print("Install using one of the following commands:\n")
        for cmd in node_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
