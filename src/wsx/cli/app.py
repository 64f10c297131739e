"""CLI application entry point and command routing for wsx.

This module is the **sole error boundary** for the entire application.
It renders :class:`~wsx.core.models.RunResult` outcomes, catches
:class:`~wsx.exceptions.WsxError`, ``KeyboardInterrupt``, and any
unexpected ``Exception``, and returns well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — resolution and execution are
  delegated to :class:`~wsx.core.runner.BinRunner`.
* Only the CLI layer writes to the terminal.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import os
import sys
import traceback
from pathlib import Path

from wsx.cli import exit_codes
from wsx.cli.console import console, escape
from wsx.core.models import RunResult
from wsx.core.runner import BinRunner
from wsx.exceptions import WsxError
from wsx.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``wsx <script-name> [args...]`` — run a workspace bin
    * ``wsx --dry-run <script-name>`` — show what would run
    * ``wsx --doctor``                 — environment diagnostics
    * ``wsx --version``

    Everything after the script name is forwarded verbatim, including
    arguments that look like options.
    """
    parser = argparse.ArgumentParser(
        prog="wsx",
        description="Execute a bin script from any package in the workspace.",
        epilog=(
            "examples:\n"
            "  wsx tsc --noEmit       run TypeScript from whichever package provides it\n"
            "  wsx eslint src/        run ESLint from any package that provides it\n"
            "  wsx --dry-run jest     preview which jest would be executed"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Show what would be executed without running it.",
    )
    parser.add_argument(
        "-C",
        "--cwd",
        type=Path,
        default=None,
        metavar="DIR",
        help="Search for the workspace root starting from DIR.",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run environment diagnostics and exit.",
    )
    parser.add_argument(
        "script_name",
        nargs="?",
        default=None,
        metavar="script-name",
        help="Name of the bin script to execute.",
    )
    parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Arguments passed to the script.",
    )
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _warn(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _build_runner() -> BinRunner:
    """Compose the infra adapters into a :class:`BinRunner`."""
    from wsx.core.executor import ScriptExecutor
    from wsx.infra.manifest import ManifestFileReader
    from wsx.infra.node_detector import node_executable
    from wsx.infra.package_discovery import discover_packages
    from wsx.infra.process import SubprocessLauncher
    from wsx.infra.workspace_root import find_workspace_root

    reader = ManifestFileReader()
    executor = ScriptExecutor(
        SubprocessLauncher(),
        reader,
        node_path=node_executable(),
        cwd=os.getcwd(),
        on_warning=_warn,
    )
    return BinRunner(find_workspace_root, discover_packages, reader, executor)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_error(exc: WsxError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def _render_dry_run(result: RunResult) -> None:
    """Print the resolved action to stdout so it can be piped."""
    bin = result.bin
    if bin is None:
        return
    print(f"Would execute: {bin.bin_name} from {bin.package_name}")
    print(f"  Binary: {bin.bin_path}")
    print(f"  Arguments: {' '.join(result.args)}")


def _handle_run(script_name: str, args: list[str], *, dry_run: bool, start_dir: Path | None) -> int:
    """Resolve and run *script_name*, rendering the outcome."""
    runner = _build_runner()
    result = runner.run(
        script_name,
        args,
        dry_run=dry_run,
        start_dir=start_dir,
        on_warning=_warn,
    )

    if result.error is not None:
        _render_error(result.error)
    elif result.dry_run:
        _render_dry_run(result)

    return result.exit_code


def _handle_doctor(start_dir: Path | None) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from wsx.cli.doctor import run_doctor

    return run_doctor(start_dir)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the wsx CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.doctor:
        return _handle_doctor(args.cwd)

    if args.script_name is None:
        parser.print_help()
        return exit_codes.SUCCESS

    return _handle_run(
        args.script_name,
        list(args.args),
        dry_run=args.dry_run,
        start_dir=args.cwd,
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and is the only place the process
    exits.  Handled errors never show a stack trace; unexpected ones do.
    """
    try:
        code = main()
        sys.exit(code)
    except WsxError as exc:
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        traceback.print_exc(file=sys.stderr)
        sys.exit(exit_codes.UNEXPECTED_ERROR)
