"""Core orchestration — from a command name to an exit code.

This is the central service consumed by the CLI layer.  Its
collaborators are injected at construction time (dependency
inversion), so the pipeline can be exercised without a real workspace
or child processes.

Pipeline
--------
1. Locate the workspace root.
2. Discover workspace packages.
3. Match the requested bin across all packages.
4. Reject zero or ambiguous matches.
5. Report (dry run) or execute the single match.

Every stage runs exactly once.  Handled failures come back as a
:class:`~wsx.core.models.RunResult` carrying the error; nothing here
terminates the process.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from wsx.core.bin_matcher import find_matching_bins
from wsx.core.models import BinInfo, RunResult
from wsx.core.protocols import BinExecutor, ManifestReader, PackageDiscovery, WorkspaceRootFinder
from wsx.exceptions import AmbiguousBinError, BinNotFoundError, NoPackagesFoundError, WsxError

HANDLED_ERROR_EXIT_CODE: int = 1


class BinRunner:
    """Resolve and run one workspace bin per call.

    Parameters
    ----------
    find_root:
        Callable satisfying :class:`WorkspaceRootFinder`.
    discover:
        Callable satisfying :class:`PackageDiscovery`.
    reader:
        Manifest reader used while matching bins.
    executor:
        Any object satisfying :class:`BinExecutor`.
    """

    def __init__(
        self,
        find_root: WorkspaceRootFinder,
        discover: PackageDiscovery,
        reader: ManifestReader,
        executor: BinExecutor,
    ) -> None:
        self._find_root: WorkspaceRootFinder = find_root
        self._discover: PackageDiscovery = discover
        self._reader: ManifestReader = reader
        self._executor: BinExecutor = executor

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        script_name: str,
        args: Sequence[str] = (),
        *,
        dry_run: bool = False,
        start_dir: Path | None = None,
        on_warning: Callable[[str], None] | None = None,
    ) -> RunResult:
        """Resolve *script_name* and run it (or report it when *dry_run*).

        Only :class:`~wsx.exceptions.WsxError` is converted into a
        failed :class:`RunResult`; any other exception propagates.
        """
        forwarded = tuple(args)
        try:
            workspace_root, bin = self.resolve(
                script_name, start_dir=start_dir, on_warning=on_warning,
            )
        except WsxError as exc:
            return RunResult(
                exit_code=HANDLED_ERROR_EXIT_CODE,
                args=forwarded,
                dry_run=dry_run,
                error=exc,
            )

        if dry_run:
            return RunResult(exit_code=0, bin=bin, args=forwarded, dry_run=True)

        exit_code = self._executor.execute(bin, forwarded, workspace_root)
        return RunResult(exit_code=exit_code, bin=bin, args=forwarded)

    def resolve(
        self,
        script_name: str,
        *,
        start_dir: Path | None = None,
        on_warning: Callable[[str], None] | None = None,
    ) -> tuple[Path, BinInfo]:
        """Return the workspace root and the single bin for *script_name*.

        Raises
        ------
        WorkspaceRootNotFoundError
            If no workspace encloses *start_dir*.
        PackageDiscoveryError
            If the package lister fails.
        NoPackagesFoundError
            If the workspace has no packages.
        BinNotFoundError
            If no package declares *script_name*.
        AmbiguousBinError
            If more than one package declares *script_name*.
        """
        workspace_root = self._find_root(start_dir)

        packages = self._discover(workspace_root)
        if not packages:
            raise NoPackagesFoundError(
                "No packages found in workspace.",
                hint=f"Is {workspace_root} a valid workspace?",
            )

        matches = find_matching_bins(
            packages, script_name, self._reader, on_warning=on_warning,
        )

        if not matches:
            raise BinNotFoundError(
                f'No bin script named "{script_name}" found in any workspace package.',
            )

        if len(matches) > 1:
            raise AmbiguousBinError(
                f'Ambiguous bin name "{script_name}". Found {len(matches)} matches.',
                tuple(matches),
                hint=_candidates_hint(matches),
            )

        return workspace_root, matches[0]


def _candidates_hint(matches: Sequence[BinInfo]) -> str:
    lines = ["Multiple packages provide this bin:"]
    lines.extend(f"  - {m.package_name} ({m.package_path})" for m in matches)
    return "\n".join(lines)
