"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from wsx.core.models import BinInfo, PackageInfo, ProcessExit


class ManifestReader(Protocol):
    """Contract for reading a package manifest (``package.json``)."""

    def read(self, directory: Path) -> dict[str, Any]:
        """Read and parse the manifest located in *directory*.

        Raises
        ------
        ManifestNotFoundError
            When the directory holds no manifest.
        InvalidManifestError
            When the manifest is not a valid JSON object.
        ManifestReadError
            For any other read failure.
        """
        ...  # pragma: no cover


class WorkspaceRootFinder(Protocol):
    """Contract for locating the workspace boundary."""

    def __call__(self, start_dir: Path | None = None) -> Path:
        """Return the absolute workspace root above *start_dir*.

        Raises
        ------
        WorkspaceRootNotFoundError
            When no workspace marker exists up to the filesystem root.
        """
        ...  # pragma: no cover


class PackageDiscovery(Protocol):
    """Contract for enumerating workspace packages.

    Any backend (pnpm, npm/yarn workspaces, ...) is interchangeable as
    long as it honours the ``list[PackageInfo]`` contract.
    """

    def __call__(self, workspace_root: Path) -> list[PackageInfo]:
        """Return every package in the workspace.

        Raises
        ------
        PackageDiscoveryError
            On any failure, wrapping the underlying cause.
        """
        ...  # pragma: no cover


class ProcessLauncher(Protocol):
    """Contract for running a child process to completion."""

    def launch(self, argv: Sequence[str], env: Mapping[str, str]) -> ProcessExit:
        """Run *argv* with *env* and inherited stdio; block until it ends.

        Raises
        ------
        SpawnError
            When the process cannot be started.
        """
        ...  # pragma: no cover


class BinExecutor(Protocol):
    """Contract for running a resolved bin."""

    def execute(self, bin: BinInfo, args: Sequence[str], workspace_root: Path) -> int:
        """Run *bin* with *args* and return the final exit code."""
        ...  # pragma: no cover
