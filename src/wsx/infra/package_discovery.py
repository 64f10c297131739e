"""Infrastructure: enumerate workspace packages.

Two interchangeable backends satisfy the
:class:`~wsx.core.protocols.PackageDiscovery` contract:

* :class:`PnpmPackageLister` — asks ``pnpm list`` for every project;
* :class:`NpmWorkspacesPackageLister` — expands the ``workspaces`` globs
  of an npm/yarn root ``package.json``.

:func:`discover_packages` picks one from the root's marker.  Every
failure surfaces as :class:`~wsx.exceptions.PackageDiscoveryError`.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any

from wsx.core.models import PackageInfo
from wsx.exceptions import ManifestReadError, PackageDiscoveryError
from wsx.infra.manifest import ManifestFileReader
from wsx.infra.workspace_root import detect_workspace_manager, workspace_globs

UNKNOWN_VERSION: str = "unknown"


# ---------------------------------------------------------------------------
# pnpm backend
# ---------------------------------------------------------------------------

class PnpmPackageLister:
    """List workspace projects with ``pnpm list --recursive``."""

    _ARGS: tuple[str, ...] = ("list", "--json", "--depth", "-1", "--recursive")

    def list_packages(self, workspace_root: Path) -> list[PackageInfo]:
        """Return every project pnpm knows about under *workspace_root*.

        Raises
        ------
        PackageDiscoveryError
            If pnpm is missing, exits non-zero, or prints unexpected output.
        """
        pnpm = shutil.which("pnpm")
        if pnpm is None:
            raise PackageDiscoveryError(
                "pnpm command not found.",
                hint="Make sure pnpm is installed: npm install -g pnpm",
            )

        try:
            completed = subprocess.run(
                [pnpm, *self._ARGS],
                cwd=workspace_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise PackageDiscoveryError(f"Failed to run pnpm: {exc}") from exc

        if completed.returncode != 0:
            detail = completed.stderr.strip() or f"exit code {completed.returncode}"
            raise PackageDiscoveryError(f"Failed to discover packages: {detail}")

        return self.parse_output(completed.stdout)

    @staticmethod
    def parse_output(stdout: str) -> list[PackageInfo]:
        """Convert ``pnpm list --json`` output into :class:`PackageInfo` entries.

        Entries without a ``name`` or ``path`` are dropped.
        """
        try:
            raw: Any = json.loads(stdout)
        except json.JSONDecodeError as exc:
            raise PackageDiscoveryError(
                f"Failed to discover packages: invalid JSON from pnpm list ({exc})",
            ) from exc

        if not isinstance(raw, list):
            raise PackageDiscoveryError(
                "Unexpected output from pnpm list. Expected an array.",
            )

        packages: list[PackageInfo] = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            name = entry.get("name")
            path = entry.get("path")
            if not name or not path:
                continue
            packages.append(
                PackageInfo(
                    name=str(name),
                    path=Path(path),
                    version=str(entry.get("version") or UNKNOWN_VERSION),
                )
            )
        return packages


# ---------------------------------------------------------------------------
# npm / yarn workspaces backend
# ---------------------------------------------------------------------------

class NpmWorkspacesPackageLister:
    """List packages matched by the root manifest's ``workspaces`` globs.

    The root package is listed first when it has a name.  Patterns
    starting with ``!`` exclude directories; ``node_modules`` is never
    descended into.
    """

    def __init__(self, reader: ManifestFileReader | None = None) -> None:
        self._reader: ManifestFileReader = reader or ManifestFileReader()

    def list_packages(self, workspace_root: Path) -> list[PackageInfo]:
        """Return the root package plus every named workspace package.

        Raises
        ------
        PackageDiscoveryError
            If the root manifest cannot be read or a glob is invalid.
        """
        root = Path(workspace_root).resolve()
        try:
            root_manifest = self._reader.read(root)
        except ManifestReadError as exc:
            raise PackageDiscoveryError(f"Failed to discover packages: {exc}") from exc

        include: list[str] = []
        exclude: list[str] = []
        for pattern in workspace_globs(root_manifest):
            if pattern.startswith("!"):
                exclude.append(pattern[1:])
            else:
                include.append(pattern)

        try:
            excluded = {p for pattern in exclude for p in self._expand(root, pattern)}
            directories = [
                d
                for pattern in include
                for d in self._expand(root, pattern)
                if d not in excluded
            ]
        except (OSError, ValueError, NotImplementedError) as exc:
            raise PackageDiscoveryError(f"Failed to discover packages: {exc}") from exc

        packages: list[PackageInfo] = []
        seen: set[Path] = set()

        root_pkg = self._package_from(root, root_manifest)
        if root_pkg is not None:
            packages.append(root_pkg)
            seen.add(root)

        for directory in directories:
            if directory in seen:
                continue
            seen.add(directory)
            try:
                manifest = self._reader.read(directory)
            except ManifestReadError:
                continue
            pkg = self._package_from(directory, manifest)
            if pkg is not None:
                packages.append(pkg)

        return packages

    @staticmethod
    def _expand(root: Path, pattern: str) -> list[Path]:
        """Return the directories under *root* matching *pattern*, sorted."""
        pattern = pattern.rstrip("/")
        if not pattern or Path(pattern).is_absolute():
            return []
        return sorted(
            match.resolve()
            for match in root.glob(pattern)
            if match.is_dir() and "node_modules" not in match.relative_to(root).parts
        )

    @staticmethod
    def _package_from(directory: Path, manifest: dict[str, Any]) -> PackageInfo | None:
        name = manifest.get("name")
        if not isinstance(name, str) or not name:
            return None
        version = manifest.get("version")
        return PackageInfo(
            name=name,
            path=directory,
            version=str(version) if version else UNKNOWN_VERSION,
        )


# ---------------------------------------------------------------------------
# Backend selection
# ---------------------------------------------------------------------------

def discover_packages(workspace_root: Path) -> list[PackageInfo]:
    """Enumerate the packages of the workspace rooted at *workspace_root*.

    Raises
    ------
    PackageDiscoveryError
        If the root carries no recognised marker or the backend fails.
    """
    manager = detect_workspace_manager(Path(workspace_root))
    if manager == "pnpm":
        return PnpmPackageLister().list_packages(workspace_root)
    if manager == "npm":
        return NpmWorkspacesPackageLister().list_packages(workspace_root)
    raise PackageDiscoveryError(
        f"{workspace_root} is not a recognised workspace root.",
    )
