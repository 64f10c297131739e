"""Infrastructure: locate the workspace root.

Walks upward from a starting directory (inclusive) until a workspace
marker is found:

* ``pnpm-workspace.yaml`` — a pnpm workspace;
* ``package.json`` with a ``workspaces`` field — an npm/yarn workspace.

The nearest directory wins.  When both markers sit in the same
directory, pnpm takes precedence.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from wsx.exceptions import ManifestReadError, WorkspaceRootNotFoundError
from wsx.infra.manifest import ManifestFileReader

PNPM_MARKER: str = "pnpm-workspace.yaml"

WorkspaceManager = Literal["pnpm", "npm"]


def workspace_globs(manifest: dict[str, Any]) -> list[str]:
    """Return the ``workspaces`` patterns of an npm/yarn root manifest.

    Accepts both the array form and yarn's ``{"packages": [...]}`` form;
    anything else yields an empty list.
    """
    workspaces = manifest.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    if not isinstance(workspaces, list):
        return []
    return [entry for entry in workspaces if isinstance(entry, str) and entry]


def detect_workspace_manager(directory: Path) -> WorkspaceManager | None:
    """Return which workspace manager *directory* is a root for, if any."""
    if (directory / PNPM_MARKER).is_file():
        return "pnpm"

    try:
        manifest = ManifestFileReader().read(directory)
    except ManifestReadError:
        return None

    if workspace_globs(manifest):
        return "npm"
    return None


def find_workspace_root(start_dir: Path | None = None) -> Path:
    """Return the absolute workspace root enclosing *start_dir*.

    Parameters
    ----------
    start_dir:
        Directory to start from.  Defaults to the current directory.

    Raises
    ------
    WorkspaceRootNotFoundError
        If no marker exists between *start_dir* and the filesystem root.
    """
    current = (start_dir if start_dir is not None else Path.cwd()).resolve()

    for directory in (current, *current.parents):
        if detect_workspace_manager(directory) is not None:
            return directory

    raise WorkspaceRootNotFoundError(
        "Could not find workspace root.",
        hint=(
            f"No {PNPM_MARKER} or package.json with a \"workspaces\" field "
            f"was found above {current}."
        ),
    )
