"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem, ``pnpm``, and
child processes.  Every raw OS or JSON exception must be caught here
and re-raised as a :class:`~wsx.exceptions.WsxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from wsx.infra.manifest import ManifestFileReader
from wsx.infra.node_detector import ToolStatus, detect_node, detect_pnpm, node_executable
from wsx.infra.package_discovery import (
    NpmWorkspacesPackageLister,
    PnpmPackageLister,
    discover_packages,
)
from wsx.infra.process import SubprocessLauncher
from wsx.infra.workspace_root import detect_workspace_manager, find_workspace_root

__all__: list[str] = [
    "ManifestFileReader",
    "NpmWorkspacesPackageLister",
    "PnpmPackageLister",
    "SubprocessLauncher",
    "ToolStatus",
    "detect_node",
    "detect_pnpm",
    "detect_workspace_manager",
    "discover_packages",
    "find_workspace_root",
    "node_executable",
]
