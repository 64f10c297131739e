"""Core / service layer — bin resolution policy and execution semantics.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or process I/O; go through the protocols.
* No imports from ``cli`` or ``infra``.
"""

from wsx.core.bin_matcher import find_matching_bins
from wsx.core.bin_resolver import resolve_bin_path
from wsx.core.environment import build_environment
from wsx.core.executable import is_node_executable
from wsx.core.executor import ScriptExecutor
from wsx.core.models import BinInfo, PackageInfo, ProcessExit, RunResult
from wsx.core.protocols import (
    BinExecutor,
    ManifestReader,
    PackageDiscovery,
    ProcessLauncher,
    WorkspaceRootFinder,
)
from wsx.core.runner import BinRunner

__all__: list[str] = [
    "BinExecutor",
    "BinInfo",
    "BinRunner",
    "ManifestReader",
    "PackageDiscovery",
    "PackageInfo",
    "ProcessExit",
    "ProcessLauncher",
    "RunResult",
    "ScriptExecutor",
    "WorkspaceRootFinder",
    "build_environment",
    "find_matching_bins",
    "is_node_executable",
    "resolve_bin_path",
]
