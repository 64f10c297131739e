"""Domain models for wsx.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  A fresh set is produced on every
invocation; nothing is cached between runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wsx.exceptions import WsxError


# ---------------------------------------------------------------------------
# Workspace packages
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PackageInfo:
    """One package reported by workspace discovery."""

    name: str
    """Package name from its manifest (e.g. ``@scope/tools``)."""

    path: Path
    """Absolute path to the package directory."""

    version: str = "unknown"
    """Package version, or ``"unknown"`` when the lister reports none."""


@dataclass(frozen=True, slots=True)
class BinInfo:
    """A bin entry that matched the requested command name.

    ``bin_path`` is always absolute and lies inside ``package_path``;
    instances are only created after that check has passed.
    """

    package_name: str
    package_path: Path
    bin_name: str
    bin_path: Path


# ---------------------------------------------------------------------------
# Execution outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProcessExit:
    """Raw termination status reported by a process launcher."""

    code: int | None
    """Exit status when the child exited normally, else ``None``."""

    signal: int | None = None
    """Signal number when the child was killed by a signal, else ``None``."""


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one orchestrated invocation.

    The CLI layer is the only consumer: it renders ``error`` or the
    dry-run report and turns ``exit_code`` into the process exit status.
    """

    exit_code: int
    bin: BinInfo | None = None
    args: tuple[str, ...] = ()
    dry_run: bool = False
    error: WsxError | None = None
