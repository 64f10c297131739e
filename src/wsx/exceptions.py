"""Custom exception hierarchy for wsx.

All exceptions that cross layer boundaries must inherit from
:class:`WsxError`.  Raw OS, JSON, and subprocess exceptions must NEVER
propagate beyond the infrastructure layer — they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
WsxError
├── WorkspaceRootNotFoundError
├── PackageDiscoveryError
├── NoPackagesFoundError
├── BinNotFoundError
├── AmbiguousBinError
├── ManifestReadError
│   ├── ManifestNotFoundError
│   └── InvalidManifestError
├── SpawnError
└── EnvironmentError
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wsx.core.models import BinInfo


class WsxError(Exception):
    """Base exception for all wsx errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Workspace / discovery -------------------------------------------------

class WorkspaceRootNotFoundError(WsxError):
    """Raised when no workspace marker is found walking upward."""


class PackageDiscoveryError(WsxError):
    """Raised when the workspace package lister fails."""


class NoPackagesFoundError(WsxError):
    """Raised when discovery succeeds but reports zero packages."""


# --- Bin matching ----------------------------------------------------------

class BinNotFoundError(WsxError):
    """Raised when no workspace package declares the requested bin."""


class AmbiguousBinError(WsxError):
    """Raised when more than one package declares the requested bin."""

    def __init__(
        self,
        message: str,
        candidates: tuple[BinInfo, ...],
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.candidates: tuple[BinInfo, ...] = candidates


# --- Manifests -------------------------------------------------------------

class ManifestReadError(WsxError):
    """Raised when a ``package.json`` cannot be read."""

    def __init__(self, message: str, path: Path, *, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.path: Path = path


class ManifestNotFoundError(ManifestReadError):
    """Raised when the directory has no ``package.json``."""


class InvalidManifestError(ManifestReadError):
    """Raised when ``package.json`` exists but is not a valid JSON object.

    ``reason`` is a short phrase for warnings: ``"invalid JSON"`` or
    ``"not a JSON object"``.
    """

    def __init__(
        self,
        message: str,
        path: Path,
        *,
        reason: str = "invalid JSON",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, path, hint=hint)
        self.reason: str = reason


# --- Execution -------------------------------------------------------------

class SpawnError(WsxError):
    """Raised when the child process cannot be started at all."""

    def __init__(self, message: str, executable: str) -> None:
        super().__init__(message)
        self.executable: str = executable


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(WsxError):
    """Raised when a required runtime dependency is not available."""
