"""Infrastructure: Node and pnpm detection plus platform guidance.

This module locates the Node executable used for ``.js``/``.mjs``/``.cjs``
bins and provides platform-specific installation guidance when it is
missing.

Rules
-----
* ``WSX_NODE`` overrides the lookup; otherwise :func:`shutil.which` only.
* No subprocess, no version probing.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

NODE_ENV_VAR: str = "WSX_NODE"
"""Environment variable naming an explicit Node executable."""


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of an executable detection probe.

    Attributes
    ----------
    found : bool
        Whether the executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when it is already present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_node() -> ToolStatus:
    """Probe for a Node executable, honouring ``WSX_NODE`` first."""
    override = os.environ.get(NODE_ENV_VAR)
    if override:
        candidate = shutil.which(override)
        if candidate is not None:
            return _found(candidate, source=NODE_ENV_VAR)
        return ToolStatus(
            found=False,
            path=None,
            version_hint=f"{NODE_ENV_VAR}={override} is not executable",
            install_commands=_node_install_commands(),
        )

    result = shutil.which("node")
    if result is not None:
        return _found(result)

    return ToolStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_node_install_commands(),
    )


def detect_pnpm() -> ToolStatus:
    """Probe the system PATH for pnpm."""
    result = shutil.which("pnpm")
    if result is not None:
        return _found(result)
    return ToolStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=("npm install -g pnpm", "corepack enable pnpm"),
    )


def node_executable() -> str:
    """Return the Node executable to invoke.

    Falls back to the bare ``"node"`` name when detection fails so that
    spawning fails in the launcher and maps to a normal exit code.
    """
    status = detect_node()
    if status.found and status.path is not None:
        return str(status.path)
    return "node"


def _found(result: str, *, source: str = "PATH") -> ToolStatus:
    resolved = Path(result).resolve()
    return ToolStatus(
        found=True,
        path=resolved,
        version_hint=f"found at {resolved} (via {source})",
        install_commands=(),
    )


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _node_install_commands() -> tuple[str, ...]:
    """Return Node install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install OpenJS.NodeJS.LTS",
            "choco install nodejs-lts",
        )
    if system == "linux":
        return (
            "sudo apt install nodejs",
            "sudo dnf install nodejs",
            "sudo pacman -S nodejs",
        )
    if system == "darwin":
        return ("brew install node",)
    # Fallback: generic guidance.
    return ("Please install Node.js from https://nodejs.org/en/download",)
