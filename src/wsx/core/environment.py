"""Build the child-process environment the way npm/pnpm ``exec`` does.

The environment is constructed as if the resolved package were
installed at the workspace root: the root's ``node_modules/.bin`` leads
``PATH`` and the root manifest populates the ``npm_package_*``
variables.

Guarantees
----------
* The base mapping is copied, never mutated.
* At most one manifest read (via the injected reader); failure to read
  it only drops the ``npm_package_*`` metadata.
"""

from __future__ import annotations

import json
import os
import platform
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from wsx.core.protocols import ManifestReader
from wsx.exceptions import ManifestReadError
from wsx.version import __version__

TOOL_NAME: str = "wsx"

PACKAGE_FIELDS: tuple[str, ...] = (
    "author",
    "license",
    "homepage",
    "repository",
    "bugs",
    "keywords",
)
"""Extra manifest fields exported as ``npm_package_<field>``."""

# platform.machine() spellings mapped to Node's process.arch names.
_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
    "armv7l": "arm",
}


def local_bin_dir(workspace_root: Path) -> Path:
    """Return ``<workspace_root>/node_modules/.bin``."""
    return Path(workspace_root) / "node_modules" / ".bin"


def node_arch() -> str:
    """Return the host architecture using Node's naming."""
    machine = platform.machine()
    return _ARCH_ALIASES.get(machine.lower(), machine.lower())


def user_agent() -> str:
    """Return the ``npm_config_user_agent`` value for this tool."""
    return (
        f"{TOOL_NAME}/{__version__} "
        f"python/{platform.python_version()} "
        f"{sys.platform} {node_arch()}"
    )


def build_environment(
    workspace_root: Path,
    base_env: Mapping[str, str],
    reader: ManifestReader,
    *,
    node_path: str,
    cwd: str | None = None,
) -> dict[str, str]:
    """Return a copy of *base_env* overlaid with npm ``exec`` variables.

    Parameters
    ----------
    workspace_root:
        Absolute path of the workspace root.
    base_env:
        The ambient environment to inherit (usually ``os.environ``).
    reader:
        Manifest reader used for the workspace root's ``package.json``.
    node_path:
        Node executable exported as ``NODE`` and ``npm_*execpath``.
    cwd:
        Directory the user invoked wsx from; defaults to ``os.getcwd()``.
    """
    env: dict[str, str] = dict(base_env)

    path_entries = [str(local_bin_dir(workspace_root)), base_env.get("PATH")]
    env["PATH"] = os.pathsep.join(entry for entry in path_entries if entry)

    env["npm_command"] = "exec"
    env["npm_execpath"] = node_path
    env["npm_node_execpath"] = node_path
    env["NODE"] = node_path
    env["INIT_CWD"] = cwd if cwd is not None else os.getcwd()
    env["npm_config_user_agent"] = user_agent()

    env.update(_package_variables(_read_root_manifest(workspace_root, reader)))
    return env


# ---------------------------------------------------------------------------
# Workspace manifest metadata
# ---------------------------------------------------------------------------

def _read_root_manifest(workspace_root: Path, reader: ManifestReader) -> dict[str, Any]:
    try:
        return reader.read(Path(workspace_root))
    except ManifestReadError:
        return {}


def _package_variables(manifest: Mapping[str, Any]) -> dict[str, str]:
    """Map manifest metadata to ``npm_package_*`` variables."""
    variables: dict[str, str] = {}

    for field in ("name", "version", "description"):
        value = manifest.get(field)
        if value:
            variables[f"npm_package_{field}"] = _as_env_value(value)

    for field in PACKAGE_FIELDS:
        value = manifest.get(field)
        if value:
            variables[f"npm_package_{field}"] = _as_env_value(value)

    return variables


def _as_env_value(value: object) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
