"""Resolve a manifest ``bin`` entry to a validated absolute path.

The ``bin`` field of a ``package.json`` is polymorphic:

* a string — one executable whose command name is the package name;
* a mapping — command name to relative path;
* anything else — treated as "no bins".

Resolution is purely lexical (no symlink resolution, no filesystem
access).  A resolved path that escapes the package directory is
rejected outright.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from wsx.core.models import PackageInfo


def _candidate_for(pkg: PackageInfo, bin_field: object, requested_name: str) -> str | None:
    """Pick the relative bin path for *requested_name*, if declared."""
    if isinstance(bin_field, str):
        if not bin_field or requested_name != pkg.name:
            return None
        return bin_field

    if isinstance(bin_field, Mapping):
        value = bin_field.get(requested_name)
        if isinstance(value, str) and value:
            return value

    return None


def is_within_directory(path: str, directory: str) -> bool:
    """Return ``True`` if *path* is *directory* itself or lies beneath it.

    Both arguments must already be normalized absolute paths.
    """
    if path == directory:
        return True
    prefix = directory if directory.endswith(os.sep) else directory + os.sep
    return path.startswith(prefix)


def resolve_bin_path(pkg: PackageInfo, bin_field: object, requested_name: str) -> Path | None:
    """Resolve *requested_name* against *pkg*'s ``bin`` field.

    Returns
    -------
    Path | None
        The normalized absolute path of the executable, or ``None`` when
        the package does not declare *requested_name* or the declared
        path escapes the package directory (``..`` segments, absolute
        overrides).
    """
    candidate = _candidate_for(pkg, bin_field, requested_name)
    if candidate is None:
        return None

    # abspath normalizes and drops trailing separators on both sides.
    package_dir = os.path.abspath(pkg.path)
    resolved = os.path.abspath(os.path.join(package_dir, candidate))

    if not is_within_directory(resolved, package_dir):
        return None

    return Path(resolved)
