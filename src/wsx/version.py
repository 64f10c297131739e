"""Installed version of wsx."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DEFAULT_VERSION: str = "0.0.0-development"
"""Reported when the distribution metadata cannot be read (e.g. source checkout)."""


def _read_version() -> str:
    try:
        return version("wsx")
    except PackageNotFoundError:
        return DEFAULT_VERSION


__version__: str = _read_version()
