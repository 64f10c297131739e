"""Shared pytest fixtures and configuration for the wsx test suite.

Guidelines
----------
* No network access in any test.
* Child processes are mocked at the launcher boundary, except for a few
  explicit smoke tests that run ``sys.executable``.
* Core tests must be pure — manifests come from in-memory fakes.
* Filesystem tests build throwaway workspaces under ``tmp_path``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from wsx.exceptions import ManifestNotFoundError, WsxError


class FakeManifestReader:
    """In-memory :class:`ManifestReader` keyed by directory.

    Values are manifests (dicts) or exceptions to raise.  Unknown
    directories raise :class:`ManifestNotFoundError`.
    """

    def __init__(self, manifests: dict[Path, dict[str, Any] | WsxError] | None = None) -> None:
        self.manifests: dict[Path, dict[str, Any] | WsxError] = {
            Path(k): v for k, v in (manifests or {}).items()
        }
        self.calls: list[Path] = []

    def read(self, directory: Path) -> dict[str, Any]:
        directory = Path(directory)
        self.calls.append(directory)
        value = self.manifests.get(directory)
        if value is None:
            raise ManifestNotFoundError("not found", directory / "package.json")
        if isinstance(value, WsxError):
            raise value
        return value


@pytest.fixture
def fake_reader() -> type[FakeManifestReader]:
    """Return the :class:`FakeManifestReader` class for per-test construction."""
    return FakeManifestReader


@pytest.fixture
def write_manifest() -> Callable[..., Path]:
    """Return a helper writing ``package.json`` into a directory."""

    def _write(directory: Path, data: dict[str, Any] | str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "package.json"
        content = data if isinstance(data, str) else json.dumps(data)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def npm_workspace(tmp_path: Path, write_manifest: Callable[..., Path]) -> Path:
    """An npm-workspaces tree with two packages; ``pkg1`` provides ``foo``."""
    root = tmp_path / "ws"
    write_manifest(
        root,
        {
            "name": "root",
            "version": "1.0.0",
            "private": True,
            "workspaces": ["packages/*"],
        },
    )
    write_manifest(
        root / "packages" / "pkg1",
        {"name": "pkg1", "version": "0.1.0", "bin": {"foo": "./bin/foo.js"}},
    )
    write_manifest(
        root / "packages" / "pkg2",
        {"name": "pkg2", "version": "0.2.0"},
    )
    (root / "packages" / "pkg1" / "bin").mkdir()
    (root / "packages" / "pkg1" / "bin" / "foo.js").write_text(
        "console.log('foo');\n", encoding="utf-8",
    )
    return root
