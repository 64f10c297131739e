"""Tests for Node-executable classification (core/executable.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from wsx.core.executable import is_node_executable


class TestIsNodeExecutable:
    @pytest.mark.parametrize(
        "path",
        [
            "/pkg/bin/cli.js",
            "/pkg/bin/cli.mjs",
            "/pkg/bin/cli.cjs",
            "/pkg/bin/CLI.JS",
            "/pkg/bin/cli.Mjs",
            "/pkg/bin/cli.CJS",
            "/pkg/bin/my.tool.js",
        ],
    )
    def test_node_extensions(self, path: str) -> None:
        assert is_node_executable(path) is True

    @pytest.mark.parametrize(
        "path",
        [
            "/pkg/bin/cli",
            "/pkg/bin/cli.sh",
            "/pkg/bin/script.js.bak",
            "/pkg/bin/cli.json",
            "/pkg/bin/cli.jsx",
            "/pkg/bin/cli.ts",
            "/pkg/js/cli",
        ],
    )
    def test_other_files(self, path: str) -> None:
        assert is_node_executable(path) is False

    def test_accepts_path_objects(self) -> None:
        assert is_node_executable(Path("/pkg/bin/cli.js")) is True
        assert is_node_executable(Path("/pkg/bin/cli")) is False
