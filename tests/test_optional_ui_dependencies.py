"""Regression tests for the optional Rich dependency.

These tests verify bootstrap commands and the bin pipeline stay usable
when Rich is missing, falling back to plain stderr output.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from wsx.cli import exit_codes
from wsx.cli.app import main


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    code = main(["--doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_dry_run_works_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    npm_workspace: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["-C", str(npm_workspace), "--dry-run", "foo"])

    assert code == exit_codes.SUCCESS
    assert "Would execute: foo from pkg1" in capsys.readouterr().out


def test_errors_render_plain_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    npm_workspace: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["-C", str(npm_workspace), "missing"])

    err = capsys.readouterr().err
    assert code == exit_codes.GENERAL_ERROR
    assert 'Error: No bin script named "missing"' in err
    assert "[bold red]" not in err


def test_plain_fallback_keeps_bracketed_path_segments(
    monkeypatch: pytest.MonkeyPatch,
    npm_workspace: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["-C", str(npm_workspace), "[id]"])

    err = capsys.readouterr().err
    assert code == exit_codes.GENERAL_ERROR
    assert 'No bin script named "[id]"' in err


def test_escaped_text_survives_markup_stripping(monkeypatch: pytest.MonkeyPatch) -> None:
    from wsx.cli.console import escape, strip_markup

    _hide_rich(monkeypatch)

    line = f"[yellow]Warning:[/yellow] {escape('/ws/app/[id]/package.json')}"
    assert strip_markup(line) == "Warning: /ws/app/[id]/package.json"
