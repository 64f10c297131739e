"""Tests for the ``wsx --doctor`` command (cli/doctor.py).

Node and pnpm detection are mocked — no system dependency.

Coverage:
* Doctor returns SUCCESS when only warnings are present.
* Individual check functions return correct tuples.
* Plain-text rendering when Rich is unavailable.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from wsx.cli import exit_codes
from wsx.infra.node_detector import ToolStatus
from wsx.infra.workspace_root import PNPM_MARKER


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _found(name: str) -> ToolStatus:
    return ToolStatus(
        found=True,
        path=Path(f"/usr/bin/{name}"),
        version_hint=f"found at /usr/bin/{name}",
        install_commands=(),
    )


def _missing(*commands: str) -> ToolStatus:
    return ToolStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=commands,
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from wsx.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestToolCheck:
    def test_found(self) -> None:
        from wsx.cli.doctor import _tool_check

        label, value, status = _tool_check("node", _found("node"))
        assert label == "node"
        assert value == str(Path("/usr/bin/node"))
        assert "OK" in status

    def test_missing_is_warning(self) -> None:
        from wsx.cli.doctor import _tool_check

        _label, value, status = _tool_check("pnpm", _missing())
        assert value == "not found"
        assert "WARN" in status


class TestWorkspaceCheck:
    def test_found(self, tmp_path: Path) -> None:
        from wsx.cli.doctor import _workspace_check

        (tmp_path / PNPM_MARKER).write_text("")
        label, value, status = _workspace_check(tmp_path)
        assert label == "Workspace"
        assert "(pnpm)" in value
        assert "OK" in status

    def test_not_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from wsx.cli.doctor import _workspace_check

        monkeypatch.setattr(
            "wsx.infra.workspace_root.detect_workspace_manager", lambda directory: None,
        )
        _label, value, status = _workspace_check(tmp_path)
        assert value == "not found"
        assert "WARN" in status


class TestOsCheck:
    @patch("wsx.cli.doctor.platform.machine", return_value="arm64")
    @patch("wsx.cli.doctor.platform.release", return_value="23.4.0")
    @patch("wsx.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(self, *_mocks: MagicMock) -> None:
        from wsx.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert "macOS" in value
        assert "Darwin" not in value


class TestWsxVersionCheck:
    def test_returns_current_version(self) -> None:
        from wsx.cli.doctor import _wsx_version_check
        from wsx.version import __version__

        label, value, status = _wsx_version_check()
        assert label == "wsx"
        assert value == __version__
        assert "OK" in status


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch("wsx.cli.doctor.detect_pnpm")
    @patch("wsx.cli.doctor.detect_node")
    def test_all_pass_returns_success(
        self, mock_node: MagicMock, mock_pnpm: MagicMock, tmp_path: Path,
    ) -> None:
        from wsx.cli.doctor import run_doctor

        (tmp_path / PNPM_MARKER).write_text("")
        mock_node.return_value = _found("node")
        mock_pnpm.return_value = _found("pnpm")
        assert run_doctor(tmp_path) == exit_codes.SUCCESS

    @patch("wsx.cli.doctor.detect_pnpm")
    @patch("wsx.cli.doctor.detect_node")
    def test_missing_tools_still_succeed(
        self, mock_node: MagicMock, mock_pnpm: MagicMock, tmp_path: Path,
    ) -> None:
        """Missing Node/pnpm are WARN, not FAIL."""
        from wsx.cli.doctor import run_doctor

        mock_node.return_value = _missing("brew install node")
        mock_pnpm.return_value = _missing()
        assert run_doctor(tmp_path) == exit_codes.SUCCESS

    @patch("wsx.cli.doctor._python_version_check", return_value=("Python", "3.8.0", "[red]FAIL[/red]"))
    @patch("wsx.cli.doctor.detect_pnpm")
    @patch("wsx.cli.doctor.detect_node")
    def test_failure_returns_general_error(
        self, mock_node: MagicMock, mock_pnpm: MagicMock, _mock_py: MagicMock,
        tmp_path: Path,
    ) -> None:
        from wsx.cli.doctor import run_doctor

        mock_node.return_value = _found("node")
        mock_pnpm.return_value = _found("pnpm")
        assert run_doctor(tmp_path) == exit_codes.GENERAL_ERROR

    @patch("wsx.cli.doctor.platform.system", return_value="Darwin")
    @patch("wsx.cli.doctor.detect_pnpm")
    @patch("wsx.cli.doctor.detect_node")
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None, "rich.markup": None})
    def test_plain_output_shows_macos_and_node_guidance(
        self,
        mock_node: MagicMock,
        mock_pnpm: MagicMock,
        _mock_system: MagicMock,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from wsx.cli.doctor import run_doctor

        mock_node.return_value = _missing("brew install node")
        mock_pnpm.return_value = _found("pnpm")

        run_doctor(tmp_path)
        err = capsys.readouterr().err
        assert "macOS" in err
        assert "brew install node" in err
        assert "[bold]" not in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("wsx.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from wsx.cli.app import main

        assert main(["--doctor"]) == exit_codes.SUCCESS
        mock_run.assert_called_once_with(None)

    @patch("wsx.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock) -> None:
        from wsx.cli.app import main

        assert main(["--doctor"]) == exit_codes.GENERAL_ERROR

    @patch("wsx.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_receives_cwd(self, mock_run: MagicMock, tmp_path: Path) -> None:
        from wsx.cli.app import main

        main(["--doctor", "-C", str(tmp_path)])
        mock_run.assert_called_once_with(tmp_path)
