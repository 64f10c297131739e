"""Core script executor — turns a resolved bin into an exit code.

The executor decides how a bin is invoked (through Node or directly),
hands the command line to a :class:`~wsx.core.protocols.ProcessLauncher`
and collapses every process-level outcome into an integer.

Guarantees
----------
* Never raises for spawn failures or abnormal termination.
* No direct process or filesystem access — both go through injected
  collaborators.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from wsx.core.environment import build_environment
from wsx.core.executable import is_node_executable
from wsx.core.models import BinInfo, ProcessExit
from wsx.core.protocols import ManifestReader, ProcessLauncher
from wsx.exceptions import SpawnError

FAILURE_EXIT_CODE: int = 1
"""Returned for spawn errors and signal or status-less terminations."""


class ScriptExecutor:
    """Run a :class:`BinInfo` with npm-compatible environment and argv.

    Parameters
    ----------
    launcher:
        Any object satisfying the :class:`ProcessLauncher` protocol.
    reader:
        Manifest reader used by the environment builder.
    node_path:
        Node executable used for ``.js``/``.mjs``/``.cjs`` bins.
    base_env:
        Environment to inherit.  ``None`` means ``os.environ`` at call time.
    cwd:
        Invoking directory exported as ``INIT_CWD``.
    on_warning:
        Optional callable receiving a message when the spawn fails.
    """

    def __init__(
        self,
        launcher: ProcessLauncher,
        reader: ManifestReader,
        *,
        node_path: str,
        base_env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        on_warning: Callable[[str], None] | None = None,
    ) -> None:
        self._launcher: ProcessLauncher = launcher
        self._reader: ManifestReader = reader
        self._node_path: str = node_path
        self._base_env: Mapping[str, str] | None = base_env
        self._cwd: str | None = cwd
        self._on_warning: Callable[[str], None] | None = on_warning

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_argv(self, bin: BinInfo, args: Sequence[str]) -> list[str]:
        """Return the full command line used to run *bin* with *args*."""
        if is_node_executable(bin.bin_path):
            return [self._node_path, str(bin.bin_path), *args]
        return [str(bin.bin_path), *args]

    def execute(self, bin: BinInfo, args: Sequence[str], workspace_root: Path) -> int:
        """Run *bin* and return its exit code (``1`` on any abnormal end)."""
        env = build_environment(
            workspace_root,
            self._base_env if self._base_env is not None else os.environ,
            self._reader,
            node_path=self._node_path,
            cwd=self._cwd,
        )
        argv = self.build_argv(bin, args)

        try:
            outcome = self._launcher.launch(argv, env)
        except SpawnError as exc:
            if self._on_warning is not None:
                self._on_warning(f"Failed to start {exc.executable}: {exc}")
            return FAILURE_EXIT_CODE

        return exit_code_for(outcome)


def exit_code_for(outcome: ProcessExit) -> int:
    """Collapse a :class:`ProcessExit` into a process exit code.

    Signal terminations map to ``1`` rather than ``128 + signal``.
    """
    if outcome.code is not None:
        return outcome.code
    return FAILURE_EXIT_CODE
