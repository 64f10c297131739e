"""Subprocess-backed implementation of :class:`~wsx.core.protocols.ProcessLauncher`.

This module is the **only** place in the codebase that spawns the
resolved bin.  Spawn failures are caught here and re-raised as
:class:`~wsx.exceptions.SpawnError`; termination status is reported as
a :class:`~wsx.core.models.ProcessExit` without interpretation.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence

from wsx.core.models import ProcessExit
from wsx.exceptions import SpawnError


class SubprocessLauncher:
    """Run a child with inherited stdio and wait for it unconditionally.

    There is no timeout and no way to abort the child: control returns
    only once it has terminated or failed to start.
    """

    def launch(self, argv: Sequence[str], env: Mapping[str, str]) -> ProcessExit:
        """Run *argv* under *env* and report how it terminated.

        Raises
        ------
        SpawnError
            When the executable is missing, not executable, or the OS
            refuses to start it.
        """
        if not argv:
            raise SpawnError("Empty command line.", executable="")

        try:
            process = subprocess.Popen(list(argv), env=dict(env))
        except OSError as exc:
            raise SpawnError(exc.strerror or str(exc), executable=argv[0]) from exc

        return self.to_process_exit(self._wait(process))

    @staticmethod
    def _wait(process: subprocess.Popen[bytes]) -> int:
        """Block until *process* exits, riding out ``KeyboardInterrupt``.

        Ctrl+C reaches the whole foreground process group, so the child
        gets it too and decides for itself when to stop.
        """
        while True:
            try:
                return process.wait()
            except KeyboardInterrupt:
                continue

    @staticmethod
    def to_process_exit(returncode: int | None) -> ProcessExit:
        """Translate a ``subprocess`` return code into a :class:`ProcessExit`.

        On POSIX a negative return code ``-N`` means "killed by signal N".
        """
        if returncode is None:
            return ProcessExit(code=None, signal=None)
        if returncode < 0:
            return ProcessExit(code=None, signal=-returncode)
        return ProcessExit(code=returncode)
