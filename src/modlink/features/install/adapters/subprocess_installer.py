"""Installer adapter that shells out to the package manager."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path


class SubprocessInstaller:
    """Run the install command in the project directory with inherited stdio."""

    def __init__(self, command: Sequence[str], cwd: Path) -> None:
        if not command:
            raise ValueError("Install command must not be empty")
        self._command = tuple(command)
        self._cwd = cwd

    @property
    def command(self) -> tuple[str, ...]:
        return self._command

    def run(self) -> int:
        """Block until the installer exits and return its status.

        Raises:
            FileNotFoundError: When the executable is not on ``PATH``.
        """

        executable = shutil.which(self._command[0])
        if executable is None:
            raise FileNotFoundError(2, "No such file or directory", self._command[0])
        completed = subprocess.run(
            [executable, *self._command[1:]],
            cwd=self._cwd,
            check=False,
        )
        return completed.returncode


__all__ = ["SubprocessInstaller"]
