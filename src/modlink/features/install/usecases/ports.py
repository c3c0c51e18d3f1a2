"""Ports for the install feature."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class Installer(Protocol):
    """External package manager invocation."""

    @property
    def command(self) -> Sequence[str]:
        """Command line that ``run`` executes."""

        ...

    def run(self) -> int:
        """Run the install synchronously and return its exit status."""

        ...


__all__ = ["Installer"]
