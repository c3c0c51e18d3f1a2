"""Ports for the linking feature."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from modlink.platform.profile import LinkKind


class DirectoryLinker(Protocol):
    """Create, read and remove directory links with one platform primitive."""

    @property
    def kind(self) -> LinkKind:
        """Primitive this linker produces."""

        ...

    def is_link(self, path: Path) -> bool:
        """Return True when ``path`` is a link or junction (dangling or not)."""

        ...

    def read(self, path: Path) -> Path | None:
        """Return the absolute target of the link at ``path``; ``None`` if unreadable."""

        ...

    def create(self, target: Path, slot: Path) -> None:
        """Create a link at ``slot`` pointing to ``target``; raise ``OSError`` on failure."""

        ...

    def remove(self, slot: Path) -> None:
        """Remove the link at ``slot`` without touching its target."""

        ...

    def preflight(self) -> bool:
        """Return True when the platform can create and read back this primitive."""

        ...


class LinkFileSystem(Protocol):
    """Abstract filesystem operations needed by the resolver."""

    def exists(self, path: Path) -> bool:
        """Return True if anything, including a dangling link, is at ``path``."""

        ...

    def is_dir(self, path: Path) -> bool:
        """Return True when ``path`` is a directory."""

        ...

    def ensure_directory(self, path: Path) -> bool:
        """Create ``path`` when missing; return True if it was created."""

        ...

    def list_entries(self, path: Path) -> list[str]:
        """Return entry names under ``path``; missing directories yield an empty list."""

        ...

    def move(self, source: Path, destination: Path) -> None:
        """Move the ``source`` directory to the not-yet-existing ``destination``."""

        ...

    def remove(self, path: Path) -> None:
        """Delete ``path`` without following links."""

        ...


__all__ = ["DirectoryLinker", "LinkFileSystem"]
