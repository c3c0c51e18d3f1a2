"""Filesystem adapter for the linking use cases."""

from __future__ import annotations

import errno
import os
import shutil
from logging import Logger, getLogger
from pathlib import Path

from modlink.platform.filesystem import ensure_directory, list_entries, remove_path

from ...usecases.ports import LinkFileSystem


class LocalLinkFileSystem(LinkFileSystem):
    """Thin wrapper around the local filesystem."""

    def __init__(self, logger: Logger | None = None) -> None:
        self._logger = logger or getLogger(__name__)

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def ensure_directory(self, path: Path) -> bool:
        if path.is_dir():
            return False
        _ = ensure_directory(path)
        return True

    def list_entries(self, path: Path) -> list[str]:
        return list_entries(path)

    def move(self, source: Path, destination: Path) -> None:
        """Rename when possible, otherwise copy then delete the source.

        A failed copy removes the partial destination so the source stays the
        only copy of the tree.
        """

        try:
            os.rename(source, destination)
            return
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise

        self._logger.debug("Cross-device move, copying %s to %s", source, destination)
        try:
            _ = shutil.copytree(source, destination, symlinks=True)
        except OSError:
            try:
                if os.path.lexists(destination):
                    remove_path(destination)
            except OSError as cleanup_error:
                self._logger.debug(
                    "Could not remove partial copy %s: %s", destination, cleanup_error
                )
            raise
        shutil.rmtree(source)

    def remove(self, path: Path) -> None:
        remove_path(path)


__all__ = ["LocalLinkFileSystem"]
