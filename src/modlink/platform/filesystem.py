"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def list_entries(directory: Path) -> list[str]:
    """Return the names directly under ``directory``.

    Missing directories yield an empty list; permission problems propagate.
    """

    try:
        return os.listdir(directory)
    except FileNotFoundError:
        return []


def remove_path(path: Path) -> None:
    """Delete ``path`` whatever it is, without following links."""

    if path.is_symlink() or path.is_junction():
        try:
            path.unlink()
        except (IsADirectoryError, PermissionError):
            os.rmdir(path)
        return
    if path.is_dir():
        shutil.rmtree(path)
        return
    if os.path.lexists(path):
        path.unlink()


@contextmanager
def exclusive_lock(lock_path: Path) -> Iterator[Path]:
    """Hold an advisory lock file for the duration of the block.

    Raises:
        FileExistsError: When another process already holds the lock.
    """

    lock_path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    try:
        _ = os.write(fd, f"{os.getpid()}\n".encode("ascii"))
    finally:
        os.close(fd)

    try:
        yield lock_path
    finally:
        try:
            lock_path.unlink()
        except FileNotFoundError:
            pass


__all__ = ["ensure_directory", "exclusive_lock", "list_entries", "remove_path"]
