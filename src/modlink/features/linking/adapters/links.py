"""Where: src/modlink/features/linking/adapters/links.py
What: Symbolic link and directory junction strategies behind ``DirectoryLinker``.
Why: Keep the resolver's state machine free of platform branches.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import tempfile
from logging import Logger, getLogger
from pathlib import Path
from typing import Final

from modlink.platform.profile import LinkKind, PlatformProfile

_PREFLIGHT_PREFIX: Final[str] = "modlink-preflight-"
_EXTENDED_PREFIX: Final[str] = "\\\\?\\"


class SymlinkLinker:
    """Directory symbolic links (macOS, Linux)."""

    def __init__(self, profile: PlatformProfile) -> None:
        self._profile = profile

    @property
    def kind(self) -> LinkKind:
        return LinkKind.SYMLINK

    def is_link(self, path: Path) -> bool:
        return os.path.islink(path)

    def read(self, path: Path) -> Path | None:
        try:
            raw = os.readlink(path)
        except OSError:
            return None
        # Relative link targets resolve against the link's parent.
        return Path(os.path.normpath(os.path.join(path.parent, raw)))

    def create(self, target: Path, slot: Path) -> None:
        os.symlink(target, slot, target_is_directory=True)

    def remove(self, slot: Path) -> None:
        os.unlink(slot)

    def preflight(self) -> bool:
        return True


class JunctionLinker(SymlinkLinker):
    """Directory junctions (Windows), created with ``mklink /J``.

    Junctions need no Developer Mode or elevation, unlike directory symlinks.
    """

    def __init__(self, profile: PlatformProfile, logger: Logger | None = None) -> None:
        super().__init__(profile)
        self._logger = logger or getLogger(__name__)

    @property
    def kind(self) -> LinkKind:
        return LinkKind.JUNCTION

    def is_link(self, path: Path) -> bool:
        return os.path.isjunction(path) or os.path.islink(path)

    def read(self, path: Path) -> Path | None:
        try:
            raw = os.readlink(path)
        except OSError:
            return None
        if raw.startswith(_EXTENDED_PREFIX):
            raw = raw[len(_EXTENDED_PREFIX):]
        return Path(os.path.normpath(os.path.join(path.parent, raw)))

    def create(self, target: Path, slot: Path) -> None:
        completed = subprocess.run(
            ["cmd", "/c", "mklink", "/J", str(slot), str(target)],
            capture_output=True,
            text=True,
            check=False,
        )
        if completed.returncode != 0:
            detail = (completed.stderr or completed.stdout or "").strip()
            raise OSError(
                f"mklink /J exited with status {completed.returncode}: {detail or 'no output'}"
            )

    def remove(self, slot: Path) -> None:
        # Removing a junction with rmdir leaves the target's contents intact.
        os.rmdir(slot)

    def preflight(self) -> bool:
        """Create a throwaway junction between two temp folders and read it back."""

        root = Path(tempfile.mkdtemp(prefix=_PREFLIGHT_PREFIX))
        target = root / "tgt"
        link = root / "lnk"
        try:
            target.mkdir()
            self.create(target, link)
            read_back = self.read(link)
            return read_back is not None and self._profile.same_path(read_back, target)
        except OSError as exc:
            self._logger.debug("Junction preflight failed: %s", exc)
            return False
        finally:
            try:
                if self.is_link(link):
                    self.remove(link)
            except OSError as exc:
                self._logger.debug("Preflight cleanup failed for %s: %s", link, exc)
            shutil.rmtree(root, ignore_errors=True)


def linker_for(profile: PlatformProfile) -> SymlinkLinker:
    """Pick the link strategy once, at startup, from the platform profile."""

    if profile.link_kind is LinkKind.JUNCTION:
        return JunctionLinker(profile)
    return SymlinkLinker(profile)


__all__ = ["JunctionLinker", "SymlinkLinker", "linker_for"]
