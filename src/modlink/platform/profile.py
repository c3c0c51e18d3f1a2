"""Where: src/modlink/platform/profile.py
What: Host platform identity and the path comparison rules that go with it.
Why: Keep platform checks in one injected value instead of module globals.
"""

from __future__ import annotations

import ntpath
import posixpath
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

_EXTENDED_PREFIX: Final[str] = "\\\\?\\"
_EXTENDED_UNC_PREFIX: Final[str] = "\\\\?\\UNC\\"


class LinkKind(str, Enum):
    """Directory link primitive available on a platform."""

    SYMLINK = "symlink"
    JUNCTION = "junction"


@dataclass(slots=True, frozen=True)
class PlatformProfile:
    """Platform facts the locator and resolver depend on."""

    name: str
    case_insensitive_paths: bool
    link_kind: LinkKind

    @property
    def is_windows(self) -> bool:
        return self.name == "windows"

    @property
    def is_macos(self) -> bool:
        return self.name == "darwin"

    def normalize(self, path: Path | str) -> str:
        """Return the comparison key for ``path`` on this platform."""

        raw = str(path)
        if not self.is_windows:
            return posixpath.normpath(raw)

        if raw.startswith(_EXTENDED_UNC_PREFIX):
            raw = "\\\\" + raw[len(_EXTENDED_UNC_PREFIX):]
        elif raw.startswith(_EXTENDED_PREFIX):
            raw = raw[len(_EXTENDED_PREFIX):]
        normalized = ntpath.normpath(raw.replace("/", "\\"))
        return normalized.lower() if self.case_insensitive_paths else normalized

    def same_path(self, first: Path | str, second: Path | str) -> bool:
        """Compare two absolute paths using this platform's matching rules."""

        return self.normalize(first) == self.normalize(second)


WINDOWS: Final[PlatformProfile] = PlatformProfile(
    name="windows", case_insensitive_paths=True, link_kind=LinkKind.JUNCTION
)
MACOS: Final[PlatformProfile] = PlatformProfile(
    name="darwin", case_insensitive_paths=False, link_kind=LinkKind.SYMLINK
)
LINUX: Final[PlatformProfile] = PlatformProfile(
    name="linux", case_insensitive_paths=False, link_kind=LinkKind.SYMLINK
)


def detect_platform(platform: str | None = None) -> PlatformProfile:
    """Map ``sys.platform`` (or the given value) onto a known profile."""

    value = platform if platform is not None else sys.platform
    if value.startswith("win"):
        return WINDOWS
    if value == "darwin":
        return MACOS
    return LINUX


__all__ = [
    "LINUX",
    "LinkKind",
    "MACOS",
    "PlatformProfile",
    "WINDOWS",
    "detect_platform",
]
