"""
Summary: Derive the cache root and per-project cache target for a project path.
Why: Give every project a stable cache folder outside the synced working tree.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from modlink.platform.profile import PlatformProfile

from ..domain.models import CacheLocation

WINDOWS_CACHE_DIR_NAME: Final[str] = "node_modules_cache"
POSIX_CACHE_DIR_NAME: Final[str] = "node_modules_store"


def cache_key(project_path: Path | str) -> str:
    """Return the SHA-1 hex digest identifying ``project_path``."""

    return hashlib.sha1(str(project_path).encode("utf-8")).hexdigest()


def default_cache_root(
    profile: PlatformProfile,
    *,
    home: Path,
    env: Mapping[str, str],
) -> Path:
    """Return the platform default cache root.

    Windows uses ``%LOCALAPPDATA%\\Temp``, macOS ``~/Library/Caches`` and
    everything else ``~/.cache``.
    """

    if profile.is_windows:
        local_appdata = (env.get("LOCALAPPDATA") or "").strip()
        base = Path(local_appdata) if local_appdata else home / "AppData" / "Local"
        return base / "Temp" / WINDOWS_CACHE_DIR_NAME
    if profile.is_macos:
        return home / "Library" / "Caches" / POSIX_CACHE_DIR_NAME
    return home / ".cache" / POSIX_CACHE_DIR_NAME


def locate(
    project_path: Path,
    override_dir: Path | str | None = None,
    *,
    profile: PlatformProfile,
    home: Path,
    env: Mapping[str, str],
) -> CacheLocation:
    """Compute the cache coordinates for ``project_path`` without touching disk."""

    override = str(override_dir).strip() if override_dir is not None else ""
    if override:
        # Relative overrides resolve against the working directory.
        cache_root = Path(os.path.abspath(Path(override).expanduser()))
    else:
        cache_root = default_cache_root(profile, home=home, env=env)

    key = cache_key(project_path)
    return CacheLocation(
        project_path=project_path,
        cache_root=cache_root,
        cache_key=key,
        cache_target=cache_root / key,
    )


__all__ = ["cache_key", "default_cache_root", "locate"]
