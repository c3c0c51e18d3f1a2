"""Shared path utilities for configuration and cache locations.

This module centralizes how the application discovers the config file and
names the environment variables that override locations.

Policy:
- Config: ``~/.config/modlink/config.toml`` (``%APPDATA%\\modlink`` on
  Windows) unless overridden by ``MODLINK_CONFIG``.
- Cache root: resolved by the cache locator; ``EXTERNAL_NODE_MODULES_DIR``
  wins over the config file and the platform default.
"""

from __future__ import annotations

import os
from pathlib import Path
from collections.abc import Mapping
from typing import Callable, Final

from modlink.platform.profile import PlatformProfile, detect_platform


ENV_CONFIG_FILE: Final[str] = "MODLINK_CONFIG"
ENV_CACHE_DIR: Final[str] = "EXTERNAL_NODE_MODULES_DIR"
APP_DIR_NAME: Final[str] = "modlink"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a configuration path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def _user_config_dir(
    profile: PlatformProfile, env: Mapping[str, str], home: Path
) -> Path:
    if profile.is_windows:
        appdata = env.get("APPDATA") or ""
        base = Path(appdata) if appdata.strip() else home / "AppData" / "Roaming"
        return base / APP_DIR_NAME

    xdg = env.get("XDG_CONFIG_HOME") or ""
    base = Path(xdg) if xdg.strip() else home / ".config"
    return base / APP_DIR_NAME


def default_config_path(
    *,
    env: Mapping[str, str] | None = None,
    profile: PlatformProfile | None = None,
    home: Path | None = None,
) -> Path:
    """Get the path to the TOML config file, honoring ``MODLINK_CONFIG``."""

    mapping = env if env is not None else os.environ
    active_profile = profile or detect_platform()
    home_dir = home or Path.home()

    return resolve_overridable_path(
        explicit_path=None,
        env=mapping,
        env_var=ENV_CONFIG_FILE,
        default_factory=lambda: _user_config_dir(active_profile, mapping, home_dir)
        / "config.toml",
    )


def cache_dir_override(env: Mapping[str, str] | None = None) -> str | None:
    """Return the cache root override from the environment, if any."""

    mapping = env if env is not None else os.environ
    value = (mapping.get(ENV_CACHE_DIR) or "").strip()
    return value or None


__all__ = [
    "APP_DIR_NAME",
    "ENV_CACHE_DIR",
    "ENV_CONFIG_FILE",
    "cache_dir_override",
    "default_config_path",
    "resolve_overridable_path",
]
