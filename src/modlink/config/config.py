"""Configuration management for modlink."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path, PurePath
from typing import Any, ClassVar, Final

from modlink.config.paths import default_config_path
from modlink.platform.logging import logger

DEFAULT_DEPENDENCY_DIR: Final[str] = "node_modules"
DEFAULT_INSTALL_COMMAND: Final[tuple[str, ...]] = ("npm", "install")


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Cache root; the EXTERNAL_NODE_MODULES_DIR environment variable wins over it
    cache_dir: Path | None = _path_field()

    # Dependency directory inside the project, relative to the project root
    dependency_dir: str = DEFAULT_DEPENDENCY_DIR

    # Command run when the cache target is empty
    install_command: tuple[str, ...] = DEFAULT_INSTALL_COMMAND

    # Log file path
    log_file: Path | None = _path_field()

    # Guard each project with an advisory lock file next to its cache target
    use_lock: bool = True

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert and validate raw values coming from TOML."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        if isinstance(self.install_command, str):
            self.install_command = tuple(self.install_command.split())
        else:
            self.install_command = tuple(self.install_command)
        if not self.install_command or not all(
            isinstance(part, str) and part for part in self.install_command
        ):
            raise ValueError("install_command must be a non-empty list of strings")

        dependency = PurePath(self.dependency_dir)
        if (
            not self.dependency_dir.strip()
            or dependency.is_absolute()
            or ".." in dependency.parts
        ):
            raise ValueError(
                f"dependency_dir must be a relative path inside the project: {self.dependency_dir!r}"
            )

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Config":
        """Build a configuration from parsed TOML, rejecting unknown keys."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file.

        Args:
            config_file: Explicit file to read. Defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration, or defaults when no file exists.
        """
        target = config_file or default_config_path()
        if cls._instance is not None and cls._loaded_from == target:
            return cls._instance

        try:
            if target.exists():
                with open(target, "rb") as f:
                    config_dict = tomllib.load(f)
                instance = cls.from_mapping(config_dict)
                logger.debug("Configuration loaded from %s", target)
            else:
                instance = cls()
                logger.debug("No configuration file at %s; using defaults", target)
        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = target
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next load re-reads the file."""

        cls._instance = None
        cls._loaded_from = None


__all__ = ["Config", "DEFAULT_DEPENDENCY_DIR", "DEFAULT_INSTALL_COMMAND"]
