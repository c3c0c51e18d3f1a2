"""Value objects describing where a project's dependencies are cached."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class CacheLocation:
    """Cache coordinates derived from a project path."""

    project_path: Path
    cache_root: Path
    cache_key: str
    cache_target: Path

    @property
    def lock_path(self) -> Path:
        """Advisory lock file kept beside, not inside, the cache target."""

        return self.cache_root / f"{self.cache_key}.lock"


__all__ = ["CacheLocation"]
