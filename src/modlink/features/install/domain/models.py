"""Outcome of the install step."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from modlink.shared.failures import Failure


class InstallStatus(str, Enum):
    """What the trigger decided and how it went."""

    INSTALLED = "installed"
    ALREADY_CACHED = "already_cached"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class InstallOutcome:
    """Result of ``InstallTrigger.maybe_install``."""

    cache_target: Path
    status: InstallStatus
    exit_code: int | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


__all__ = ["InstallOutcome", "InstallStatus"]
