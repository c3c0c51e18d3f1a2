"""Data structures that describe the dependency slot and link outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from modlink.shared.failures import Failure


class SlotState(str, Enum):
    """What currently occupies the dependency slot inside the project."""

    ABSENT = "absent"
    REAL_DIRECTORY = "real_directory"
    VALID_LINK = "valid_link"
    STALE_LINK = "stale_link"


@dataclass(slots=True, frozen=True)
class SlotInspection:
    """Classification of a slot plus the link target read back, if any."""

    state: SlotState
    link_target: Path | None = None


@dataclass(slots=True)
class LinkResult:
    """Capture how the resolver left the slot."""

    slot: Path
    cache_target: Path
    initial_state: SlotState | None
    linked: bool
    relocated: bool = False
    created_link: bool = False
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.linked and self.failure is None


__all__ = ["LinkResult", "SlotInspection", "SlotState"]
