"""Where: src/modlink/shared/failures.py
What: Failure kinds and the value object every pipeline stage reports through.
Why: Stages return early with a typed failure instead of raising across layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

GENERIC_EXIT_CODE: Final[int] = 1


class FailureKind(str, Enum):
    """Classify why a run stopped."""

    LINK_MISMATCH = "link_mismatch"
    LINK_UNSUPPORTED = "link_unsupported"
    LINK_VERIFICATION_FAILED = "link_verification_failed"
    INSTALLER_FAILURE = "installer_failure"
    CACHE_CONFLICT = "cache_conflict"
    CACHE_LOCKED = "cache_locked"
    FILESYSTEM_ERROR = "filesystem_error"


@dataclass(slots=True, frozen=True)
class Failure:
    """Describe a fatal problem together with the steps that fix it."""

    kind: FailureKind
    message: str
    remediation: tuple[str, ...] = ()
    exit_code: int = GENERIC_EXIT_CODE
    operation: str | None = None
    path: Path | None = None

    @classmethod
    def from_os_error(cls, operation: str, path: Path, error: OSError) -> "Failure":
        """Wrap an unclassified filesystem error, naming the operation and path."""

        detail = error.strerror or str(error) or error.__class__.__name__
        return cls(
            kind=FailureKind.FILESYSTEM_ERROR,
            message=f"Failed to {operation} {path}: {detail}",
            operation=operation,
            path=path,
        )

    def render(self) -> str:
        """Return the message followed by numbered remediation steps."""

        if not self.remediation:
            return self.message
        steps = "\n".join(
            f"  {index}) {step}" for index, step in enumerate(self.remediation, start=1)
        )
        return f"{self.message}\n\nFix:\n{steps}"


__all__ = ["Failure", "FailureKind", "GENERIC_EXIT_CODE"]
