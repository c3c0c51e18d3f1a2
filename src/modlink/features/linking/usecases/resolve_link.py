"""
Summary: Drive the dependency slot to the linked state or stop with a typed failure.
Why: Never leave the project with an unverified link or a half-moved directory.
"""

from __future__ import annotations

from logging import Logger, getLogger
from pathlib import Path

from modlink.platform.profile import PlatformProfile
from modlink.shared.failures import Failure, FailureKind

from ..domain.models import LinkResult, SlotInspection, SlotState
from .ports import DirectoryLinker, LinkFileSystem


class LinkResolver:
    """Classify the slot and apply the single transition that links it."""

    _filesystem: LinkFileSystem
    _linker: DirectoryLinker
    _profile: PlatformProfile
    _logger: Logger

    def __init__(
        self,
        *,
        filesystem: LinkFileSystem,
        linker: DirectoryLinker,
        profile: PlatformProfile,
        logger: Logger | None = None,
    ) -> None:
        self._filesystem = filesystem
        self._linker = linker
        self._profile = profile
        self._logger = logger or getLogger(__name__)

    def inspect(self, slot: Path, cache_target: Path) -> SlotInspection:
        """Classify ``slot`` against ``cache_target`` using reads only.

        Raises:
            NotADirectoryError: When a plain file occupies the slot.
        """

        if self._linker.is_link(slot):
            link_target = self._linker.read(slot)
            if link_target is not None and self._profile.same_path(link_target, cache_target):
                return SlotInspection(SlotState.VALID_LINK, link_target)
            return SlotInspection(SlotState.STALE_LINK, link_target)

        if not self._filesystem.exists(slot):
            return SlotInspection(SlotState.ABSENT)

        if not self._filesystem.is_dir(slot):
            raise NotADirectoryError(f"Path exists but is not a directory: {slot}")
        return SlotInspection(SlotState.REAL_DIRECTORY)

    def resolve(self, slot: Path, cache_target: Path) -> LinkResult:
        """Bring ``slot`` to a verified link pointing at ``cache_target``."""

        try:
            inspection = self.inspect(slot, cache_target)
        except OSError as exc:
            return self._failed(slot, cache_target, None, Failure.from_os_error("inspect", slot, exc))

        state = inspection.state
        self._logger.debug("Slot %s classified as %s", slot, state.value)

        if state is SlotState.VALID_LINK:
            failure = self._ensure_cache_target(cache_target)
            if failure is not None:
                return self._failed(slot, cache_target, state, failure)
            self._logger.info(
                "Already linked",
                extra={"link_event": "link.existing", "source_path": slot, "target_path": cache_target},
            )
            return LinkResult(slot=slot, cache_target=cache_target, initial_state=state, linked=True)

        if state is SlotState.STALE_LINK:
            return self._failed(slot, cache_target, state, self._mismatch(slot, cache_target, inspection))

        # Nothing has been mutated yet; stop here if the link primitive is unusable.
        if not self._linker.preflight():
            return self._failed(slot, cache_target, state, self._preflight_failure(slot))

        relocated = False
        if state is SlotState.REAL_DIRECTORY:
            failure = self._relocate(slot, cache_target)
            if failure is not None:
                return self._failed(slot, cache_target, state, failure)
            relocated = True

        failure = self._ensure_cache_target(cache_target)
        if failure is not None:
            return self._failed(slot, cache_target, state, failure, relocated=relocated)

        failure = self._create_link(slot, cache_target)
        if failure is not None:
            return self._failed(slot, cache_target, state, failure, relocated=relocated)

        self._logger.info(
            "Linked",
            extra={
                "link_event": "link.created",
                "source_path": slot,
                "target_path": cache_target,
                "link_kind": self._linker.kind.value,
            },
        )
        return LinkResult(
            slot=slot,
            cache_target=cache_target,
            initial_state=state,
            linked=True,
            relocated=relocated,
            created_link=True,
        )

    def _relocate(self, slot: Path, cache_target: Path) -> Failure | None:
        """Move the real directory at ``slot`` to ``cache_target``."""

        try:
            existing = self._filesystem.list_entries(cache_target)
        except OSError as exc:
            return Failure.from_os_error("read", cache_target, exc)
        if existing:
            return Failure(
                kind=FailureKind.CACHE_CONFLICT,
                message=(
                    f"{slot.name} is a real directory but the cache target already holds "
                    f"{len(existing)} entries.\nCache target: {cache_target}"
                ),
                remediation=(
                    f"Keep the cached copy: delete {slot} and re-run modlink.",
                    f"Keep the local copy: delete {cache_target} and re-run modlink.",
                ),
                path=cache_target,
            )

        try:
            _ = self._filesystem.ensure_directory(cache_target.parent)
            if self._filesystem.exists(cache_target):
                # Empty placeholder from an earlier run; rename needs the name free.
                self._filesystem.remove(cache_target)
            self._filesystem.move(slot, cache_target)
        except OSError as exc:
            return Failure.from_os_error("move", slot, exc)

        self._logger.info(
            "Moved",
            extra={"link_event": "cache.moved", "source_path": slot, "target_path": cache_target},
        )

        if self._filesystem.exists(slot):
            try:
                self._filesystem.remove(slot)
            except OSError as exc:
                return Failure.from_os_error("remove", slot, exc)
        return None

    def _ensure_cache_target(self, cache_target: Path) -> Failure | None:
        try:
            created = self._filesystem.ensure_directory(cache_target)
        except OSError as exc:
            return Failure.from_os_error("create", cache_target, exc)
        if created:
            self._logger.info(
                "Created cache",
                extra={"link_event": "cache.created", "source_path": cache_target},
            )
        return None

    def _create_link(self, slot: Path, cache_target: Path) -> Failure | None:
        try:
            _ = self._filesystem.ensure_directory(slot.parent)
            self._linker.create(cache_target, slot)
        except OSError as exc:
            return self._creation_failure(slot, exc)

        if self._verify(slot, cache_target):
            return None

        self._discard_link(slot)
        hint = (
            "Ensure Developer Mode is enabled, then re-run modlink."
            if self._profile.is_windows
            else "Check permissions on the project folder and re-run modlink."
        )
        return Failure(
            kind=FailureKind.LINK_VERIFICATION_FAILED,
            message=(
                f"Link verification failed: {slot.name} is not a valid link to the cache target.\n"
                f"Expected target: {cache_target}"
            ),
            remediation=(hint,),
            path=slot,
        )

    def _verify(self, slot: Path, cache_target: Path) -> bool:
        if not self._linker.is_link(slot):
            return False
        read_back = self._linker.read(slot)
        return read_back is not None and self._profile.same_path(read_back, cache_target)

    def _discard_link(self, slot: Path) -> None:
        """Best-effort removal of a link that failed verification."""

        try:
            if self._linker.is_link(slot):
                self._linker.remove(slot)
        except OSError as exc:
            self._logger.debug("Could not remove unverified link %s: %s", slot, exc)

    def _mismatch(self, slot: Path, cache_target: Path, inspection: SlotInspection) -> Failure:
        actual = str(inspection.link_target) if inspection.link_target is not None else "<unreadable>"
        return Failure(
            kind=FailureKind.LINK_MISMATCH,
            message=(
                f"{slot.name} is a link but does not point to the expected cache target.\n"
                f"Expected: {cache_target}\n"
                f"Actual:   {actual}"
            ),
            remediation=(
                f"Remove the link at {slot} (its current target is left untouched).",
                "Re-run modlink.",
            ),
            path=slot,
        )

    def _preflight_failure(self, slot: Path) -> Failure:
        if not self._profile.is_windows:
            return Failure(
                kind=FailureKind.LINK_UNSUPPORTED,
                message=f"Failed preflight to create a {self._linker.kind.value} on this platform.",
                remediation=(
                    "Ensure the project folder and the cache root allow links.",
                    "Re-run modlink.",
                ),
                path=slot,
            )
        return Failure(
            kind=FailureKind.LINK_UNSUPPORTED,
            message=(
                "Failed preflight to create a junction (Windows).\n"
                "This usually means Developer Mode is OFF or you lack permissions to create links."
            ),
            remediation=(
                "Enable Developer Mode: Settings → Privacy & Security → For Developers → Developer Mode (On).",
                f"Delete the local {slot.name} folder if present: Remove-Item -Recurse -Force .\\{slot.name}",
                "Re-run modlink.",
            ),
            path=slot,
        )

    def _creation_failure(self, slot: Path, error: OSError) -> Failure:
        detail = error.strerror or str(error) or error.__class__.__name__
        if self._profile.is_windows:
            message = f"Failed to create a junction for {slot.name}."
            remediation = (
                "Enable Developer Mode (Settings → Privacy & Security → For Developers).",
                f"Remove the local {slot.name} if present: Remove-Item -Recurse -Force .\\{slot.name}",
                "Re-run modlink.",
            )
        else:
            message = f"Failed to create a symlink for {slot.name}."
            remediation = (
                "Ensure you have write permissions to the project folder.",
                f"Remove any existing {slot.name}, then re-run modlink.",
            )
        return Failure(
            kind=FailureKind.LINK_UNSUPPORTED,
            message=f"{message}\nOriginal error: {detail}",
            remediation=remediation,
            operation="link",
            path=slot,
        )

    def _failed(
        self,
        slot: Path,
        cache_target: Path,
        state: SlotState | None,
        failure: Failure,
        *,
        relocated: bool = False,
    ) -> LinkResult:
        # Debug level: the CLI prints the failure itself.
        self._logger.debug(
            "Link resolution stopped with %s",
            failure.kind.value,
            extra={
                "link_event": "link.error",
                "source_path": slot,
                "target_path": cache_target,
                "error_message": failure.kind.value,
            },
        )
        return LinkResult(
            slot=slot,
            cache_target=cache_target,
            initial_state=state,
            linked=False,
            relocated=relocated,
            failure=failure,
        )


__all__ = ["LinkResolver"]
