"""Application service that runs the locate → resolve → install pipeline."""

from __future__ import annotations

import os
from collections.abc import Mapping
from contextlib import ExitStack
from dataclasses import dataclass
from logging import Logger, getLogger
from pathlib import Path
from typing import final

from modlink.config.config import DEFAULT_DEPENDENCY_DIR
from modlink.features.cache import CacheLocation, locate
from modlink.features.install import InstallOutcome, InstallTrigger
from modlink.features.install.usecases.ports import Installer
from modlink.features.linking import LinkResolver, LinkResult, SlotState
from modlink.features.linking.adapters import LocalLinkFileSystem, linker_for
from modlink.features.linking.usecases.ports import DirectoryLinker, LinkFileSystem
from modlink.platform.filesystem import exclusive_lock
from modlink.platform.profile import PlatformProfile
from modlink.shared.failures import Failure, FailureKind


@dataclass(slots=True)
class SetupRequest:
    """Parameters describing one run against a project."""

    project_path: Path
    dependency_dir: str = DEFAULT_DEPENDENCY_DIR
    cache_dir: Path | str | None = None
    always_install: bool = False
    use_lock: bool = True


@dataclass(slots=True)
class SetupReport:
    """Everything a run did, up to the first failure."""

    location: CacheLocation
    slot: Path
    link: LinkResult | None = None
    install: InstallOutcome | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return 0 if self.failure is None else self.failure.exit_code


@dataclass(slots=True)
class CheckReport:
    """Read-only view of the slot and cache for ``--check``."""

    location: CacheLocation
    slot: Path
    state: SlotState | None
    link_target: Path | None = None
    cached_entries: int | None = None
    failure: Failure | None = None

    @property
    def linked(self) -> bool:
        return self.state is SlotState.VALID_LINK


@final
class LinkSetupService:
    """Application façade wiring adapters into the linking and install use cases."""

    _profile: PlatformProfile
    _installer: Installer | None
    _filesystem: LinkFileSystem
    _linker: DirectoryLinker
    _home: Path
    _env: Mapping[str, str]
    _logger: Logger

    def __init__(
        self,
        *,
        profile: PlatformProfile,
        installer: Installer | None = None,
        filesystem: LinkFileSystem | None = None,
        linker: DirectoryLinker | None = None,
        home: Path | None = None,
        env: Mapping[str, str] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._profile = profile
        self._installer = installer
        self._filesystem = filesystem or LocalLinkFileSystem()
        self._linker = linker or linker_for(profile)
        self._home = home or Path.home()
        self._env = env if env is not None else os.environ
        self._logger = logger or getLogger(__name__)

    def locate(self, request: SetupRequest) -> CacheLocation:
        """Compute cache coordinates for ``request`` without touching disk."""

        return locate(
            request.project_path,
            request.cache_dir,
            profile=self._profile,
            home=self._home,
            env=self._env,
        )

    def check(self, request: SetupRequest) -> CheckReport:
        """Classify the slot without changing anything."""

        location = self.locate(request)
        slot = location.project_path / request.dependency_dir
        resolver = self._build_resolver()
        try:
            inspection = resolver.inspect(slot, location.cache_target)
        except OSError as exc:
            return CheckReport(
                location=location,
                slot=slot,
                state=None,
                failure=Failure.from_os_error("inspect", slot, exc),
            )
        try:
            cached = len(self._filesystem.list_entries(location.cache_target))
        except OSError as exc:
            return CheckReport(
                location=location,
                slot=slot,
                state=inspection.state,
                link_target=inspection.link_target,
                failure=Failure.from_os_error("read", location.cache_target, exc),
            )
        return CheckReport(
            location=location,
            slot=slot,
            state=inspection.state,
            link_target=inspection.link_target,
            cached_entries=cached,
        )

    def run(self, request: SetupRequest) -> SetupReport:
        """Link the dependency slot and install into an empty cache."""

        if self._installer is None:
            raise ValueError("LinkSetupService.run needs an installer")

        location = self.locate(request)
        slot = location.project_path / request.dependency_dir
        report = SetupReport(location=location, slot=slot)
        self._logger.debug(
            "Project %s uses cache target %s", location.project_path, location.cache_target
        )

        with ExitStack() as stack:
            if request.use_lock:
                try:
                    _ = stack.enter_context(exclusive_lock(location.lock_path))
                except FileExistsError:
                    report.failure = self._locked_failure(location)
                    return report
                except OSError as exc:
                    report.failure = Failure.from_os_error("lock", location.lock_path, exc)
                    return report

            report.link = self._build_resolver().resolve(slot, location.cache_target)
            if report.link.failure is not None:
                report.failure = report.link.failure
                return report

            trigger = InstallTrigger(installer=self._installer, logger=self._logger)
            report.install = trigger.maybe_install(
                location.cache_target, force=request.always_install
            )
            report.failure = report.install.failure
            return report

    def _build_resolver(self) -> LinkResolver:
        return LinkResolver(
            filesystem=self._filesystem,
            linker=self._linker,
            profile=self._profile,
            logger=self._logger,
        )

    @staticmethod
    def _locked_failure(location: CacheLocation) -> Failure:
        return Failure(
            kind=FailureKind.CACHE_LOCKED,
            message=(
                "Another modlink run is working on this project.\n"
                f"Lock file: {location.lock_path}"
            ),
            remediation=(
                "Wait for the other run to finish.",
                f"If no other run is active, delete {location.lock_path} and re-run modlink.",
            ),
            path=location.lock_path,
        )


__all__ = ["CheckReport", "LinkSetupService", "SetupReport", "SetupRequest"]
