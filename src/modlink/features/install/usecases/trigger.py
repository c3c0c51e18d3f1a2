"""Use case that runs the installer when the cache target is empty."""

from __future__ import annotations

from collections.abc import Callable
from logging import Logger, getLogger
from pathlib import Path
from typing import Final

from modlink.platform.filesystem import list_entries
from modlink.shared.failures import Failure, FailureKind

from ..domain.models import InstallOutcome, InstallStatus
from .ports import Installer

COMMAND_NOT_FOUND_EXIT_CODE: Final[int] = 127


class InstallTrigger:
    """Invoke the installer at most once per trigger instance."""

    _installer: Installer
    _list_entries: Callable[[Path], list[str]]
    _logger: Logger
    _invoked: bool

    def __init__(
        self,
        *,
        installer: Installer,
        entry_lister: Callable[[Path], list[str]] | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._installer = installer
        self._list_entries = entry_lister or list_entries
        self._logger = logger or getLogger(__name__)
        self._invoked = False

    def needs_install(self, cache_target: Path) -> bool:
        """Return True when ``cache_target`` is missing, empty or unreadable."""

        try:
            return not self._list_entries(cache_target)
        except OSError as exc:
            self._logger.warning(
                "Cannot read cache target %s (%s); installing to be safe",
                cache_target,
                exc.strerror or exc,
            )
            return True

    def maybe_install(self, cache_target: Path, *, force: bool = False) -> InstallOutcome:
        """Run the installer if ``cache_target`` is empty (or ``force`` is set)."""

        if not force and not self.needs_install(cache_target):
            self._logger.info(
                "Dependencies already cached",
                extra={"link_event": "install.skip", "source_path": cache_target},
            )
            return InstallOutcome(cache_target=cache_target, status=InstallStatus.ALREADY_CACHED)

        if self._invoked:
            raise RuntimeError("Installer already ran during this invocation")
        self._invoked = True

        command = " ".join(self._installer.command)
        self._logger.info(
            "Installing dependencies",
            extra={"link_event": "install.start", "command": command},
        )
        try:
            exit_code = self._installer.run()
        except FileNotFoundError as exc:
            return self._failed(
                cache_target,
                COMMAND_NOT_FOUND_EXIT_CODE,
                f"Install command not found: {command} ({exc.strerror or exc})",
                remediation=(
                    "Install the package manager or set install_command in the modlink config.",
                ),
            )
        except OSError as exc:
            return self._failed(
                cache_target,
                1,
                f"Could not start install command {command}: {exc.strerror or exc}",
            )

        if exit_code != 0:
            return self._failed(
                cache_target,
                exit_code,
                f"{command} failed ({exit_code})",
                remediation=(f"Fix the install error above, then re-run modlink or {command}.",),
            )

        self._logger.info(
            "Install finished",
            extra={"link_event": "install.complete", "command": command, "exit_code": exit_code},
        )
        return InstallOutcome(
            cache_target=cache_target, status=InstallStatus.INSTALLED, exit_code=exit_code
        )

    def _failed(
        self,
        cache_target: Path,
        exit_code: int,
        message: str,
        *,
        remediation: tuple[str, ...] = (),
    ) -> InstallOutcome:
        # Negative codes mean "killed by signal"; they are not valid process exit codes.
        process_exit = exit_code if 0 < exit_code < 256 else 1
        failure = Failure(
            kind=FailureKind.INSTALLER_FAILURE,
            message=message,
            remediation=remediation,
            exit_code=process_exit,
            operation="install",
            path=cache_target,
        )
        return InstallOutcome(
            cache_target=cache_target,
            status=InstallStatus.FAILED,
            exit_code=exit_code,
            failure=failure,
        )


__all__ = ["COMMAND_NOT_FOUND_EXIT_CODE", "InstallTrigger"]
