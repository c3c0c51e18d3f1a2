"""Public surface for the install feature."""

from .adapters.subprocess_installer import SubprocessInstaller
from .domain.models import InstallOutcome, InstallStatus
from .usecases.trigger import InstallTrigger

__all__ = ["InstallOutcome", "InstallStatus", "InstallTrigger", "SubprocessInstaller"]
