"""Check command implementation for the CLI."""

from __future__ import annotations

from typing import final

from modlink.application.services.setup_service import CheckReport, LinkSetupService
from modlink.config.config import Config
from modlink.platform.profile import detect_platform
from modlink.ui.cli.args.options import LinkArgs
from modlink.ui.cli.commands.link import build_request
from modlink.ui.cli.display.result import ResultDisplay


@final
class CheckCommand:
    """Command that reports the slot state without changing anything."""

    def __init__(self, args: LinkArgs) -> None:
        self.args = args
        self.config = Config.load()
        self.service = LinkSetupService(profile=detect_platform())
        self.display = ResultDisplay()

    def execute(self) -> CheckReport:
        """Execute the check command."""

        report = self.service.check(build_request(self.args, self.config))
        self.display.show_check(report, quiet=self.args.quiet)
        return report
