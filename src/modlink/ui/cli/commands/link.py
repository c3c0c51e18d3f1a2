"""Link command implementation for the CLI."""

from __future__ import annotations

from typing import final

from modlink.application.services.setup_service import (
    LinkSetupService,
    SetupReport,
    SetupRequest,
)
from modlink.config.config import Config
from modlink.config.paths import cache_dir_override
from modlink.features.install import SubprocessInstaller
from modlink.platform.profile import detect_platform
from modlink.ui.cli.args.options import LinkArgs
from modlink.ui.cli.display.result import ResultDisplay


def build_request(args: LinkArgs, config: Config) -> SetupRequest:
    """Merge CLI arguments with config; the environment override wins for the cache root."""

    return SetupRequest(
        project_path=args.project_path,
        dependency_dir=config.dependency_dir,
        cache_dir=cache_dir_override() or config.cache_dir,
        always_install=args.always_install,
        use_lock=config.use_lock,
    )


@final
class LinkCommand:
    """Command that links the dependency slot and installs into an empty cache."""

    def __init__(self, args: LinkArgs) -> None:
        self.args = args
        self.config = Config.load()
        self.service = LinkSetupService(
            profile=detect_platform(),
            installer=SubprocessInstaller(self.config.install_command, cwd=args.project_path),
        )
        self.display = ResultDisplay()

    def execute(self) -> SetupReport:
        """Execute the link command."""

        report = self.service.run(build_request(self.args, self.config))
        self.display.show_setup(report, quiet=self.args.quiet)
        return report
