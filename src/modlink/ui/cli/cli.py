"""Command line interface for modlink."""

import sys
from typing import final

from modlink.platform.logging import logger
from modlink.ui.cli.args import ArgumentParser
from modlink.ui.cli.args.options import CLIArgs
from modlink.ui.cli.commands import CheckCommand, LinkCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if args.check:
                check_report = CheckCommand(args).execute()
                if check_report.failure is not None:
                    sys.exit(check_report.failure.exit_code)
                if not check_report.linked:
                    sys.exit(1)
                return

            report = LinkCommand(args).execute()
            if report.failure is not None:
                logger.debug("Run failed (%s): %s", report.failure.kind.value, report.failure.render())
            if not report.ok:
                sys.exit(report.exit_code)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures call ``sys.exit(...)``
        with the failure's exit code, so this return is only reached on success.
    """
    CommandProcessor.process_command()
    return 0
