"""Command line argument parser."""

import argparse
import logging
import os
import sys
import textwrap
from collections.abc import Sequence
from pathlib import Path
from typing import Final, final

from modlink.config.config import Config
from modlink.config.paths import ENV_CACHE_DIR, ENV_CONFIG_FILE
from modlink.platform.logging import logger, setup_logger
from modlink.ui.cli.args.options import CLIArgs, LinkArgs

HELP_EPILOG: Final[str] = textwrap.dedent(
    f"""\
    what it does:
      • moves ./node_modules to a local cache (outside cloud sync)
      • creates a link (symlink on macOS/Linux, junction on Windows)
      • runs "npm install" if the cache is empty

    default cache locations:
      macOS:   ~/Library/Caches/node_modules_store
      Linux:   ~/.cache/node_modules_store
      Windows: %LOCALAPPDATA%\\Temp\\node_modules_cache

    override cache location:
      macOS/Linux:
        {ENV_CACHE_DIR}="/path/to/cache" modlink
      Windows (PowerShell):
        $env:{ENV_CACHE_DIR}="D:\\path\\to\\cache"; modlink

    config file:
      ~/.config/modlink/config.toml, or the path in {ENV_CONFIG_FILE}

    stop-on-failure:
      if link creation fails (e.g. Developer Mode off on Windows) modlink
      stops with instructions so node_modules is never synced by accident.
    """
)


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="modlink",
            description=(
                "modlink - move a project's dependency directory to a cache outside "
                "your cloud folder and link it back."
            ),
            epilog=HELP_EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "--project",
            type=str,
            default=None,
            metavar="PROJECT_PATH",
            help="Project directory to operate on (defaults to the current directory)",
        )
        _ = parser.add_argument(
            "--check",
            action="store_true",
            help="Report the link state and cache location without changing anything",
        )
        _ = parser.add_argument(
            "--always-install",
            action="store_true",
            help="Run the install command after linking even if the cache is populated",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed progress information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )
        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            LinkArgs: Processed command line arguments.

        Raises:
            SystemExit: On ``--help`` (status 0) or when the project path is invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        _ = setup_logger(log_file=configuration.log_file, console_level=log_level)

        project_path = (
            Path(os.path.abspath(Path(parsed_args.project).expanduser()))
            if parsed_args.project
            else Path.cwd()
        )
        if not project_path.is_dir():
            logger.error("Project path does not exist or is not a directory: %s", project_path)
            sys.exit(1)

        return LinkArgs(
            project_path=project_path,
            check=parsed_args.check,
            always_install=parsed_args.always_install,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )


__all__ = ["ArgumentParser", "HELP_EPILOG"]
