"""Command execution package for CLI."""

from modlink.ui.cli.commands.check import CheckCommand
from modlink.ui.cli.commands.link import LinkCommand

__all__ = ["CheckCommand", "LinkCommand"]
