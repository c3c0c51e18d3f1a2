"""Command line argument handling package."""

from modlink.ui.cli.args.parser import ArgumentParser
from modlink.ui.cli.args.options import CLIArgs, LinkArgs

__all__ = ["ArgumentParser", "CLIArgs", "LinkArgs"]
