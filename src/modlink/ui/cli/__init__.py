"""Command line interface package."""

from modlink.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
