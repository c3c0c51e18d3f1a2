"""Display helpers for the CLI."""

from modlink.ui.cli.display.result import ResultDisplay

__all__ = ["ResultDisplay"]
