"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import final


@final
@dataclass(slots=True)
class LinkArgs:
    """Command line arguments for a modlink run."""

    project_path: Path
    check: bool
    always_install: bool
    verbose: bool
    quiet: bool


CLIArgs = LinkArgs

__all__ = ["CLIArgs", "LinkArgs"]
