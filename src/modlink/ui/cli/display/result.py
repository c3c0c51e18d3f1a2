"""Display utilities for link and check results."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from modlink.application.services.setup_service import CheckReport, SetupReport
from modlink.features.install import InstallStatus
from modlink.shared.failures import Failure


@final
class ResultDisplay:
    """Render run outcomes in the CLI."""

    def __init__(self, console: Console | None = None, error_console: Console | None = None) -> None:
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def show_failure(self, failure: Failure) -> None:
        """Print one failure with its remediation steps; shown even in quiet mode."""

        self.error_console.print(f"[bold red]❌ {escape(failure.message)}[/bold red]")
        if failure.remediation:
            self.error_console.print("\n[bold]Fix:[/bold]")
            for index, step in enumerate(failure.remediation, start=1):
                self.error_console.print(f"  {index}) {escape(step)}")

    def show_setup(self, report: SetupReport, *, quiet: bool = False) -> None:
        """Print a summary of a link run."""

        if report.failure is not None:
            self.show_failure(report.failure)
            return
        if quiet:
            return

        location = report.location
        self.console.print("\n[bold]Link Summary:[/bold]")
        self.console.print(f"Slot: {escape(str(report.slot))}")
        self.console.print(f"Cache target: {escape(str(location.cache_target))}")
        if report.link is not None and report.link.initial_state is not None:
            self.console.print(f"Initial state: {report.link.initial_state.value}")
        if report.link is not None and report.link.relocated:
            self.console.print("[magenta]Moved existing directory into the cache[/magenta]")
        if report.install is not None:
            if report.install.status is InstallStatus.INSTALLED:
                self.console.print("[green]Dependencies installed[/green]")
            else:
                self.console.print("[green]Dependencies already cached, no install needed[/green]")

    def show_check(self, report: CheckReport, *, quiet: bool = False) -> None:
        """Print the read-only state report."""

        if report.failure is not None:
            self.show_failure(report.failure)
            return
        if quiet:
            return

        state = report.state.value if report.state is not None else "unknown"
        colour = "green" if report.linked else "yellow"
        self.console.print("\n[bold]Link Status:[/bold]")
        self.console.print(f"Slot: {escape(str(report.slot))}")
        self.console.print(f"[{colour}]State: {state}[/{colour}]")
        if report.link_target is not None:
            self.console.print(f"Link target: {escape(str(report.link_target))}")
        self.console.print(f"Cache root: {escape(str(report.location.cache_root))}")
        self.console.print(f"Cache target: {escape(str(report.location.cache_target))}")
        if report.cached_entries is not None:
            self.console.print(f"Cached entries: {report.cached_entries}")


__all__ = ["ResultDisplay"]
