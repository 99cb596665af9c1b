"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, colored output and formatted summaries.
Supports verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Sync finished")
        >>> with handler.spinner("Publishing hello.md..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a single operation runs.

        Example:
            >>> with handler.spinner("Creating item..."):
            ...     api.create_item(payload)
        """
        spinner = Spinner("dots", text=escape(message))
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_summary(self, created_count: int = 0, updated_count: int = 0) -> None:
        """Display sync summary with color coding.

        Args:
            created_count: Number of documents published for the first time
            updated_count: Number of already published documents updated
        """
        self.console.print("\n[bold]Sync Summary:[/bold]")

        if created_count > 0:
            self.console.print(f"  [green]+[/green] Created: {created_count} item(s)")

        if updated_count > 0:
            self.console.print(f"  [blue]↑[/blue] Updated: {updated_count} item(s)")

        if created_count + updated_count == 0:
            self.console.print("\n[yellow]No items to sync[/yellow]")
        else:
            self.console.print("\n[green]Sync completed successfully[/green]")
