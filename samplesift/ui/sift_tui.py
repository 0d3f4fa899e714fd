"""Terminal output for SampleSift runs.

This module provides the SiftTUI class, a Rich-based display layer for the
discovery results, per-batch progress and the final run summary.

Example:
    from samplesift.ui import SiftTUI

    tui = SiftTUI()
    tui.display_discovery(total_matches=42, source=source, keyword="kick")
    tui.display_summary(summary)
"""

from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from samplesift.models import Batch, SiftSummary


class SiftTUI:
    """Rich-based display for sample discovery and grouped copies.

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_discovery(self, total_matches: int, source: Path, keyword: str) -> None:
        """Report how many samples discovery found.

        Args:
            total_matches: Number of matching samples.
            source: Directory that was searched.
            keyword: Keyword that was matched.
        """
        self.console.print(f"[dim]Searched {escape(str(source))} for '{escape(keyword)}'[/dim]")
        if total_matches:
            self.console.print(f"[green]Found {total_matches:,} matching files to copy[/green]")
        else:
            self.console.print("[yellow]Found 0 matching files to copy[/yellow]")

    def display_batch_start(self, batch: Batch, folder: Path) -> None:
        """Announce a batch before its files are copied."""
        self.console.print(f"Copying {len(batch):,} files to [cyan]{escape(str(folder))}[/cyan]")

    def display_max_reached(self, max_files: int) -> None:
        self.console.print(
            f"[yellow]We reached the max amount of samples to copy: {max_files:,}[/yellow]"
        )

    def display_destination(self, destination: Path) -> None:
        self.console.print(f"Your files are in [bold]{escape(str(destination))}[/bold]")

    def display_summary(self, summary: SiftSummary) -> None:
        """Display final statistics after all batches complete.

        Shows a summary panel with run statistics and, if any occurred, the
        errors in a separate panel.

        Args:
            summary: SiftSummary with aggregated statistics.
        """
        title = "Sift Summary"
        if summary.dry_run:
            title += " [yellow][DRY RUN][/yellow]"

        header_panel = Panel(title, border_style="green" if not summary.dry_run else "yellow")
        self.console.print(header_panel)

        copied_label = "Files reported (dry run)" if summary.dry_run else "Files copied"

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Matches found", f"{summary.total_matches:,}")
        table.add_row("Groups", f"{summary.total_batches:,}")
        table.add_row(copied_label, f"{summary.files_copied:,}")
        table.add_row("Files failed", f"{summary.files_failed:,}")
        table.add_row("Skipped (over max)", f"{summary.files_skipped_by_max:,}")
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(table)

        if summary.errors:
            self._display_errors(summary.errors)

    def create_progress_callback(
        self, description: str, total_files: int
    ) -> tuple[Progress, Callable[[int], None]]:
        """Create a progress bar and callback function for a batch copy.

        The caller owns the Progress lifecycle and must use it as a context
        manager around the copy.

        Args:
            description: Text shown beside the bar.
            total_files: Number of files in the batch.

        Returns:
            tuple[Progress, Callable[[int], None]]: The Progress instance and a
                callback taking the number of completed files.

        Example:
            progress, callback = tui.create_progress_callback("group_1", 128)
            with progress:
                for i, file in enumerate(files):
                    copy(file)
                    callback(i + 1)
        """
        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=True,
        )
        task_id = progress.add_task(description, total=total_files)

        def callback(completed: int) -> None:
            progress.update(task_id, completed=completed)

        return progress, callback

    def _display_errors(self, errors: List[str]) -> None:
        """Display error messages in a separate panel.

        Args:
            errors: List of error messages to display.
        """
        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {escape(e)}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_duration(self, seconds: float) -> str:
        """Convert seconds to human-readable duration (e.g., "5m 23s")."""
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
