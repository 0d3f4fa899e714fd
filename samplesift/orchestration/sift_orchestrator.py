"""SiftOrchestrator for coordinating sample discovery and grouped copies.

This module provides the SiftOrchestrator class that runs a complete sift:
discover matching samples, copy them batch by batch into numbered group
folders, and summarize the run. It coordinates SampleScanner, GroupedCopier,
SiftTUI and SiftLogger.

Example:
    from samplesift.models import SiftConfig
    from samplesift.orchestration import SiftOrchestrator
    from pathlib import Path

    config = SiftConfig(
        source=Path("/data/samples"),
        destination=Path("/data/kicks"),
        keyword="kick",
    )
    summary = SiftOrchestrator(config).run()
"""

import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from rich.markup import escape

from samplesift.models import BatchResult, SiftConfig, SiftSummary
from samplesift.operations import GroupedCopier
from samplesift.orchestration.sift_logger import SiftLogger
from samplesift.scanning import SampleScanner
from samplesift.ui import SiftTUI

logger = logging.getLogger(__name__)


class SiftOrchestrator:
    """Orchestrates discovery and grouped copying for one run.

    The run moves through Init -> Discovering -> Grouping & Copying -> Done.
    Discovery completes before any copy starts, and batches are copied one
    at a time in group order. Nothing is resumable: an interrupted run
    leaves already copied files in place.

    Attributes:
        config: The validated run configuration.

    Example:
        orchestrator = SiftOrchestrator(config)
        summary = orchestrator.run()
        print(summary.files_copied)
    """

    def __init__(self, config: SiftConfig, tui: Optional[SiftTUI] = None) -> None:
        """Initialize the SiftOrchestrator.

        Args:
            config: Validated run configuration.
            tui: Optional SiftTUI for output. Defaults to a new SiftTUI.
        """
        self.config = config
        self._tui = tui or SiftTUI()
        self._scanner = SampleScanner(keyword=config.keyword, debug=config.debug)

    def run(self) -> SiftSummary:
        """Execute discovery, grouped copying and the summary.

        Returns:
            SiftSummary with aggregated statistics for the run.

        Raises:
            DiscoveryError: If the source tree cannot be resolved or walked.
                Nothing is copied in that case.
        """
        start_time = time.time()

        # Phase 1: Discovery
        matches = self._scanner.find_matches(self.config.source)
        logger.debug(f"Discovery found {len(matches)} matches under {self.config.source}")
        self._tui.display_discovery(
            total_matches=len(matches),
            source=self.config.source,
            keyword=self.config.keyword,
        )

        # Try to create the run log; if it fails, proceed without it
        run_log: Optional[SiftLogger] = None
        if self.config.log_file is not None:
            try:
                run_log = SiftLogger(
                    log_file_path=self.config.log_file,
                    dry_run=self.config.dry_run,
                )
            except OSError as e:
                print(f"Warning: Could not create log file: {e}", file=sys.stderr)

        if run_log is None:
            return self._execute_copy_and_summary(matches, None, start_time)

        with run_log:
            run_log.log_header()
            run_log.log_discovery(self.config.source, self.config.keyword, matches)
            summary = self._execute_copy_and_summary(matches, run_log, start_time)
            run_log.log_summary(summary)

        if self.config.debug:
            self._tui.console.print(f"[dim]Log file: {escape(str(run_log.get_log_path()))}[/dim]")
        return summary

    def _execute_copy_and_summary(
        self,
        matches: List[Path],
        run_log: Optional[SiftLogger],
        start_time: float,
    ) -> SiftSummary:
        """Run phases 2 and 3: copy every batch, then build and show the summary."""
        results, max_reached = self._execute_copy_phase(matches, run_log)

        summary = self._aggregate_summary(
            results,
            total_matches=len(matches),
            max_reached=max_reached,
            duration=time.time() - start_time,
        )

        self._tui.display_summary(summary)
        self._tui.display_destination(summary.destination)
        return summary

    def _execute_copy_phase(
        self,
        matches: List[Path],
        run_log: Optional[SiftLogger],
    ) -> Tuple[List[BatchResult], bool]:
        """Copy matches batch by batch into their group folders.

        Args:
            matches: Matched samples in discovery order.
            run_log: Optional SiftLogger receiving each batch result.

        Returns:
            Tuple of (batch results in group order, whether the max cap was hit).
        """
        copier = GroupedCopier(
            destination=self.config.destination,
            group_size=self.config.group_size,
            max_files=self.config.max_files,
            dry_run=self.config.dry_run,
        )
        results: List[BatchResult] = []

        for batch in copier.iter_batches(matches):
            folder = copier.group_folder(batch.index)
            self._tui.display_batch_start(batch, folder)

            progress, callback = self._tui.create_progress_callback(
                description=f"Copying {batch.folder_name}...",
                total_files=len(batch),
            )
            copier.progress_callback = self._create_progress_wrapper(callback)

            with progress:
                result = copier.copy_batch(batch)
            results.append(result)

            if result.error:
                self._tui.console.print(f"[red]Error:[/red] {escape(result.error)}")
            if run_log is not None:
                run_log.log_batch(result)

        if copier.max_reached:
            self._tui.display_max_reached(self.config.max_files)

        return results, copier.max_reached

    def _create_progress_wrapper(
        self, callback: Callable[[int], None]
    ) -> Callable[[int, int, str], None]:
        """Adapt the TUI callback (completed count) to GroupedCopier's signature."""
        def wrapper(current_index: int, total_files: int, current_file: str) -> None:
            callback(current_index + 1)

        return wrapper

    def _aggregate_summary(
        self,
        results: List[BatchResult],
        total_matches: int,
        max_reached: bool,
        duration: float,
    ) -> SiftSummary:
        """Aggregate statistics across all batch results.

        Args:
            results: Batch results in group order.
            total_matches: Number of samples discovery found.
            max_reached: Whether the max cap left matches out.
            duration: Total duration of the run in seconds.

        Returns:
            SiftSummary dataclass with totals and duration.
        """
        errors: List[str] = []
        for result in results:
            errors.extend(result.errors)

        skipped = max(0, total_matches - self.config.max_files) if max_reached else 0

        return SiftSummary(
            destination=self.config.destination,
            dry_run=self.config.dry_run,
            total_matches=total_matches,
            total_batches=len(results),
            files_copied=sum(r.files_copied for r in results),
            files_failed=sum(r.files_failed for r in results),
            files_skipped_by_max=skipped,
            max_reached=max_reached,
            errors=errors,
            duration_seconds=duration,
        )
