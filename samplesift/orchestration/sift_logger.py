"""SiftLogger for writing a structured report of a run.

This module provides the SiftLogger class that writes a plain-text run log
with header, discovery, copy and summary sections.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from samplesift.models import BatchResult, SiftSummary


class SiftLogger:
    """Writer for the optional run log file.

    Usage:
        with SiftLogger(log_path, dry_run=True) as run_log:
            run_log.log_header()
            run_log.log_discovery(source, keyword, matches)
            for result in results:
                run_log.log_batch(result)
            run_log.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None, dry_run: bool = False) -> None:
        """Initialize the SiftLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.
            dry_run: Whether this is a dry run (no bytes copied).

        Raises:
            OSError: If the log file path is not writable.
        """
        self._dry_run = dry_run
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._batch_counter = 0

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"sift_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file can be created or overwritten.

        Raises:
            OSError: If the target is a directory or a read-only file, or the
                parent directory doesn't exist or is not writable.
        """
        if self._log_file_path.is_dir():
            raise OSError(f"Log file path is a directory: {self._log_file_path}")
        if self._log_file_path.exists() and not os.access(self._log_file_path, os.W_OK):
            raise OSError(f"Permission denied: cannot write to {self._log_file_path}")

        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".samplesift_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "SiftLogger":
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp, and mode (LIVE COPY or DRY RUN)."""
        self._write_separator()
        self._write_line("SampleSift - Run Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        mode = "DRY RUN" if self._dry_run else "LIVE COPY"
        self._write_line(f"Mode: {mode}")
        self._write_line("")

    def log_discovery(self, source: Path, keyword: str, matches: List[Path]) -> None:
        """Write the discovery section listing every matched sample.

        Args:
            source: Directory that was searched.
            keyword: Keyword that was matched.
            matches: Matched samples in discovery order.
        """
        self._write_separator()
        self._write_line("DISCOVERY")
        self._write_separator()
        self._write_line(f"Source: {source}")
        self._write_line(f"Keyword: {keyword}")
        self._write_line(f"Matching files: {len(matches)}")
        self._write_line("")
        for path in matches:
            self._write_line(f"- {path}", indent=2)
        if matches:
            self._write_line("")

    def log_batch(self, result: BatchResult) -> None:
        """Write one batch entry with its counts and any failures."""
        if self._batch_counter == 0:
            self._write_separator()
            self._write_line("COPY PHASE")
            self._write_separator()
            self._write_line("")

        self._batch_counter += 1
        now = datetime.now()
        self._write_line(
            f"[{self._format_timestamp(now)}] Group {result.batch.index} -> {result.folder}"
        )
        self._write_line(f"Files in group: {len(result.batch)}", indent=2)
        self._write_line(f"Files copied: {result.files_copied}", indent=2)
        self._write_line(f"Files failed: {result.files_failed}", indent=2)

        errors = result.errors
        if errors:
            self._write_line("Errors:", indent=2)
            for error in errors:
                self._write_line(f"- {error}", indent=4)
        self._write_line("")

    def log_summary(self, summary: SiftSummary) -> None:
        """Write the summary section to the log file."""
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Matches found: {summary.total_matches:,}")
        self._write_line(f"Groups: {summary.total_batches}")
        self._write_line(f"Files copied: {summary.files_copied:,}")
        self._write_line(f"Files failed: {summary.files_failed:,}")
        self._write_line(f"Skipped (over max): {summary.files_skipped_by_max:,}")
        self._write_line(f"Destination: {summary.destination}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"  - {error}")

        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration like "5m 23s", "1h 5m 30s", or "45s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation."""
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
