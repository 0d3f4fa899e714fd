"""
Core data models for SampleSift.

This module contains the following dataclasses:
- SiftConfig: Validated, immutable run configuration
- Batch: A numbered group of matched samples bound for one subfolder
- CopyOutcome: Result of copying a single sample
- BatchResult: Results of copying one batch
- SiftSummary: Summary of the whole run
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .copy_status import CopyStatus

DEFAULT_GROUP_SIZE = 128
DEFAULT_MAX_FILES = 1000
GROUP_FOLDER_PREFIX = "group_"


@dataclass(frozen=True)
class SiftConfig:
    """Validated inputs for a single run. Never mutated once built."""
    source: Path                      # Root directory to search
    destination: Path                 # Root directory for group folders
    keyword: str                      # Case-folded filename substring
    group_size: int = DEFAULT_GROUP_SIZE  # Max files per group folder
    max_files: int = DEFAULT_MAX_FILES    # Global cap on files moved
    dry_run: bool = False             # Report copies without writing bytes
    debug: bool = False               # Verbose match/copy tracing
    log_file: Optional[Path] = None   # Optional structured run log

    def __post_init__(self) -> None:
        """Normalize the keyword and reject values the run cannot use.

        Raises:
            ValueError: If the keyword is empty, the group size is below 1,
                or the max is negative.
        """
        if not self.keyword:
            raise ValueError("A keyword to search for is required")
        if self.group_size < 1:
            raise ValueError(f"group_size must be at least 1, got {self.group_size}")
        if self.max_files < 0:
            raise ValueError(f"max_files must not be negative, got {self.max_files}")
        object.__setattr__(self, "keyword", self.keyword.lower())


@dataclass
class Batch:
    """A group of matched samples copied into one numbered subfolder."""
    index: int                        # 1-based group number
    paths: List[Path]                 # Samples in discovery order

    @property
    def folder_name(self) -> str:
        return f"{GROUP_FOLDER_PREFIX}{self.index}"

    def __len__(self) -> int:
        return len(self.paths)


@dataclass
class CopyOutcome:
    """Result of copying one sample into its group folder."""
    source: Path                      # Matched sample
    destination: Path                 # Target inside the group folder
    status: CopyStatus                # What happened
    error: Optional[str] = None       # Cause, for FAILED outcomes

    @property
    def succeeded(self) -> bool:
        return self.status is not CopyStatus.FAILED


@dataclass
class BatchResult:
    """Tracks the outcome of copying a single batch."""
    batch: Batch                      # The batch that was copied
    folder: Path                      # Group folder on disk
    outcomes: List[CopyOutcome] = field(default_factory=list)  # One per file attempted
    error: Optional[str] = None       # Set when the group folder could not be created

    @property
    def files_copied(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def files_failed(self) -> int:
        """Files of the batch that were not copied, including any never attempted."""
        return len(self.batch) - self.files_copied

    @property
    def errors(self) -> List[str]:
        """Batch-level error first, then each failed file's cause."""
        errors: List[str] = []
        if self.error:
            errors.append(self.error)
        errors.extend(o.error for o in self.outcomes if o.error)
        return errors


@dataclass
class SiftSummary:
    """Summary of a run returned by SiftOrchestrator."""
    destination: Path                 # Root the group folders were written under
    dry_run: bool = False             # Dry run mode flag
    total_matches: int = 0            # Files found by discovery
    total_batches: int = 0            # Batches flushed
    files_copied: int = 0             # Files copied (or reported, in dry run)
    files_failed: int = 0             # Files whose copy failed
    files_skipped_by_max: int = 0     # Matches beyond the max cap
    max_reached: bool = False         # Whether the max cap cut the run short
    errors: List[str] = field(default_factory=list)  # All error messages
    duration_seconds: float = 0.0     # Total run duration in seconds
