"""
CopyStatus enum for per-file copy outcomes.

Each file placed in a batch ends in exactly one of three states:
1. Copied - Bytes streamed to the group folder and synced to disk
2. Dry Run - Copy was only reported, no bytes written
3. Failed - Open, create, stream or flush raised an error
"""

from enum import Enum


class CopyStatus(Enum):
    """Encodes the result of copying a single sample into its group folder."""
    COPIED = "copied"      # Bytes written and synced
    DRY_RUN = "dry_run"    # Intended copy reported only
    FAILED = "failed"      # Copy raised an OSError
