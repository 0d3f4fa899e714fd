"""
Models package for SampleSift.

This package provides convenient imports for all data models:
- CopyStatus: Enum for per-file copy results
- SiftConfig: Validated run configuration
- Batch: Numbered group of samples
- CopyOutcome: Per-file copy result
- BatchResult: Per-batch copy results
- SiftSummary: Run summary
"""

from .copy_status import CopyStatus
from .data_models import (
    DEFAULT_GROUP_SIZE,
    DEFAULT_MAX_FILES,
    Batch,
    BatchResult,
    CopyOutcome,
    SiftConfig,
    SiftSummary,
)

__all__ = [
    "DEFAULT_GROUP_SIZE",
    "DEFAULT_MAX_FILES",
    "CopyStatus",
    "SiftConfig",
    "Batch",
    "CopyOutcome",
    "BatchResult",
    "SiftSummary",
]
