"""
Operations package for SampleSift.

This package provides convenient imports for copy operations:
- GroupedCopier: Batches matched samples and copies them into group folders
"""

from .grouped_copier import GroupedCopier

__all__ = ["GroupedCopier"]
