"""Terminal UI package for SampleSift."""

from .sift_tui import SiftTUI

__all__ = ["SiftTUI"]
