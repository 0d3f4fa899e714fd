"""Sample scanning package for SampleSift.

This package walks a source tree and returns the audio samples whose
filenames contain a keyword:

- SampleScanner: Depth-first walker that collects matches in walk order.
- is_matching_sample: Pure filename predicate (extension + keyword).
- DiscoveryError: Raised when the source tree cannot be walked.

Example:
    >>> from samplesift.scanning import SampleScanner
    >>> from pathlib import Path
    >>>
    >>> scanner = SampleScanner(keyword="kick")
    >>> matches = scanner.find_matches(Path("/data/samples"))
"""

from .sample_scanner import (
    AUDIO_EXTENSIONS,
    DiscoveryError,
    SampleScanner,
    is_matching_sample,
)

__all__ = ["AUDIO_EXTENSIONS", "DiscoveryError", "SampleScanner", "is_matching_sample"]
