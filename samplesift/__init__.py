"""SampleSift - Keyword Sample Grouping Tool.

A Python application that searches a sample library for audio files whose
names contain a keyword and copies them into numbered group folders.
"""

__version__ = "0.1.0"

from .models import (
    CopyStatus,
    SiftConfig,
    Batch,
    CopyOutcome,
    BatchResult,
    SiftSummary,
)

__all__ = [
    "__version__",
    "CopyStatus",
    "SiftConfig",
    "Batch",
    "CopyOutcome",
    "BatchResult",
    "SiftSummary",
]


def main() -> None:
    """Entry point for the SampleSift CLI application.

    This function is called when the `samplesift` command is invoked after
    package installation via pip. It imports and runs the Typer app
    from the samplesift.cli module.
    """
    from samplesift.cli import app
    app()
