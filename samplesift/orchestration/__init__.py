"""Workflow orchestration package for SampleSift.

This package contains orchestration components for running a sift:
- SiftLogger: Structured run log written to a file.
- SiftOrchestrator: Central coordinator for discovery and grouped copies.
"""

from samplesift.orchestration.sift_logger import SiftLogger
from samplesift.orchestration.sift_orchestrator import SiftOrchestrator

__all__ = ["SiftLogger", "SiftOrchestrator"]
