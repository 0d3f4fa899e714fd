"""Pytest fixtures for SampleSift tests."""

import io
import os
import tempfile
from pathlib import Path
from typing import Callable, Generator, List, Optional

import pytest
from rich.console import Console

from samplesift.models import SiftConfig
from samplesift.ui import SiftTUI

# Minimal stand-in for audio payload; content only needs to be distinct per file
WAV_HEADER = b"RIFF\x24\x00\x00\x00WAVEfmt "


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without filesystem-wide setup")
    config.addinivalue_line("markers", "integration: end-to-end tests over a real temp tree")


def running_as_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_sample() -> Callable[..., Path]:
    """Return a helper that writes a sample file, creating parent folders.

    The default content embeds the filename so every sample is distinct.
    """
    def _make(path: Path, content: Optional[bytes] = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if content is not None else WAV_HEADER + path.name.encode())
        return path

    return _make


@pytest.fixture
def sample_library(temp_dir: Path, make_sample: Callable[..., Path]) -> Path:
    """Create the four-file library used as the canonical example.

    Creates:
        library/
        ├── kick_808.wav
        ├── KICK_perc.aiff
        ├── snare.wav
        └── kick.txt

    Returns:
        Path to the library directory.
    """
    library = temp_dir / "library"
    for name in ("kick_808.wav", "KICK_perc.aiff", "snare.wav", "kick.txt"):
        make_sample(library / name)
    return library


@pytest.fixture
def nested_library(temp_dir: Path, make_sample: Callable[..., Path]) -> Path:
    """Create a nested library exercising walk order and both filters.

    Creates:
        nested/
        ├── a_kick.wav              match
        ├── drums/
        │   ├── Kick_01.AIF         match
        │   └── hats/
        │       ├── hat.wav
        │       └── kick_hat.aiff   match
        ├── kick.wav.bak
        ├── notes/
        │   └── kick                (no extension)
        └── z_kick.WAV              match

    Returns:
        Path to the nested directory.
    """
    base = temp_dir / "nested"
    make_sample(base / "a_kick.wav")
    make_sample(base / "drums" / "Kick_01.AIF")
    make_sample(base / "drums" / "hats" / "hat.wav")
    make_sample(base / "drums" / "hats" / "kick_hat.aiff")
    make_sample(base / "kick.wav.bak")
    make_sample(base / "notes" / "kick")
    make_sample(base / "z_kick.WAV")
    return base


@pytest.fixture
def many_kicks(temp_dir: Path, make_sample: Callable[..., Path]) -> List[Path]:
    """Create kick_00.wav .. kick_06.wav in one folder, returned in walk order."""
    folder = temp_dir / "kicks"
    return [make_sample(folder / f"kick_{i:02d}.wav") for i in range(7)]


@pytest.fixture
def make_config(temp_dir: Path) -> Callable[..., SiftConfig]:
    """Return a helper building a SiftConfig with test-friendly defaults."""
    def _make(source: Path, **overrides) -> SiftConfig:
        values = {
            "destination": temp_dir / "dest",
            "keyword": "kick",
        }
        values.update(overrides)
        return SiftConfig(source=source, **values)

    return _make


@pytest.fixture
def tui_with_output() -> tuple[SiftTUI, io.StringIO]:
    """Create a SiftTUI writing to a StringIO.

    Returns:
        Tuple of (SiftTUI instance, StringIO for reading output).
    """
    output = io.StringIO()
    console = Console(file=output, width=200)
    return SiftTUI(console=console), output
