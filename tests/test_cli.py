"""End-to-end tests for the SampleSift CLI.

This module tests the CLI interface using Typer's CliRunner against a
temporary sample library.
"""

from pathlib import Path
from typing import List

import pytest
from typer.testing import CliRunner

from samplesift import __version__
from samplesift.cli import app, expand_home


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CliRunner instance for testing."""
    return CliRunner()


@pytest.fixture
def fake_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at a fresh folder inside temp_dir."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


class TestVersionAndHelp:
    """Tests for --version and --help."""

    def test_version_flag_short(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_flag_long(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_lists_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for option in ("--src", "--keyword", "--dest", "--per-folder", "--dry-run", "--debug", "--max"):
            assert option in result.stdout


class TestRequiredOptions:
    """Missing source or keyword stops before any I/O."""

    def test_missing_src(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        result = cli_runner.invoke(app, ["--keyword", "kick", "--dest", str(temp_dir / "dest")])

        assert result.exit_code == 1
        assert "source path" in result.stdout
        assert "Usage" in result.stdout
        assert not (temp_dir / "dest").exists()

    def test_missing_keyword(
        self, cli_runner: CliRunner, sample_library: Path, temp_dir: Path
    ) -> None:
        result = cli_runner.invoke(
            app, ["--src", str(sample_library), "--dest", str(temp_dir / "dest")]
        )

        assert result.exit_code == 1
        assert "keyword" in result.stdout
        assert not (temp_dir / "dest").exists()

    @pytest.mark.parametrize(
        "args",
        [["--per-folder", "0"], ["-p", "-3"], ["--max", "-1"]],
    )
    def test_invalid_numbers_rejected(
        self, cli_runner: CliRunner, sample_library: Path, args: List[str]
    ) -> None:
        result = cli_runner.invoke(app, ["-s", str(sample_library), "-k", "kick", *args])

        assert result.exit_code == 2


class TestSiftCommand:
    """Full runs through the CLI."""

    def test_example_scenario(
        self, cli_runner: CliRunner, sample_library: Path, temp_dir: Path
    ) -> None:
        dest = temp_dir / "dest"

        result = cli_runner.invoke(
            app,
            ["--src", str(sample_library), "--keyword", "KICK", "--dest", str(dest),
             "--per-folder", "2", "--max", "10"],
        )

        assert result.exit_code == 0, result.output
        assert "Found 2 matching files to copy" in result.stdout
        assert "Your files are in" in result.stdout
        assert sorted(p.name for p in (dest / "group_1").iterdir()) == [
            "KICK_perc.aiff",
            "kick_808.wav",
        ]
        assert not (dest / "group_2").exists()

    def test_dry_run(
        self, cli_runner: CliRunner, many_kicks: List[Path], temp_dir: Path
    ) -> None:
        dest = temp_dir / "dest"

        result = cli_runner.invoke(
            app,
            ["-s", str(many_kicks[0].parent), "-k", "kick", "-d", str(dest), "-p", "3", "--dry-run"],
        )

        assert result.exit_code == 0, result.output
        assert "DRY RUN MODE" in result.stdout
        assert not dest.exists()

    def test_max_option(
        self, cli_runner: CliRunner, many_kicks: List[Path], temp_dir: Path
    ) -> None:
        dest = temp_dir / "dest"

        result = cli_runner.invoke(
            app,
            ["-s", str(many_kicks[0].parent), "-k", "kick", "-d", str(dest), "-p", "2", "-m", "3"],
        )

        assert result.exit_code == 0, result.output
        assert "We reached the max amount of samples to copy: 3" in result.stdout
        assert len(list((dest / "group_1").iterdir())) == 2
        assert len(list((dest / "group_2").iterdir())) == 1
        assert not (dest / "group_3").exists()

    def test_missing_source_directory(
        self, cli_runner: CliRunner, temp_dir: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            ["-s", str(temp_dir / "nowhere"), "-k", "kick", "-d", str(temp_dir / "dest")],
        )

        assert result.exit_code == 1
        assert "Something went wrong looking for matching files" in result.stdout
        assert not (temp_dir / "dest").exists()

    def test_per_file_failure_still_exits_zero(
        self, cli_runner: CliRunner, many_kicks: List[Path], temp_dir: Path
    ) -> None:
        dest = temp_dir / "dest"
        dest.mkdir()
        (dest / "group_1").write_text("blocks the first group")

        result = cli_runner.invoke(
            app,
            ["-s", str(many_kicks[0].parent), "-k", "kick", "-d", str(dest), "-p", "4"],
        )

        assert result.exit_code == 0, result.output
        assert "not copied" in result.stdout
        assert (dest / "group_2").is_dir()

    def test_log_file_option(
        self, cli_runner: CliRunner, sample_library: Path, temp_dir: Path
    ) -> None:
        log_path = temp_dir / "sift.log"

        result = cli_runner.invoke(
            app,
            ["-s", str(sample_library), "-k", "kick", "-d", str(temp_dir / "dest"),
             "--log-file", str(log_path)],
        )

        assert result.exit_code == 0, result.output
        assert "SUMMARY" in log_path.read_text(encoding="utf-8")


class TestHomeExpansion:
    """Leading ~/ handling and the default destination."""

    def test_expand_home_prefix(self) -> None:
        assert expand_home("~/Samples/drums", "/home/dot") == "/home/dot/Samples/drums"

    @pytest.mark.parametrize("path", ["/abs/path", "relative/~/x", "~", "~other/x"])
    def test_expand_home_leaves_other_paths(self, path: str) -> None:
        assert expand_home(path, "/home/dot") == path

    def test_tilde_source_and_default_destination(
        self,
        cli_runner: CliRunner,
        fake_home: Path,
        make_sample,
    ) -> None:
        make_sample(fake_home / "Samples" / "kick_01.wav")

        result = cli_runner.invoke(app, ["-s", "~/Samples", "-k", "kick"])

        assert result.exit_code == 0, result.output
        assert (fake_home / "group_1" / "kick_01.wav").exists()

    def test_tilde_destination(
        self,
        cli_runner: CliRunner,
        fake_home: Path,
        sample_library: Path,
    ) -> None:
        result = cli_runner.invoke(
            app, ["-s", str(sample_library), "-k", "kick", "-d", "~/out"]
        )

        assert result.exit_code == 0, result.output
        assert len(list((fake_home / "out" / "group_1").iterdir())) == 2


class TestDebugAndOutput:
    """--debug tracing, bracketed paths and unusable log files."""

    def test_debug_traces_matches(
        self, cli_runner: CliRunner, sample_library: Path, temp_dir: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            ["-s", str(sample_library), "-k", "kick", "-d", str(temp_dir / "dest"), "--debug"],
        )

        assert result.exit_code == 0, result.output
        assert "match found:" in result.output
        assert "DEBUG" in result.output

    def test_no_tracing_without_debug(
        self, cli_runner: CliRunner, sample_library: Path, temp_dir: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            ["-s", str(sample_library), "-k", "kick", "-d", str(temp_dir / "dest")],
        )

        assert result.exit_code == 0, result.output
        assert "match found:" not in result.output

    def test_bracketed_destination_reported_verbatim(
        self, cli_runner: CliRunner, temp_dir: Path, make_sample
    ) -> None:
        source = temp_dir / "[drums]"
        make_sample(source / "kick.wav")
        dest = temp_dir / "[dry]"

        result = cli_runner.invoke(app, ["-s", str(source), "-k", "kick", "-d", str(dest)])

        assert result.exit_code == 0, result.output
        assert "[dry]" in result.stdout
        assert (dest / "group_1" / "kick.wav").exists()

    def test_directory_log_file_does_not_stop_run(
        self, cli_runner: CliRunner, sample_library: Path, temp_dir: Path
    ) -> None:
        log_dir = temp_dir / "logs"
        log_dir.mkdir()
        dest = temp_dir / "dest"

        result = cli_runner.invoke(
            app,
            ["-s", str(sample_library), "-k", "kick", "-d", str(dest), "-l", str(log_dir)],
        )

        assert result.exit_code == 0, result.output
        assert len(list((dest / "group_1").iterdir())) == 2
