"""
SampleSift - CLI Interface.

A command-line interface for pulling audio samples out of a sample library.
Every .wav/.aiff/.aif file under the source whose name contains the keyword
is copied into numbered folders (group_1, group_2, ...) under the
destination, at most --per-folder files per folder.

Usage Examples:
    # Copy every kick into ~/group_1, ~/group_2, ...
    samplesift --src ~/Samples --keyword kick

    # Smaller folders, custom destination
    samplesift -s ~/Samples -k snare -d ~/Desktop/snares --per-folder 64

    # Preview without copying, with match tracing
    samplesift -s ~/Samples -k hat --dry-run --debug

    # Cap the run and keep a report
    samplesift -s ~/Samples -k clap --max 200 --log-file clap.log
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler

from samplesift import __version__
from samplesift.models import DEFAULT_GROUP_SIZE, DEFAULT_MAX_FILES, SiftConfig
from samplesift.orchestration import SiftOrchestrator
from samplesift.scanning import DiscoveryError
from samplesift.ui import SiftTUI

# Initialize Typer app
app = typer.Typer(
    name="samplesift",
    help="SampleSift - Copy keyword-matched audio samples into numbered group folders.",
    add_completion=False,
)

# Rich consoles for consistent output formatting
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"SampleSift v{__version__}")
        raise typer.Exit()


def validate_group_size(value: int) -> int:
    """
    Validate the number of files per group folder.

    Raises:
        typer.BadParameter: If value is below 1.
    """
    if value < 1:
        raise typer.BadParameter("Files per folder must be at least 1")
    return value


def validate_max_files(value: int) -> int:
    """
    Validate the global cap on copied files.

    Raises:
        typer.BadParameter: If value is negative.
    """
    if value < 0:
        raise typer.BadParameter("Max samples must not be negative")
    return value


def expand_home(path: str, home: str) -> str:
    """
    Replace a leading "~/" with the user's home directory.

    Only that exact prefix is expanded; "~user/..." and "~" alone are left
    untouched.

    Args:
        path: Path string as given on the command line.
        home: The current user's home directory.

    Returns:
        The expanded path string.
    """
    if path.startswith("~/"):
        return home + path[1:]
    return path


def configure_logging(debug: bool) -> None:
    """
    Route the samplesift loggers to stderr through Rich.

    Args:
        debug: If True, log at DEBUG level (match and copy tracing);
            otherwise at INFO.
    """
    package_logger = logging.getLogger("samplesift")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    package_logger.addHandler(
        RichHandler(console=err_console, show_path=False, markup=False)
    )
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)


def _missing_option(ctx: typer.Context, message: str) -> None:
    """Print a missing-option error with a usage hint and exit non-zero."""
    console.print(f"[red]Error:[/red] {message}")
    console.print(ctx.get_usage(), markup=False)
    console.print("[dim]Try 'samplesift --help' for help.[/dim]")
    raise typer.Exit(1)


@app.command()
def sift(
    ctx: typer.Context,
    src: Optional[str] = typer.Option(
        None,
        "--src",
        "-s",
        help="Path to look for samples.",
    ),
    keyword: Optional[str] = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Keyword to look for in sample filenames (case-insensitive).",
    ),
    dest: Optional[str] = typer.Option(
        None,
        "--dest",
        "-d",
        help="Where to put the filtered samples (defaults to your home folder).",
    ),
    per_folder: int = typer.Option(
        DEFAULT_GROUP_SIZE,
        "--per-folder",
        "-p",
        help="Maximum of samples per destination sub folder.",
        callback=validate_group_size,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Report what would be copied without copying anything.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debugging logs.",
    ),
    max_files: int = typer.Option(
        DEFAULT_MAX_FILES,
        "--max",
        "-m",
        help="Max samples to be copied.",
        callback=validate_max_files,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for a run log file.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    Find samples matching a keyword and copy them into numbered group folders.

    Searches --src recursively for .wav, .aiff and .aif files whose names
    contain --keyword, then copies them into <dest>/group_1, <dest>/group_2,
    ... holding at most --per-folder files each. Existing files with the same
    name are overwritten.
    """
    if not src:
        _missing_option(ctx, "You need to pass a source path to search: --src <path where to search>")
    if not keyword:
        _missing_option(ctx, "You need to pass a keyword to search for: --keyword <keyword>")

    try:
        home = str(Path.home())
    except RuntimeError:
        console.print("[red]Error:[/red] Failed to get the user home directory")
        raise typer.Exit(1)

    configure_logging(debug)

    source_path = expand_home(src, home)
    dest_path = expand_home(dest, home) if dest else home

    try:
        config = SiftConfig(
            source=Path(source_path),
            destination=Path(dest_path),
            keyword=keyword,
            group_size=per_folder,
            max_files=max_files,
            dry_run=dry_run,
            debug=debug,
            log_file=log_file,
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if dry_run:
        console.print("[yellow][DRY RUN MODE][/yellow] No files will be copied.\n")

    try:
        orchestrator = SiftOrchestrator(config, tui=SiftTUI(console=console))
        summary = orchestrator.run()

        if summary.files_failed:
            console.print(
                f"\n[yellow]Completed with {summary.files_failed} file(s) not copied.[/yellow]"
            )

    except DiscoveryError as e:
        console.print(f"[red]Error:[/red] Something went wrong looking for matching files - {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user. Files already copied are left in place.[/yellow]")
        raise typer.Exit(130)

    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
