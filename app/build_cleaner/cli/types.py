"""Shared types and helpers for CLI commands.

This module provides the enums, option aliases and run helpers used by
both the scan and the clean command.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from build_cleaner.core.config import Config, load_config
from build_cleaner.core.report import format_size
from build_cleaner.core.walker import SearchEngine
from build_cleaner.errors import CleanError
from build_cleaner.models.scan import ScanProgress, SearchResult
from build_cleaner.utils.formatting import err_console, print_error


class OutputFormat(str, Enum):
    """Output format options for scan results."""

    TABLE = "table"
    JSON = "json"


PathsArgument = Annotated[
    list[Path] | None,
    typer.Argument(help="Project roots to search (defaults to the current directory)."),
]
CleanOption = Annotated[
    list[str] | None,
    typer.Option(
        "--clean",
        "-c",
        help="Pattern to clean; a trailing '/' marks a folder (e.g. node_modules/, *.log).",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Configuration file (TOML, YAML or JSON)."),
]
ExcludeOption = Annotated[
    list[Path] | None,
    typer.Option("--exclude", "-x", help="Path to exclude with its subtree."),
]


def resolve_roots(paths: list[Path] | None) -> list[Path]:
    """Return the given roots, or the current directory when none were given."""
    return list(paths) if paths else [Path(".")]


def load_config_or_exit(
    roots: list[Path],
    config_file: Path | None,
    clean_patterns: list[str] | None,
    excludes: list[Path] | None,
) -> Config:
    """Load the effective configuration, exiting with code 1 on errors."""
    try:
        return load_config(
            roots[0],
            config_file=config_file,
            cli_patterns=clean_patterns,
            extra_excludes=excludes,
        )
    except CleanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def format_progress(progress: ScanProgress) -> str:
    """Render a progress snapshot for the status line."""
    matches = progress.dirs_matched + progress.files_matched
    return (
        f"[info]Scanning...[/] {progress.dirs_scanned} dirs, {progress.files_scanned} files, "
        f"{matches} matches ({format_size(progress.total_size)})"
    )


def run_search(roots: list[Path], config: Config, quiet: bool = False) -> SearchResult:
    """Search the roots, showing a status line unless quiet.

    Exits with code 1 when a root is invalid or nothing is configured.
    """
    spec = config.clean_spec()
    options = config.scan_options()
    exclude = config.exclude_set()

    try:
        if quiet:
            return SearchEngine(spec, options, exclude).search(roots)

        with err_console.status("[info]Scanning...[/]") as status:

            def on_progress(
                files_scanned: int,
                dirs_scanned: int,
                files_matched: int,
                dirs_matched: int,
                total_size: int,
            ) -> None:
                snapshot = ScanProgress(
                    files_scanned, dirs_scanned, files_matched, dirs_matched, total_size
                )
                status.update(format_progress(snapshot))

            return SearchEngine(spec, options, exclude, progress=on_progress).search(roots)
    except CleanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
