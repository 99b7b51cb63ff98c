"""Scan command implementation.

Searches project roots for clean targets without removing anything.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from build_cleaner.cli.display import (
    create_matches_table,
    print_scan_summary,
    search_result_to_dict,
)
from build_cleaner.cli.types import (
    CleanOption,
    ConfigOption,
    ExcludeOption,
    OutputFormat,
    PathsArgument,
    load_config_or_exit,
    resolve_roots,
    run_search,
)
from build_cleaner.models.scan import SearchResult
from build_cleaner.utils.formatting import console, print_error, print_info, print_success


def scan(
    ctx: typer.Context,
    paths: PathsArgument = None,
    clean_patterns: CleanOption = None,
    config_file: ConfigOption = None,
    excludes: ExcludeOption = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            min=1,
            help="Limit number of results shown.",
        ),
    ] = None,
) -> None:
    """Find build artifacts and caches without deleting them."""
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    roots = resolve_roots(paths)

    config = load_config_or_exit(roots, config_file, clean_patterns, excludes)
    result = run_search(roots, config, quiet=quiet or output_format == OutputFormat.JSON)

    # Export all matches, not limited
    if export_path is not None:
        _export_results(result, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(search_result_to_dict(result, limit)))
        return

    if result.is_empty:
        print_success("Nothing to clean.")
        return

    console.print(create_matches_table(result, limit))
    shown = min(limit, result.match_count) if limit else None
    print_scan_summary(result, shown)


def _export_results(result: SearchResult, export_path: Path) -> None:
    """Export search results to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(search_result_to_dict(result), indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
