"""Shared Rich display functions for matches and results.

Provides the table builders and summary printers used by the scan and
clean commands.
"""

from pathlib import Path
from typing import Any

from rich.table import Table

from build_cleaner.core.report import Stats, format_size
from build_cleaner.core.sizing import file_size
from build_cleaner.models.delete import DeletePlan, DeleteResult
from build_cleaner.models.scan import SearchResult
from build_cleaner.utils.formatting import (
    console,
    create_match_table,
    print_info,
    print_success,
    print_warning,
)


def _file_size_or_zero(path: Path) -> int:
    try:
        return file_size(path)
    except OSError:
        return 0


def match_rows(search_result: SearchResult) -> list[tuple[str, Path, int]]:
    """List matches as (kind, path, size), folders first.

    Folder sizes come from the search; file sizes are read on demand.
    """
    rows: list[tuple[str, Path, int]] = [
        ("folder", path, search_result.folder_sizes.get(path, 0)) for path in search_result.folders
    ]
    rows.extend(("file", path, _file_size_or_zero(path)) for path in search_result.files)
    return rows


def create_matches_table(
    search_result: SearchResult,
    limit: int | None = None,
    title: str = "Matches",
) -> Table:
    """Create a Rich table of matched folders and files.

    Args:
        search_result: Result of a search.
        limit: Maximum number of rows to show.
        title: Table title.

    Returns:
        Rich Table configured for match display.
    """
    table = create_match_table(title)
    rows = match_rows(search_result)
    if limit:
        rows = rows[:limit]

    for kind, path, size in rows:
        style = "match.folder" if kind == "folder" else "match.file"
        table.add_row(f"[{style}]{kind}[/]", f"[{style}]{path}[/]", format_size(size))

    return table


def create_plan_table(
    plan: DeletePlan,
    search_result: SearchResult,
    dry_run: bool = False,
) -> Table:
    """Create a Rich table of planned deletions in execution order."""
    title = "Planned Deletions (dry-run)" if dry_run else "Planned Deletions"
    table = create_match_table(title)
    for path in plan.files:
        size = _file_size_or_zero(path)
        table.add_row("[match.file]file[/]", f"[match.file]{path}[/]", format_size(size))
    for path in plan.dirs:
        size = search_result.folder_sizes.get(path, 0)
        table.add_row("[match.folder]folder[/]", f"[match.folder]{path}[/]", format_size(size))
    return table


def create_failures_table(delete_result: DeleteResult) -> Table:
    """Create a Rich table of items that could not be removed."""
    table = Table(
        title="Failures",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", overflow="fold")
    table.add_column("Category", width=18)
    table.add_column("Error", style="muted")

    for item in (*delete_result.failed_files, *delete_result.failed_dirs):
        table.add_row(f"[error]{item.path}[/]", item.category.value, item.error)

    return table


def search_result_to_dict(search_result: SearchResult, limit: int | None = None) -> dict[str, Any]:
    """Serialize a search result for JSON output or export."""
    rows = match_rows(search_result)
    if limit:
        rows = rows[:limit]
    return {
        "matches": [
            {"type": kind, "path": str(path), "size_bytes": size} for kind, path, size in rows
        ],
        "total_size": search_result.total_size,
        "dirs_scanned": search_result.total_dirs_scanned,
        "files_scanned": search_result.total_files_scanned,
    }


def print_scan_summary(search_result: SearchResult, shown: int | None = None) -> None:
    """Print the one-line summary after a scan."""
    count = search_result.match_count
    console.print(
        f"\n[muted]Found {len(search_result.folders)} folder(s) and {len(search_result.files)} "
        f"file(s) ({format_size(search_result.total_size)} total), "
        f"{search_result.total_dirs_scanned} dirs and "
        f"{search_result.total_files_scanned} files scanned[/]"
    )
    if shown is not None and shown < count:
        console.print(f"[muted](showing {shown} of {count})[/]")


def print_clean_summary(stats: Stats) -> None:
    """Print the summary of a clean run."""
    freed = format_size(stats.space_freed)
    if stats.dry_run:
        print_info(
            f"Dry-run: {stats.files_deleted} file(s) and {stats.dirs_deleted} folder(s) "
            f"would be deleted, {freed} would be freed."
        )
    elif stats.total_failed:
        print_warning(
            f"{stats.total_deleted} deleted, {stats.total_failed} failed, {freed} freed."
        )
    else:
        print_success(
            f"Deleted {stats.files_deleted} file(s) and {stats.dirs_deleted} folder(s), "
            f"{freed} freed."
        )

    if stats.items_skipped:
        print_info(f"{stats.items_skipped} item(s) skipped.")
    console.print(
        f"[muted]Scanned {stats.dirs_scanned} dirs and {stats.files_scanned} files "
        f"in {stats.elapsed_seconds:.2f}s[/]"
    )
