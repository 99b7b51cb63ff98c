"""Run statistics and human-readable sizes.

Collects the counters of a search and an optional deletion into a single
Stats record used by the CLI summary.
"""

import time
from dataclasses import dataclass

from build_cleaner.models.delete import DeleteResult
from build_cleaner.models.scan import SearchResult

SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")


@dataclass(frozen=True, slots=True)
class Stats:
    """Summary of one cleanup run.

    Attributes:
        files_scanned: Files visited by the walker.
        dirs_scanned: Directories visited by the walker.
        files_deleted: Files removed (or that would be, in dry-run).
        dirs_deleted: Directories removed (or that would be, in dry-run).
        files_failed: Files that could not be removed.
        dirs_failed: Directories that could not be removed.
        items_skipped: Items declined interactively.
        space_freed: Bytes freed, or bytes that would be freed in dry-run.
        elapsed_seconds: Wall-clock duration of the run.
        dry_run: Whether the filesystem was left untouched.
    """

    files_scanned: int = 0
    dirs_scanned: int = 0
    files_deleted: int = 0
    dirs_deleted: int = 0
    files_failed: int = 0
    dirs_failed: int = 0
    items_skipped: int = 0
    space_freed: int = 0
    elapsed_seconds: float = 0.0
    dry_run: bool = False

    @property
    def total_deleted(self) -> int:
        return self.files_deleted + self.dirs_deleted

    @property
    def total_failed(self) -> int:
        return self.files_failed + self.dirs_failed


def collect_stats(
    search_result: SearchResult,
    delete_result: DeleteResult | None = None,
    started_at: float | None = None,
) -> Stats:
    """Build run statistics.

    Args:
        search_result: Result of the search phase.
        delete_result: Result of the deletion phase, if one ran.
        started_at: ``time.monotonic()`` value taken when the run started.

    Returns:
        Stats for the run. Without a delete result only the scan counters
        and the matched size are filled in.
    """
    elapsed = time.monotonic() - started_at if started_at is not None else 0.0

    if delete_result is None:
        return Stats(
            files_scanned=search_result.total_files_scanned,
            dirs_scanned=search_result.total_dirs_scanned,
            space_freed=search_result.total_size,
            elapsed_seconds=elapsed,
            dry_run=True,
        )

    return Stats(
        files_scanned=search_result.total_files_scanned,
        dirs_scanned=search_result.total_dirs_scanned,
        files_deleted=len(delete_result.deleted_files),
        dirs_deleted=len(delete_result.deleted_dirs),
        files_failed=len(delete_result.failed_files),
        dirs_failed=len(delete_result.failed_dirs),
        items_skipped=delete_result.skipped_count,
        space_freed=delete_result.total_size,
        elapsed_seconds=elapsed,
        dry_run=delete_result.dry_run,
    )


def format_size(size_bytes: int) -> str:
    """Format a byte count with two decimals in 1024-based units.

    Examples:
        >>> format_size(512)
        '512.00 B'
        >>> format_size(1536)
        '1.50 KB'
    """
    size = float(size_bytes)
    for unit in SIZE_UNITS[:-1]:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} {SIZE_UNITS[-1]}"
