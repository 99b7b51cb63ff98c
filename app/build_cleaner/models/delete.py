"""Deletion domain models.

This module defines the ordered deletion plan, the per-item failure
record, the aggregated result of an execution and the decisions an
interactive collaborator can return.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from build_cleaner.errors import ErrorCategory


class Decision(str, Enum):
    """Answer of an interactive collaborator for one pending item.

    Attributes:
        PROCEED: Remove this item.
        SKIP: Leave this item in place.
        ACCEPT_ALL: Remove this item and every remaining item without asking.
        ABORT: Stop the run immediately.
    """

    PROCEED = "proceed"
    SKIP = "skip"
    ACCEPT_ALL = "accept_all"
    ABORT = "abort"


class DecisionFn(Protocol):
    """Per-item confirmation hook consulted before each removal."""

    def __call__(self, path: Path, is_dir: bool, size: int) -> Decision: ...


@dataclass(frozen=True, slots=True)
class DeletePlan:
    """Deterministic deletion order derived from a search result.

    Attributes:
        files: Matched files, as found.
        dirs: Matched directories, deepest first.
    """

    files: tuple[Path, ...] = ()
    dirs: tuple[Path, ...] = ()

    @property
    def item_count(self) -> int:
        """Number of planned files and directories."""
        return len(self.files) + len(self.dirs)


@dataclass(frozen=True, slots=True)
class FailedItem:
    """A deletion target that could not be removed.

    Attributes:
        path: Path that was operated on.
        error: Human-readable cause.
        category: Classification of the cause.
    """

    path: Path
    error: str
    category: ErrorCategory = ErrorCategory.UNCLASSIFIED


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Outcome of executing a deletion plan.

    Attributes:
        deleted_files: Files removed (or that would be, in dry-run).
        deleted_dirs: Directories removed (or that would be, in dry-run).
        failed_files: Files that could not be removed, with causes.
        failed_dirs: Directories that could not be removed, with causes.
        skipped_files: Files declined by the interactive collaborator.
        skipped_dirs: Directories declined by the interactive collaborator.
        total_size: Bytes freed, or bytes that would be freed in dry-run.
        dry_run: Whether the filesystem was left untouched.
    """

    deleted_files: tuple[Path, ...] = ()
    deleted_dirs: tuple[Path, ...] = ()
    failed_files: tuple[FailedItem, ...] = ()
    failed_dirs: tuple[FailedItem, ...] = ()
    skipped_files: tuple[Path, ...] = ()
    skipped_dirs: tuple[Path, ...] = ()
    total_size: int = 0
    dry_run: bool = False

    @property
    def has_failures(self) -> bool:
        """Whether any item failed."""
        return bool(self.failed_files or self.failed_dirs)

    @property
    def deleted_count(self) -> int:
        """Number of removed files and directories."""
        return len(self.deleted_files) + len(self.deleted_dirs)

    @property
    def failed_count(self) -> int:
        """Number of failed files and directories."""
        return len(self.failed_files) + len(self.failed_dirs)

    @property
    def skipped_count(self) -> int:
        """Number of skipped files and directories."""
        return len(self.skipped_files) + len(self.skipped_dirs)
