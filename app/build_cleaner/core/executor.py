"""Deletion executor.

Applies a deletion plan item by item with dry-run support, a safety
check immediately before every removal, optional interactive per-item
confirmation, and failures isolated per item. Removal either moves the
target to the trash (Send2Trash) or deletes it permanently.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from send2trash import send2trash

from build_cleaner.core.safety import check_safety
from build_cleaner.core.sizing import directory_size, file_size
from build_cleaner.errors import CleanError, OperationCancelledError, classify_os_error
from build_cleaner.models.delete import (
    Decision,
    DecisionFn,
    DeletePlan,
    DeleteResult,
    FailedItem,
)
from build_cleaner.models.scan import SearchResult

logger = logging.getLogger(__name__)


def remove_path(path: Path, use_trash: bool = False) -> None:
    """Remove a file or directory tree.

    Args:
        path: Target to remove.
        use_trash: Move the target to the platform trash instead of
            deleting it permanently.

    Raises:
        OSError: If the removal fails.
    """
    if use_trash:
        send2trash(os.fspath(path))
        return

    # Directories (but not symlinks to directories)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
        return

    path.unlink()


@dataclass
class _Outcome:
    """Mutable accumulator turned into a DeleteResult at the end of a run."""

    dry_run: bool
    deleted_files: list[Path] = field(default_factory=list)
    deleted_dirs: list[Path] = field(default_factory=list)
    failed_files: list[FailedItem] = field(default_factory=list)
    failed_dirs: list[FailedItem] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)
    skipped_dirs: list[Path] = field(default_factory=list)
    total_size: int = 0

    def freeze(self) -> DeleteResult:
        return DeleteResult(
            deleted_files=tuple(self.deleted_files),
            deleted_dirs=tuple(self.deleted_dirs),
            failed_files=tuple(self.failed_files),
            failed_dirs=tuple(self.failed_dirs),
            skipped_files=tuple(self.skipped_files),
            skipped_dirs=tuple(self.skipped_dirs),
            total_size=self.total_size,
            dry_run=self.dry_run,
        )


class DeleteExecutor:
    """Executes deletion plans.

    Attributes:
        _dry_run: If True, report what would be deleted without deleting.
        _use_trash: If True, move targets to the trash instead of deleting.
        _decide: Optional per-item confirmation hook (ignored in dry-run).
    """

    def __init__(
        self,
        dry_run: bool = False,
        use_trash: bool = False,
        decide: DecisionFn | None = None,
    ) -> None:
        """Initialize the DeleteExecutor.

        Args:
            dry_run: If True, report what would be deleted without deleting.
            use_trash: If True, move targets to the trash.
            decide: Callback consulted before each removal.
        """
        self._dry_run = dry_run
        self._use_trash = use_trash
        self._decide = decide

    @property
    def dry_run(self) -> bool:
        """Check if executor is in dry-run mode."""
        return self._dry_run

    def execute(self, plan: DeletePlan, search_result: SearchResult) -> DeleteResult:
        """Execute a deletion plan.

        Files are processed first, then directories in plan order. A
        failure is recorded against its item and never stops the loop.

        Args:
            plan: Plan created from search_result.
            search_result: Search the plan was derived from; its total is
                reported as-is in dry-run.

        Returns:
            DeleteResult describing every planned item.

        Raises:
            OperationCancelledError: If the decision hook answers ABORT. The
                partial result is attached; removed items stay removed.
        """
        if self._dry_run:
            return self._execute_dry_run(plan, search_result)

        outcome = _Outcome(dry_run=False)
        accept_all = self._decide is None

        for is_dir, targets in ((False, plan.files), (True, plan.dirs)):
            for path in targets:
                accept_all = self._process(path, is_dir, outcome, accept_all)

        result = outcome.freeze()
        logger.info(
            "Deletion finished: %d removed, %d failed, %d skipped, %d bytes freed",
            result.deleted_count,
            result.failed_count,
            result.skipped_count,
            result.total_size,
        )
        return result

    def _execute_dry_run(self, plan: DeletePlan, search_result: SearchResult) -> DeleteResult:
        """Report every planned item as deleted without touching anything."""
        for path in (*plan.files, *plan.dirs):
            logger.info("Dry-run: would delete %s", path)
        return DeleteResult(
            deleted_files=plan.files,
            deleted_dirs=plan.dirs,
            total_size=search_result.total_size,
            dry_run=True,
        )

    def _process(self, path: Path, is_dir: bool, outcome: _Outcome, accept_all: bool) -> bool:
        """Run one item through safety check, confirmation and removal.

        Returns:
            The updated accept-all flag.
        """
        failed = outcome.failed_dirs if is_dir else outcome.failed_files

        try:
            check_safety(path)
            size = directory_size(path) if is_dir else file_size(path, follow_symlinks=False)
        except CleanError as e:
            logger.warning("Refusing to delete %s: %s", path, e)
            failed.append(FailedItem(path=path, error=str(e), category=e.category))
            return accept_all
        except OSError as e:
            error = classify_os_error(e, path)
            failed.append(FailedItem(path=path, error=str(error), category=error.category))
            return accept_all

        if not accept_all and self._decide is not None:
            decision = self._decide(path, is_dir, size)
            if decision == Decision.ABORT:
                logger.info("Deletion aborted by user at %s", path)
                raise OperationCancelledError(outcome.freeze())
            if decision == Decision.SKIP:
                (outcome.skipped_dirs if is_dir else outcome.skipped_files).append(path)
                return accept_all
            if decision == Decision.ACCEPT_ALL:
                accept_all = True

        try:
            remove_path(path, use_trash=self._use_trash)
        except OSError as e:
            error = classify_os_error(e, path)
            logger.warning("Failed to delete %s: %s", path, e)
            failed.append(FailedItem(path=path, error=str(e), category=error.category))
            return accept_all

        outcome.total_size += size
        (outcome.deleted_dirs if is_dir else outcome.deleted_files).append(path)
        logger.debug("Deleted %s (%d bytes)", path, size)
        return accept_all
