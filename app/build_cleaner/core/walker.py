"""Pruning walker that finds clean targets beneath project roots.

Traverses each root depth-first, applying exclusions, the matched-folder
prune filter, size/age filters and the clean patterns. A directory whose
name matches a folder pattern is recorded, measured once by a dedicated
sub-walk and never descended into.
"""

import logging
import os
import stat
import threading
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from build_cleaner.core.matcher import first_match, glob_match, match_folder
from build_cleaner.core.paths import normalize_root, validate_path
from build_cleaner.core.sizing import directory_size
from build_cleaner.errors import InvalidSpecError
from build_cleaner.models.scan import (
    CleanSpec,
    ExcludeSet,
    ProgressCallback,
    ScanOptions,
    SearchResult,
)

logger = logging.getLogger(__name__)

# Progress is reported every N scanned files / directories and on every match
FILES_PROGRESS_INTERVAL = 1000
DIRS_PROGRESS_INTERVAL = 100

SECONDS_PER_DAY = 86400


class MatchedFolderSet:
    """Canonical paths of folders matched during one walk.

    Grows monotonically. A recorded folder is visible to every later
    prune check, including checks made from other threads.
    """

    def __init__(self) -> None:
        self._paths: set[Path] = set()
        self._lock = threading.Lock()

    def add(self, path: Path) -> bool:
        """Record a matched folder.

        Returns:
            True if the path was new, False if it was already recorded.
        """
        with self._lock:
            if path in self._paths:
                return False
            self._paths.add(path)
            return True

    def is_pruned(self, path: Path) -> bool:
        """Check whether a path lies strictly beneath a recorded folder."""
        with self._lock:
            if not self._paths:
                return False
            return any(parent in self._paths for parent in path.parents)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)


def check_size(size: int, min_size: int | None, max_size: int | None) -> bool:
    """Check a file size against optional inclusive bounds."""
    if min_size is not None and size < min_size:
        return False
    if max_size is not None and size > max_size:
        return False
    return True


def check_age(
    mtime: float,
    min_age_days: int | None,
    max_age_days: int | None,
    now: float | None = None,
) -> bool:
    """Check a modification time against optional age bounds in whole days.

    Timestamps in the future cannot be aged and always pass.
    """
    if min_age_days is None and max_age_days is None:
        return True

    current = time.time() if now is None else now
    if mtime > current:
        return True

    age_days = int((current - mtime) // SECONDS_PER_DAY)
    if min_age_days is not None and age_days < min_age_days:
        return False
    if max_age_days is not None and age_days > max_age_days:
        return False
    return True


@dataclass
class _WalkState:
    """Mutable accumulators of a single search."""

    folders: list[Path] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    folder_sizes: dict[Path, int] = field(default_factory=dict)
    total_size: int = 0
    dirs_scanned: int = 0
    files_scanned: int = 0
    matched: MatchedFolderSet = field(default_factory=MatchedFolderSet)
    visited_dirs: set[tuple[int, int]] = field(default_factory=set)
    # Canonical directory -> shallowest depth it was visited at, across roots
    dir_depths: dict[Path, int] = field(default_factory=dict)
    seen_files: set[Path] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class _Node:
    """A path waiting to be visited."""

    path: Path
    depth: int
    canonical_parent: Path | None


class SearchEngine:
    """Finds folders and files matching a CleanSpec beneath root paths.

    Overlapping roots are walked as one tree: every folder and file is
    reported and counted once. Without ``follow_symlinks`` a symbolic link
    below a root is skipped, so a link named like a pattern never matches.

    Args:
        spec: Folder and file patterns to match.
        options: Traversal and filter options.
        exclude: Paths hidden from the walk together with their subtrees.
        progress: Optional callback receiving running counters.
    """

    def __init__(
        self,
        spec: CleanSpec,
        options: ScanOptions | None = None,
        exclude: ExcludeSet | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self._spec = spec
        self._options = options or ScanOptions()
        self._exclude = exclude or ExcludeSet()
        self._progress = progress

    def search(self, roots: Iterable[Path | str]) -> SearchResult:
        """Walk every root and collect matches.

        Args:
            roots: Root paths (files or directories). ``~`` is expanded.

        Returns:
            Immutable SearchResult snapshot.

        Raises:
            InvalidSpecError: If no folder or file pattern is configured.
            PathNotFoundError: If a root does not exist.
            InvalidPathError: If a root is neither a file nor a directory.
        """
        if self._spec.is_empty:
            raise InvalidSpecError()

        normalized = [normalize_root(root) for root in roots]
        for root in normalized:
            validate_path(root)

        state = _WalkState()
        for root in normalized:
            logger.debug("Searching %s", root)
            self._walk_root(root, state)
            self._notify(state)

        logger.info(
            "Search finished: %d folders, %d files matched (%d dirs, %d files scanned)",
            len(state.folders),
            len(state.files),
            state.dirs_scanned,
            state.files_scanned,
        )

        return SearchResult(
            folders=tuple(state.folders),
            files=tuple(state.files),
            total_size=state.total_size,
            total_dirs_scanned=state.dirs_scanned,
            total_files_scanned=state.files_scanned,
            folder_sizes=dict(state.folder_sizes),
        )

    def _walk_root(self, root: Path, state: _WalkState) -> None:
        """Depth-first traversal of one root."""
        pending: list[_Node] = [_Node(path=root, depth=0, canonical_parent=None)]

        while pending:
            node = pending.pop()
            children = self._visit(node, state)
            # Reversed so that entries are visited in name order
            pending.extend(reversed(children))

    def _visit(self, node: _Node, state: _WalkState) -> list[_Node]:
        """Visit one node and return the children to traverse next."""
        path = node.path

        try:
            info = os.lstat(path)
            is_link = stat.S_ISLNK(info.st_mode)
            if is_link:
                # The root itself is always resolved, like an explicit argument
                if node.depth > 0 and not self._options.follow_symlinks:
                    return []
                info = os.stat(path)
        except OSError as e:
            logger.debug("Skipping unreadable entry %s: %s", path, e)
            return []

        if node.canonical_parent is None or is_link:
            canonical = Path(os.path.realpath(path))
        else:
            canonical = node.canonical_parent / path.name

        if self._exclude.contains(path) or self._exclude.contains(canonical):
            return []
        if state.matched.is_pruned(canonical):
            return []

        if stat.S_ISDIR(info.st_mode):
            return self._visit_directory(node, canonical, info, state)
        if stat.S_ISREG(info.st_mode):
            self._visit_file(path, canonical, info, state)
        return []

    def _visit_directory(
        self,
        node: _Node,
        canonical: Path,
        info: os.stat_result,
        state: _WalkState,
    ) -> list[_Node]:
        """Count a directory, match it, and list its children if not matched.

        A directory already visited from an earlier root at the same or a
        shallower depth is skipped. Reached shallower, it is listed again
        so a depth limit does not hide entries, but not counted twice.
        """
        previous_depth = state.dir_depths.get(canonical)
        if previous_depth is not None and previous_depth <= node.depth:
            return []
        state.dir_depths[canonical] = node.depth
        if previous_depth is None:
            state.dirs_scanned += 1
        path = node.path

        if first_match(self._spec.folders, path.name, match_folder) is not None:
            if state.matched.add(canonical):
                size = directory_size(path)
                state.folders.append(path)
                state.folder_sizes[path] = size
                state.total_size += size
                logger.debug("Matched folder %s (%d bytes)", path, size)
                self._notify(state)
            return []

        if state.dirs_scanned % DIRS_PROGRESS_INTERVAL == 0:
            self._notify(state)

        max_depth = self._options.effective_max_depth
        if max_depth is not None and node.depth >= max_depth:
            return []

        if self._options.follow_symlinks and previous_depth is None:
            key = (info.st_dev, info.st_ino)
            if key in state.visited_dirs:
                logger.debug("Skipping already visited directory (symlink loop?) %s", path)
                return []
            state.visited_dirs.add(key)

        try:
            with os.scandir(path) as entries:
                names = sorted(entry.name for entry in entries)
        except OSError as e:
            logger.debug("Cannot list directory %s: %s", path, e)
            return []

        depth = node.depth + 1
        return [_Node(path=path / name, depth=depth, canonical_parent=canonical) for name in names]

    def _visit_file(
        self,
        path: Path,
        canonical: Path,
        info: os.stat_result,
        state: _WalkState,
    ) -> None:
        """Count a file, apply size/age filters and match it."""
        if canonical in state.seen_files:
            return
        state.seen_files.add(canonical)
        state.files_scanned += 1
        options = self._options
        size = info.st_size

        accepted = check_size(size, options.min_size, options.max_size) and check_age(
            info.st_mtime, options.min_age_days, options.max_age_days
        )

        if accepted and first_match(self._spec.files, path.name, glob_match) is not None:
            state.files.append(path)
            state.total_size += size
            logger.debug("Matched file %s (%d bytes)", path, size)
            self._notify(state)
        elif state.files_scanned % FILES_PROGRESS_INTERVAL == 0:
            self._notify(state)

    def _notify(self, state: _WalkState) -> None:
        """Invoke the progress callback with the running counters."""
        if self._progress is None:
            return
        self._progress(
            state.files_scanned,
            state.dirs_scanned,
            len(state.files),
            len(state.folders),
            state.total_size,
        )

    @staticmethod
    def walk_path(root: Path | str, options: ScanOptions | None = None) -> Iterator[Path]:
        """Yield every path beneath a root honoring depth and symlink policy.

        No matching, exclusion or pruning is applied. Unreadable entries
        are skipped.

        Args:
            root: Root path (yielded first).
            options: Traversal options (defaults to recursive, no symlinks).

        Yields:
            Paths in depth-first, name-sorted order.
        """
        opts = options or ScanOptions()
        max_depth = opts.effective_max_depth
        pending: list[tuple[Path, int]] = [(normalize_root(root), 0)]
        visited: set[tuple[int, int]] = set()

        while pending:
            path, depth = pending.pop()
            try:
                info = os.lstat(path)
                if stat.S_ISLNK(info.st_mode):
                    if depth > 0 and not opts.follow_symlinks:
                        yield path
                        continue
                    info = os.stat(path)
            except OSError:
                continue

            yield path

            if not stat.S_ISDIR(info.st_mode):
                continue
            if max_depth is not None and depth >= max_depth:
                continue
            key = (info.st_dev, info.st_ino)
            if key in visited:
                continue
            visited.add(key)

            try:
                with os.scandir(path) as entries:
                    names = sorted(entry.name for entry in entries)
            except OSError:
                continue
            pending.extend((path / name, depth + 1) for name in reversed(names))


def search(
    roots: Iterable[Path | str],
    spec: CleanSpec,
    options: ScanOptions | None = None,
    exclude: ExcludeSet | None = None,
    progress: ProgressCallback | None = None,
) -> SearchResult:
    """Convenience wrapper around SearchEngine.search."""
    return SearchEngine(spec, options=options, exclude=exclude, progress=progress).search(roots)
