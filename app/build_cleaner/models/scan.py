"""Search domain models.

This module defines the immutable inputs of a search (options, clean
patterns, exclusions) and the snapshot it produces.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Traversal and filter options for one invocation.

    Attributes:
        recursive: Descend into subdirectories. When False only the
            direct children of each root are visited.
        follow_symlinks: Resolve and traverse symbolic links.
        max_depth: Maximum traversal depth below a root (None = unlimited).
            Only honored when recursive is True.
        min_size: Smallest file size in bytes a file may have to match.
        max_size: Largest file size in bytes a file may have to match.
        min_age_days: Minimum age in whole days since last modification.
        max_age_days: Maximum age in whole days since last modification.
    """

    recursive: bool = True
    follow_symlinks: bool = False
    max_depth: int | None = None
    min_size: int | None = None
    max_size: int | None = None
    min_age_days: int | None = None
    max_age_days: int | None = None

    def __post_init__(self) -> None:
        """Validate numeric bounds after initialization."""
        for name in ("max_depth", "min_size", "max_size", "min_age_days", "max_age_days"):
            value = getattr(self, name)
            if value is not None and value < 0:
                msg = f"{name} cannot be negative, got {value}"
                raise ValueError(msg)

    @property
    def effective_max_depth(self) -> int | None:
        """Depth limit actually applied by the walker (None = unlimited)."""
        if not self.recursive:
            return 1
        return self.max_depth


@dataclass(frozen=True, slots=True)
class CleanSpec:
    """Ordered folder and file patterns to clean.

    Attributes:
        folders: Folder name patterns, matched exactly against directory
            base names (a trailing separator is ignored).
        files: Glob patterns (``*`` and ``?``) matched against file base names.
    """

    folders: tuple[str, ...] = ()
    files: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Whether nothing is configured to search for."""
        return not self.folders and not self.files


def _normalize(path: Path | str) -> Path:
    """Expand ~ and make a path absolute without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(str(path))))


@dataclass(frozen=True, slots=True)
class ExcludeSet:
    """Absolute paths hidden from the walker together with their subtrees.

    Attributes:
        paths: Normalized absolute exclusion roots.
    """

    paths: tuple[Path, ...] = ()

    @classmethod
    def from_paths(cls, paths: Iterable[Path | str]) -> "ExcludeSet":
        """Build an ExcludeSet, expanding ~ and relative entries.

        Args:
            paths: Exclusion paths as given by configuration.

        Returns:
            ExcludeSet with de-duplicated absolute paths.
        """
        normalized: list[Path] = []
        for path in paths:
            candidate = _normalize(path)
            if candidate not in normalized:
                normalized.append(candidate)
        return cls(paths=tuple(normalized))

    def contains(self, path: Path) -> bool:
        """Check whether a path equals or is nested under any exclusion."""
        return any(path == excluded or path.is_relative_to(excluded) for excluded in self.paths)

    def __len__(self) -> int:
        return len(self.paths)


@dataclass(frozen=True, slots=True)
class ScanProgress:
    """Running counters of a walk at one point in time."""

    files_scanned: int
    dirs_scanned: int
    files_matched: int
    dirs_matched: int
    total_size: int


class ProgressCallback(Protocol):
    """Notification hook invoked synchronously during a walk.

    Counters are non-decreasing across a single walk. Implementations
    must return promptly.
    """

    def __call__(
        self,
        files_scanned: int,
        dirs_scanned: int,
        files_matched: int,
        dirs_matched: int,
        total_size: int,
    ) -> None: ...


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Immutable snapshot produced by one search.

    Attributes:
        folders: Matched directories, pairwise non-nested.
        files: Matched files, none nested under a matched directory.
        total_size: Bytes of matched files plus the recursive size of every
            matched directory, measured at match time.
        total_dirs_scanned: Directories visited, matched or not.
        total_files_scanned: Files visited, matched or not.
        folder_sizes: Size measured for each matched directory.
    """

    folders: tuple[Path, ...] = ()
    files: tuple[Path, ...] = ()
    total_size: int = 0
    total_dirs_scanned: int = 0
    total_files_scanned: int = 0
    folder_sizes: dict[Path, int] = field(default_factory=dict, compare=False)

    @property
    def is_empty(self) -> bool:
        """Whether nothing matched."""
        return not self.folders and not self.files

    @property
    def match_count(self) -> int:
        """Number of matched folders and files."""
        return len(self.folders) + len(self.files)
