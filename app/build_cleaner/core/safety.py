"""Protected filesystem roots that must never be deleted.

This module defines the fixed deny-list of system locations and the
canonicalize-then-check gate applied to every deletion target right
before it is removed. The list is not configurable.
"""

import os
from pathlib import Path

from build_cleaner.errors import PathNotFoundError, SafetyRejectedError

# Protected roots: the path itself and everything beneath it are refused.
# Filesystem roots ("/", drive anchors) are refused separately by equality.
PROTECTED_ROOTS: tuple[str, ...] = (
    # System binaries
    "/bin",
    "/sbin",
    "/usr",
    # Libraries
    "/lib",
    "/lib32",
    "/lib64",
    # Configuration
    "/etc",
    # Variable state
    "/var",
    # Kernel interfaces and boot
    "/sys",
    "/proc",
    "/dev",
    "/boot",
)

_PROTECTED_PATHS: tuple[Path, ...] = tuple(Path(root) for root in PROTECTED_ROOTS)


def is_filesystem_root(path: Path) -> bool:
    """Check whether a path is the root of its filesystem namespace."""
    return path.anchor != "" and path == Path(path.anchor)


def is_protected(path: Path) -> bool:
    """Check a path against the deny-list without canonicalizing it.

    Args:
        path: Absolute path, ideally already canonical.

    Returns:
        True if the path is a filesystem root, or equals or is nested
        under a protected root.
    """
    if is_filesystem_root(path):
        return True
    return any(path == root or path.is_relative_to(root) for root in _PROTECTED_PATHS)


def _has_parent_segment(path: Path) -> bool:
    """Check whether a path still carries a ``..`` component."""
    return ".." in path.parts or ".." in str(path).split(os.sep)


def check_safety(path: Path | str) -> Path:
    """Validate a deletion target immediately before it is removed.

    Args:
        path: Target as recorded in the deletion plan.

    Returns:
        The canonical path that passed the checks.

    Raises:
        PathNotFoundError: If the path can no longer be canonicalized.
        SafetyRejectedError: If the canonical path is protected or still
            contains a parent-traversal segment.
    """
    try:
        canonical = Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathNotFoundError(path) from e

    if is_protected(canonical):
        raise SafetyRejectedError(canonical, "Cannot delete protected system path")

    if _has_parent_segment(canonical):
        raise SafetyRejectedError(canonical, "Invalid path: contains '..'")

    return canonical
