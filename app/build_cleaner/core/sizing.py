"""Byte totals for files and directory trees.

Directory sizes are computed by an independent sub-walk that never
follows symlinks and silently skips anything it cannot read.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def file_size(path: Path, follow_symlinks: bool = True) -> int:
    """Return the metadata length of a file.

    Raises:
        OSError: If the file cannot be stat'ed.
    """
    return os.stat(path, follow_symlinks=follow_symlinks).st_size


def directory_size(path: Path) -> int:
    """Sum the sizes of every regular file transitively inside a directory.

    Symbolic links are neither followed nor counted, including a link
    passed as ``path`` itself: removing it frees nothing of its target.
    Unreadable entries contribute nothing and never raise.

    Args:
        path: Directory to measure.

    Returns:
        Total size in bytes (0 if the directory cannot be read at all).
    """
    if os.path.islink(path):
        return 0

    total = 0
    pending: list[str] = [os.fspath(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError:
                        continue
        except OSError as e:
            logger.debug("Skipping unreadable directory while sizing %s: %s", current, e)

    return total
