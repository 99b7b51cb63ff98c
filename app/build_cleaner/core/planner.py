"""Deletion planning.

Turns a search result into a deterministic deletion order: files as
found, directories deepest first.
"""

from build_cleaner.models.delete import DeletePlan
from build_cleaner.models.scan import SearchResult


def create_delete_plan(search_result: SearchResult) -> DeletePlan:
    """Create a deletion plan from a search result.

    Directories are ordered by number of path components, descending.
    The sort is stable, so directories of equal depth keep their
    discovery order.

    Args:
        search_result: Result of a search.

    Returns:
        DeletePlan with files unchanged and directories deepest first.
    """
    dirs = sorted(search_result.folders, key=lambda path: len(path.parts), reverse=True)
    return DeletePlan(files=tuple(search_result.files), dirs=tuple(dirs))
