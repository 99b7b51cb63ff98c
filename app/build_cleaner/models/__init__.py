"""Data models for build-cleaner.

This module exports the value objects exchanged between the walker,
the planner, the executor and the report layer.
"""

from build_cleaner.models.delete import (
    Decision,
    DecisionFn,
    DeletePlan,
    DeleteResult,
    FailedItem,
)
from build_cleaner.models.scan import (
    CleanSpec,
    ExcludeSet,
    ProgressCallback,
    ScanOptions,
    ScanProgress,
    SearchResult,
)

__all__ = [
    "CleanSpec",
    "Decision",
    "DecisionFn",
    "DeletePlan",
    "DeleteResult",
    "ExcludeSet",
    "FailedItem",
    "ProgressCallback",
    "ScanOptions",
    "ScanProgress",
    "SearchResult",
]
