"""Error taxonomy for build-cleaner.

Every failure the core reports, whether it aborts the whole run or is
recorded against a single deletion target, is expressed as a subclass
of CleanError carrying an ErrorCategory.
"""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from build_cleaner.models.delete import DeleteResult


class ErrorCategory(str, Enum):
    """Classification of a cleanup failure.

    Attributes:
        PATH_NOT_FOUND: The path no longer exists or cannot be resolved.
        PERMISSION_DENIED: The operating system refused access.
        FILE_IN_USE: The path is busy or locked by another process.
        SAFETY_REJECTED: The safety validator refused the target.
        CANCELLED: The user aborted the run.
        INVALID_SPEC: Nothing was configured to search for.
        CONFIG: A configuration file could not be read or parsed.
        UNCLASSIFIED: Any other failure.
    """

    PATH_NOT_FOUND = "path_not_found"
    PERMISSION_DENIED = "permission_denied"
    FILE_IN_USE = "file_in_use"
    SAFETY_REJECTED = "safety_rejected"
    CANCELLED = "cancelled"
    INVALID_SPEC = "invalid_spec"
    CONFIG = "config"
    UNCLASSIFIED = "unclassified"


class CleanError(Exception):
    """Base exception for build-cleaner errors."""

    category: ErrorCategory = ErrorCategory.UNCLASSIFIED


class PathNotFoundError(CleanError):
    """Raised when a path does not exist or cannot be canonicalized."""

    category = ErrorCategory.PATH_NOT_FOUND

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Path not found: {path}")


class InvalidPathError(CleanError):
    """Raised when a root path is neither a file nor a directory."""

    category = ErrorCategory.PATH_NOT_FOUND

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Path is not a file or directory: {path}")


class PermissionDeniedError(CleanError):
    """Raised when the operating system denies access to a path."""

    category = ErrorCategory.PERMISSION_DENIED

    def __init__(self, path: Path | str, detail: str | None = None) -> None:
        self.path = Path(path)
        message = f"Permission denied: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class FileInUseError(CleanError):
    """Raised when a path is busy or locked."""

    category = ErrorCategory.FILE_IN_USE

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"File in use: {path}")


class SafetyRejectedError(CleanError):
    """Raised when the safety validator refuses a deletion target."""

    category = ErrorCategory.SAFETY_REJECTED

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class UnclassifiedError(CleanError):
    """Raised for failures outside the other categories."""

    category = ErrorCategory.UNCLASSIFIED


class OperationCancelledError(CleanError):
    """Raised when the user aborts an interactive run.

    Attributes:
        partial_result: What had been processed before the abort. Items
            already removed stay removed.
    """

    category = ErrorCategory.CANCELLED

    def __init__(self, partial_result: DeleteResult | None = None) -> None:
        self.partial_result = partial_result
        super().__init__("Operation cancelled by user")


class ConfigError(CleanError):
    """Base exception for configuration errors."""

    category = ErrorCategory.CONFIG


class ConfigParseError(ConfigError):
    """Raised when a configuration file cannot be read or parsed."""


_EMPTY_SPEC_MESSAGE = "At least one folder or file pattern must be specified"


class InvalidSpecError(ConfigError):
    """Raised when no folder or file pattern is configured."""

    category = ErrorCategory.INVALID_SPEC

    def __init__(self, message: str = _EMPTY_SPEC_MESSAGE) -> None:
        super().__init__(message)


_IN_USE_ERRNOS = frozenset({errno.EBUSY, errno.ETXTBSY})


def classify_os_error(exc: OSError, path: Path | str) -> CleanError:
    """Map an OSError raised while touching a path into the taxonomy.

    Args:
        exc: The operating system error.
        path: Path the operation was acting on.

    Returns:
        The matching CleanError instance (not raised).
    """
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        return PathNotFoundError(path)
    if isinstance(exc, PermissionError) or exc.errno in (errno.EACCES, errno.EPERM):
        return PermissionDeniedError(path, exc.strerror)
    if exc.errno in _IN_USE_ERRNOS:
        return FileInUseError(path)
    return UnclassifiedError(f"{path}: {exc}")
