"""Path helpers for build-cleaner.

Provides home-directory expansion and validation of user-supplied root
paths, plus XDG-compliant locations for user configuration.

XDG defaults:
- Config: ~/.config/build-cleaner/
"""

import os
from pathlib import Path

from build_cleaner.errors import InvalidPathError, PathNotFoundError

# Application identifier for directory naming
APP_NAME = "build-cleaner"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/build-cleaner/ (or XDG_CONFIG_HOME/build-cleaner/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/build-cleaner/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def expand_path(path: str | Path) -> Path:
    """Expand a leading ``~`` to the user's home directory.

    Only ``~`` and ``~/...`` are expanded; ``~user`` forms and all other
    paths are returned unchanged.

    Args:
        path: Raw path string.

    Returns:
        Expanded path (not made absolute).
    """
    text = str(path)
    if text == "~":
        return Path.home()
    if text.startswith("~/") or text.startswith("~" + os.sep):
        return Path.home() / text[2:]
    return Path(text)


def normalize_root(path: str | Path) -> Path:
    """Expand and make a root path absolute without resolving symlinks."""
    return Path(os.path.abspath(expand_path(path)))


def validate_path(path: Path) -> None:
    """Validate that a root path exists and is a file or directory.

    Args:
        path: Path to validate.

    Raises:
        PathNotFoundError: If the path does not exist.
        InvalidPathError: If the path is neither a file nor a directory.
    """
    if not path.exists():
        raise PathNotFoundError(path)
    if not path.is_dir() and not path.is_file():
        raise InvalidPathError(path)
