"""Name matching for folder and file clean patterns.

Folder patterns are compared literally against a directory's base name
(a trailing separator is ignored). File patterns are globs over the base
name supporting ``*`` (any run of characters, possibly empty) and ``?``
(exactly one character). No other glob syntax is recognized: brackets,
backslashes and dots are literals.
"""

from collections.abc import Callable, Iterable

FOLDER_SUFFIXES: tuple[str, ...] = ("/", "\\")


def strip_folder_suffix(pattern: str) -> str:
    """Remove trailing path separators from a folder pattern."""
    return pattern.rstrip("".join(FOLDER_SUFFIXES))


def is_folder_pattern(pattern: str) -> bool:
    """Check whether a raw pattern denotes a folder rule (trailing separator)."""
    return pattern.endswith(FOLDER_SUFFIXES)


def match_folder(pattern: str, name: str) -> bool:
    """Match a folder pattern against a directory base name.

    Args:
        pattern: Folder name, optionally with a trailing separator.
        name: Directory base name.

    Returns:
        True if the names are equal once the separator is stripped.
    """
    return strip_folder_suffix(pattern) == name


def glob_match(pattern: str, text: str) -> bool:
    """Match a ``*``/``?`` glob against the whole of text.

    Evaluates the same semantics as a backtracking matcher (``*`` may
    consume any number of characters, ``?`` and literals consume exactly
    one) row by row over the pattern, so the cost stays
    O(len(pattern) * len(text)) however many stars there are.

    Args:
        pattern: Glob pattern.
        text: Base name to test.

    Returns:
        True if pattern and text are exhausted together.
    """
    n = len(text)
    # reachable[j]: the pattern prefix consumed so far can match text[:j]
    reachable = [False] * (n + 1)
    reachable[0] = True

    for token in pattern:
        if token == "*":
            for j in range(1, n + 1):
                reachable[j] = reachable[j] or reachable[j - 1]
        else:
            for j in range(n, 0, -1):
                reachable[j] = reachable[j - 1] and (token == "?" or token == text[j - 1])
            reachable[0] = False

    return reachable[n]


def match_pattern(pattern: str, name: str) -> bool:
    """Match a raw clean pattern against a base name.

    Patterns ending in a separator are folder rules and compared exactly;
    everything else is a glob.

    Args:
        pattern: Raw pattern as written by the user (``node_modules/``, ``*.log``).
        name: File or directory base name.

    Returns:
        True if the name satisfies the pattern.
    """
    if is_folder_pattern(pattern):
        return match_folder(pattern, name)
    return glob_match(pattern, name)


def first_match(
    patterns: Iterable[str],
    name: str,
    matcher: Callable[[str, str], bool] = glob_match,
) -> str | None:
    """Return the first pattern, in configured order, that matches name."""
    for pattern in patterns:
        if matcher(pattern, name):
            return pattern
    return None
