"""CLI commands for build-cleaner.

This package contains all subcommand implementations.
"""

from build_cleaner.cli.commands import clean, scan

__all__ = ["clean", "scan"]
