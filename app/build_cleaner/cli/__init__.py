"""CLI package for build-cleaner.

This package contains the Typer application and all subcommands.
"""

from build_cleaner.cli.main import app

__all__ = ["app"]
