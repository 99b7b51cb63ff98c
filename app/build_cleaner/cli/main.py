"""Main CLI application entry point.

Defines the Typer application, global options and logging setup.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from build_cleaner import __version__
from build_cleaner.cli.commands import clean, scan
from build_cleaner.utils.formatting import err_console

app = typer.Typer(
    name="build-cleaner",
    help="Find and remove build artifacts and caches.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"build-cleaner version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False, quiet: bool = False, debug: bool = False) -> None:
    """Route log records through Rich on stderr.

    Args:
        verbose: Log at INFO level.
        quiet: Log errors only.
        debug: Log at DEBUG level with source locations (wins over the others).
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=debug, rich_tracebacks=debug)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """build-cleaner - Find and remove build artifacts and caches.

    Searches project trees for folders such as node_modules or target and
    for file patterns such as *.pyc, then removes them safely.
    """
    configure_logging(verbose=verbose, quiet=quiet, debug=debug)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command("scan")(scan.scan)
app.command("clean")(clean.clean)


if __name__ == "__main__":
    app()
