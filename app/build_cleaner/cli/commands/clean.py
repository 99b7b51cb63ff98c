"""Clean command implementation.

Searches project roots, plans the deletion order and removes the
matches, optionally as a dry-run or with per-item confirmation.
"""

import time
from typing import Annotated

import typer

from build_cleaner.cli.display import (
    create_failures_table,
    create_plan_table,
    print_clean_summary,
)
from build_cleaner.cli.interactive import prompt_decision
from build_cleaner.cli.types import (
    CleanOption,
    ConfigOption,
    ExcludeOption,
    PathsArgument,
    load_config_or_exit,
    resolve_roots,
    run_search,
)
from build_cleaner.core.executor import DeleteExecutor
from build_cleaner.core.planner import create_delete_plan
from build_cleaner.core.report import collect_stats
from build_cleaner.errors import OperationCancelledError
from build_cleaner.utils.formatting import console, print_success, print_warning

# Conventional exit status for an interrupted run
EXIT_CANCELLED = 130


def clean(
    ctx: typer.Context,
    paths: PathsArgument = None,
    clean_patterns: CleanOption = None,
    config_file: ConfigOption = None,
    excludes: ExcludeOption = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show what would be deleted."),
    ] = False,
    interactive: Annotated[
        bool,
        typer.Option("--interactive", "-i", help="Confirm every item before deleting it."),
    ] = False,
    trash: Annotated[
        bool,
        typer.Option(
            "--trash/--permanent",
            help="Move items to the trash instead of deleting them.",
        ),
    ] = False,
) -> None:
    """Delete build artifacts and caches."""
    started_at = time.monotonic()
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))
    roots = resolve_roots(paths)

    config = load_config_or_exit(roots, config_file, clean_patterns, excludes)
    result = run_search(roots, config, quiet=quiet)

    if result.is_empty:
        print_success("Nothing to clean.")
        return

    plan = create_delete_plan(result)
    if not quiet:
        console.print(create_plan_table(plan, result, dry_run=dry_run))

    executor = DeleteExecutor(
        dry_run=dry_run,
        use_trash=trash,
        decide=prompt_decision if interactive else None,
    )

    try:
        delete_result = executor.execute(plan, result)
    except OperationCancelledError as e:
        if e.partial_result is not None:
            print_clean_summary(collect_stats(result, e.partial_result, started_at))
        print_warning("Aborted by user.")
        raise typer.Exit(code=EXIT_CANCELLED) from e

    if delete_result.has_failures:
        console.print(create_failures_table(delete_result))

    print_clean_summary(collect_stats(result, delete_result, started_at))

    if delete_result.has_failures:
        raise typer.Exit(code=1)
