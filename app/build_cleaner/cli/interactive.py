"""Interactive per-item confirmation for the clean command."""

from pathlib import Path

import typer

from build_cleaner.core.report import format_size
from build_cleaner.models.delete import Decision

_ANSWERS: dict[str, Decision] = {
    "y": Decision.PROCEED,
    "yes": Decision.PROCEED,
    "a": Decision.ACCEPT_ALL,
    "all": Decision.ACCEPT_ALL,
    "q": Decision.ABORT,
    "quit": Decision.ABORT,
}


def parse_answer(answer: str) -> Decision:
    """Map a prompt answer to a Decision; anything unrecognized skips."""
    return _ANSWERS.get(answer.strip().lower(), Decision.SKIP)


def prompt_decision(path: Path, is_dir: bool, size: int) -> Decision:
    """Ask whether to delete one item.

    Answers: ``y`` delete, ``N`` skip (default), ``a`` delete this and all
    remaining items, ``q`` abort the run.
    """
    kind = "folder" if is_dir else "file"
    answer = typer.prompt(
        f"Delete {kind} {path} ({format_size(size)})? [y/N/a/q]",
        default="n",
        show_default=False,
    )
    return parse_answer(answer)
