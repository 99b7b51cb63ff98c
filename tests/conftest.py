"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

TreeBuilder = Callable[[dict[str, str]], Path]


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeBuilder:
    """Create a directory tree under tmp_path.

    Keys are relative paths; a key ending in "/" creates an empty
    directory, anything else a file with the given content.
    """

    def _build(entries: dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel, content in entries.items():
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return root

    return _build


@pytest.fixture
def node_project(make_tree: TreeBuilder) -> Path:
    """A small Node.js-style project with build output and logs."""
    return make_tree(
        {
            "package.json": "{}",
            "index.js": "console.log(1)",
            "node_modules/lodash/index.js": "x" * 100,
            "node_modules/lodash/node_modules/deep/a.js": "y" * 20,
            "dist/bundle.js": "z" * 50,
            "src/app.js": "app",
            "src/debug.log": "log" * 4,
            "src/nested/node_modules/pkg/index.js": "p" * 10,
        }
    )
