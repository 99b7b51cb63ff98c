"""Unit tests for shared CLI helpers."""

from pathlib import Path

import pytest
import typer
from build_cleaner.cli.types import format_progress, load_config_or_exit, resolve_roots
from build_cleaner.models.scan import ScanProgress


class TestResolveRoots:
    """Tests for resolve_roots."""

    def test_defaults_to_cwd(self) -> None:
        """No roots means the current directory."""
        assert resolve_roots(None) == [Path(".")]
        assert resolve_roots([]) == [Path(".")]

    def test_keeps_given_roots(self) -> None:
        """Given roots are returned in order."""
        assert resolve_roots([Path("b"), Path("a")]) == [Path("b"), Path("a")]


class TestFormatProgress:
    """Tests for format_progress."""

    def test_counters_rendered(self) -> None:
        """Scanned counters, match total and size appear in the line."""
        text = format_progress(ScanProgress(1000, 100, 2, 3, 2048))

        assert "100 dirs" in text
        assert "1000 files" in text
        assert "5 matches" in text
        assert "2.00 KB" in text


class TestLoadConfigOrExit:
    """Tests for load_config_or_exit."""

    def test_exits_on_error(self, tmp_path: Path) -> None:
        """Configuration errors become a typer.Exit with code 1."""
        with pytest.raises(typer.Exit) as exc_info:
            load_config_or_exit([tmp_path / "missing"], None, None, None)

        assert exc_info.value.exit_code == 1
