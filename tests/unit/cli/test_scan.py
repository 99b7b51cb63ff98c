"""Unit tests for the scan command."""

import json
from pathlib import Path

from build_cleaner.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestScanCommand:
    """Tests for build-cleaner scan."""

    def test_json_output(self, node_project: Path) -> None:
        """JSON output lists matches without deleting anything."""
        result = runner.invoke(app, ["scan", str(node_project), "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        paths = {m["path"] for m in data["matches"]}
        assert str(node_project / "node_modules") in paths
        assert str(node_project / "dist") in paths
        assert str(node_project / "src" / "nested" / "node_modules") in paths
        assert data["total_size"] == 120 + 50 + 10
        assert (node_project / "node_modules").exists()

    def test_clean_pattern_added(self, node_project: Path) -> None:
        """--clean adds file patterns on top of the project defaults."""
        result = runner.invoke(
            app, ["scan", str(node_project), "--clean", "*.log", "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        files = [m["path"] for m in data["matches"] if m["type"] == "file"]
        assert files == [str(node_project / "src" / "debug.log")]

    def test_exclude(self, node_project: Path) -> None:
        """Excluded subtrees are not reported."""
        result = runner.invoke(
            app,
            ["scan", str(node_project), "--exclude", str(node_project / "src"), "--format", "json"],
        )

        assert result.exit_code == 0, result.output
        paths = {m["path"] for m in json.loads(result.stdout)["matches"]}
        assert str(node_project / "src" / "nested" / "node_modules") not in paths

    def test_limit(self, node_project: Path) -> None:
        """--limit caps the listed matches."""
        result = runner.invoke(app, ["scan", str(node_project), "--format", "json", "--limit", "1"])

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)["matches"]) == 1

    def test_table_output(self, node_project: Path) -> None:
        """Table output ends with a summary line."""
        result = runner.invoke(app, ["scan", str(node_project)])

        assert result.exit_code == 0, result.output
        assert "Found 3 folder(s)" in result.output

    def test_export(self, node_project: Path, tmp_path: Path) -> None:
        """Matches are exported to a JSON file."""
        export_path = tmp_path / "out" / "matches.json"

        result = runner.invoke(app, ["scan", str(node_project), "--export", str(export_path)])

        assert result.exit_code == 0, result.output
        data = json.loads(export_path.read_text())
        assert len(data["matches"]) == 3

    def test_export_to_directory_fails(self, node_project: Path, tmp_path: Path) -> None:
        """Exporting onto a directory is an error."""
        result = runner.invoke(app, ["scan", str(node_project), "--export", str(tmp_path)])

        assert result.exit_code == 1

    def test_nothing_found(self, tmp_path: Path) -> None:
        """An empty tree reports nothing to clean."""
        result = runner.invoke(app, ["scan", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Nothing to clean" in result.output

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing root exits with an error."""
        result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Path not found" in result.output

    def test_config_file(self, node_project: Path, tmp_path: Path) -> None:
        """Patterns from a configuration file are applied."""
        config_file = tmp_path / "clean.yaml"
        config_file.write_text("clean:\n  files: ['*.js']\n")

        result = runner.invoke(
            app, ["scan", str(node_project), "--config", str(config_file), "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        files = {m["path"] for m in json.loads(result.stdout)["matches"] if m["type"] == "file"}
        assert str(node_project / "index.js") in files
        assert str(node_project / "src" / "app.js") in files

    def test_invalid_config_file(self, node_project: Path, tmp_path: Path) -> None:
        """An invalid configuration file exits with an error."""
        config_file = tmp_path / "clean.json"
        config_file.write_text("{broken")

        result = runner.invoke(app, ["scan", str(node_project), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Failed to parse JSON" in result.output


class TestGlobalOptions:
    """Tests for the root callback."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "build-cleaner version" in result.output

    def test_quiet_scan(self, node_project: Path) -> None:
        """--quiet still prints the results."""
        result = runner.invoke(app, ["--quiet", "scan", str(node_project)])

        assert result.exit_code == 0, result.output
        assert "Found 3 folder(s)" in result.output
