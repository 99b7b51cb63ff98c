"""Unit tests for configuration loading.

Tests for project detection, defaults, file parsing, merging and the
full loading pipeline.
"""

import json
from pathlib import Path

import pytest
from build_cleaner.core.config import (
    CleanConfig,
    Config,
    Options,
    ProjectType,
    detect_project_type,
    load_config,
    load_default_config,
    merge_configs,
    parse_config_file,
    validate_config,
)
from build_cleaner.errors import ConfigParseError, InvalidSpecError, PathNotFoundError
from build_cleaner.models.scan import ScanOptions


class TestDetectProjectType:
    """Tests for detect_project_type."""

    @pytest.mark.parametrize(
        ("marker", "expected"),
        [
            ("package.json", ProjectType.NODEJS),
            ("Cargo.toml", ProjectType.RUST),
            ("go.mod", ProjectType.GO),
            ("pom.xml", ProjectType.JAVA),
            ("build.gradle", ProjectType.JAVA),
            ("requirements.txt", ProjectType.PYTHON),
            ("setup.py", ProjectType.PYTHON),
            ("pyproject.toml", ProjectType.PYTHON),
        ],
    )
    def test_markers(self, tmp_path: Path, marker: str, expected: ProjectType) -> None:
        """Each marker file selects its project type."""
        (tmp_path / marker).touch()
        assert detect_project_type(tmp_path) == expected

    def test_unknown(self, tmp_path: Path) -> None:
        """Without markers the type is unknown."""
        assert detect_project_type(tmp_path) == ProjectType.UNKNOWN

    def test_unreadable(self, tmp_path: Path) -> None:
        """A missing directory is unknown instead of an error."""
        assert detect_project_type(tmp_path / "missing") == ProjectType.UNKNOWN


class TestDefaults:
    """Tests for load_default_config."""

    def test_nodejs(self) -> None:
        """Node.js defaults target dependency and build folders."""
        config = load_default_config(ProjectType.NODEJS)
        assert config.clean.folders == ["node_modules", "dist", "build", ".next"]
        assert config.clean.files == []

    def test_python(self) -> None:
        """Python defaults include bytecode files."""
        config = load_default_config(ProjectType.PYTHON)
        assert config.clean.folders == ["__pycache__"]
        assert config.clean.files == ["*.pyc"]

    def test_unknown(self) -> None:
        """Unknown projects get a broad folder list."""
        config = load_default_config(ProjectType.UNKNOWN)
        assert config.clean.folders == ["node_modules", "dist", "build", "target"]

    def test_default_options(self) -> None:
        """Defaults are recursive without following links."""
        options = load_default_config(ProjectType.RUST).options
        assert options.recursive is True
        assert options.follow_symlinks is False

    def test_defaults_are_independent(self) -> None:
        """Mutating one default config does not leak into the next."""
        load_default_config(ProjectType.RUST).clean.folders.append("extra")
        assert load_default_config(ProjectType.RUST).clean.folders == ["target"]


class TestParseConfigFile:
    """Tests for parse_config_file."""

    def test_toml(self, tmp_path: Path) -> None:
        """TOML files are parsed by extension."""
        path = tmp_path / "clean.toml"
        path.write_text(
            '[clean]\nfolders = ["out"]\nfiles = ["*.tmp"]\n\n[options]\nmax_depth = 3\n'
        )

        config = parse_config_file(path)

        assert config.clean.folders == ["out"]
        assert config.clean.files == ["*.tmp"]
        assert config.options.max_depth == 3

    def test_yaml(self, tmp_path: Path) -> None:
        """YAML files are parsed by extension."""
        path = tmp_path / "clean.yaml"
        path.write_text("clean:\n  folders: [coverage]\nexclude:\n  - /tmp/keep\n")

        config = parse_config_file(path)

        assert config.clean.folders == ["coverage"]
        assert config.exclude == [Path("/tmp/keep")]

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """An empty YAML document is an empty configuration."""
        path = tmp_path / "clean.yml"
        path.write_text("")

        assert parse_config_file(path) == Config()

    def test_json_fallback(self, tmp_path: Path) -> None:
        """Any other extension is parsed as JSON."""
        path = tmp_path / "cleanrc"
        data = {"clean": {"files": ["*.log"]}, "options": {"recursive": False}}
        path.write_text(json.dumps(data))

        config = parse_config_file(path)

        assert config.clean.files == ["*.log"]
        assert config.options.recursive is False

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Malformed JSON raises ConfigParseError."""
        path = tmp_path / "clean.json"
        path.write_text("{not json")

        with pytest.raises(ConfigParseError, match="JSON"):
            parse_config_file(path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML raises ConfigParseError."""
        path = tmp_path / "clean.toml"
        path.write_text("[clean\n")

        with pytest.raises(ConfigParseError, match="TOML"):
            parse_config_file(path)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        """Unknown keys fail validation."""
        path = tmp_path / "clean.json"
        path.write_text(json.dumps({"clean": {"folders": []}, "surprise": True}))

        with pytest.raises(ConfigParseError):
            parse_config_file(path)

    def test_negative_option_rejected(self, tmp_path: Path) -> None:
        """Negative bounds fail validation."""
        path = tmp_path / "clean.json"
        path.write_text(json.dumps({"options": {"min_size": -1}}))

        with pytest.raises(ConfigParseError):
            parse_config_file(path)


class TestMergeConfigs:
    """Tests for merge_configs."""

    def test_file_extends_defaults(self) -> None:
        """File patterns and excludes are appended; options replace defaults."""
        default = load_default_config(ProjectType.RUST)
        file_config = Config(
            clean=CleanConfig(folders=["out"], files=["*.tmp"]),
            exclude=[Path("/keep")],
            options=Options(max_depth=2),
        )

        merged = merge_configs(default, file_config)

        assert merged.clean.folders == ["target", "out"]
        assert merged.clean.files == ["*.tmp"]
        assert merged.exclude == [Path("/keep")]
        assert merged.options.max_depth == 2

    def test_cli_patterns_split_by_suffix(self) -> None:
        """A trailing slash marks a folder rule; duplicates are dropped."""
        default = load_default_config(ProjectType.RUST)

        merged = merge_configs(default, None, ["coverage/", "target/", "*.log", "*.log"])

        assert merged.clean.folders == ["target", "coverage"]
        assert merged.clean.files == ["*.log"]

    def test_default_untouched(self) -> None:
        """Merging does not mutate its inputs."""
        default = load_default_config(ProjectType.GO)

        merge_configs(default, None, ["extra/"])

        assert default.clean.folders == ["vendor", "bin"]


class TestValidateConfig:
    """Tests for validate_config."""

    def test_empty_rejected(self) -> None:
        """A configuration without patterns is invalid."""
        with pytest.raises(InvalidSpecError):
            validate_config(Config())

    def test_files_only_accepted(self) -> None:
        """File patterns alone are enough."""
        validate_config(Config(clean=CleanConfig(files=["*.log"])))


class TestConfigConversions:
    """Tests for the Config to core model conversions."""

    def test_clean_spec_strips_folder_suffix(self) -> None:
        """Folder entries lose a trailing separator."""
        config = Config(clean=CleanConfig(folders=["dist/", "build"], files=["*.log"]))

        spec = config.clean_spec()

        assert spec.folders == ("dist", "build")
        assert spec.files == ("*.log",)

    def test_scan_options(self) -> None:
        """Options convert field by field."""
        config = Config(options=Options(recursive=False, min_size=10))

        assert config.scan_options() == ScanOptions(recursive=False, min_size=10)

    def test_exclude_set_expands_home(self) -> None:
        """Excludes starting with ~ are expanded."""
        config = Config(exclude=[Path("~/keep")])

        assert config.exclude_set().paths == (Path.home() / "keep",)


class TestLoadConfig:
    """Tests for load_config."""

    def test_detects_project_defaults(self, tmp_path: Path) -> None:
        """The first root's project type selects the defaults."""
        (tmp_path / "Cargo.toml").touch()

        config = load_config(tmp_path)

        assert config.clean.folders == ["target"]

    def test_full_pipeline(self, tmp_path: Path) -> None:
        """Defaults, file, CLI patterns and excludes are combined."""
        (tmp_path / "go.mod").touch()
        config_file = tmp_path / "clean.toml"
        config_file.write_text('[clean]\nfiles = ["*.out"]\n')

        config = load_config(
            tmp_path,
            config_file=config_file,
            cli_patterns=["tmp/"],
            extra_excludes=[tmp_path / "vendor"],
        )

        assert config.clean.folders == ["vendor", "bin", "tmp"]
        assert config.clean.files == ["*.out"]
        assert config.exclude == [tmp_path / "vendor"]

    def test_missing_root(self, tmp_path: Path) -> None:
        """A missing root is reported."""
        with pytest.raises(PathNotFoundError):
            load_config(tmp_path / "missing")

    def test_missing_config_file(self, tmp_path: Path) -> None:
        """A missing configuration file is reported."""
        with pytest.raises(PathNotFoundError):
            load_config(tmp_path, config_file=tmp_path / "nope.toml")
