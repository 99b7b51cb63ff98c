"""Configuration loading for build-cleaner.

This module provides the Pydantic models for cleanup configuration and
the loader that builds the effective configuration from project-type
defaults, an optional TOML/JSON/YAML file, and command-line patterns.

Priority: command-line patterns > configuration file > defaults.
"""

import json
import logging
import tomllib
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from build_cleaner.core.matcher import is_folder_pattern, strip_folder_suffix
from build_cleaner.core.paths import expand_path, validate_path
from build_cleaner.errors import ConfigParseError, InvalidSpecError
from build_cleaner.models.scan import CleanSpec, ExcludeSet, ScanOptions

logger = logging.getLogger(__name__)


class ProjectType(str, Enum):
    """Project type detected from marker files in the root directory."""

    NODEJS = "nodejs"
    RUST = "rust"
    PYTHON = "python"
    GO = "go"
    JAVA = "java"
    UNKNOWN = "unknown"


# Marker file name -> project type, checked in directory listing order
_PROJECT_MARKERS: dict[str, ProjectType] = {
    "package.json": ProjectType.NODEJS,
    "Cargo.toml": ProjectType.RUST,
    "go.mod": ProjectType.GO,
    "pom.xml": ProjectType.JAVA,
    "build.gradle": ProjectType.JAVA,
    "requirements.txt": ProjectType.PYTHON,
    "setup.py": ProjectType.PYTHON,
    "pyproject.toml": ProjectType.PYTHON,
}

# Default (folders, files) per project type
DEFAULT_PATTERNS: dict[ProjectType, tuple[tuple[str, ...], tuple[str, ...]]] = {
    ProjectType.NODEJS: (("node_modules", "dist", "build", ".next"), ()),
    ProjectType.RUST: (("target",), ()),
    ProjectType.PYTHON: (("__pycache__",), ("*.pyc",)),
    ProjectType.GO: (("vendor", "bin"), ()),
    ProjectType.JAVA: (("target", "build"), ()),
    ProjectType.UNKNOWN: (("node_modules", "dist", "build", "target"), ()),
}


class CleanConfig(BaseModel):
    """Clean targets section.

    Attributes:
        folders: Folder names to remove (e.g. ``node_modules``).
        files: File glob patterns to remove (e.g. ``*.log``).
    """

    model_config = ConfigDict(extra="forbid")

    folders: Annotated[list[str], Field(default_factory=list, description="Folder names")]
    files: Annotated[list[str], Field(default_factory=list, description="File glob patterns")]


class Options(BaseModel):
    """Search and filter options section."""

    model_config = ConfigDict(extra="forbid")

    recursive: Annotated[bool, Field(description="Search subdirectories")] = True
    follow_symlinks: Annotated[bool, Field(description="Follow symbolic links")] = False
    max_depth: Annotated[int | None, Field(ge=0, description="Maximum depth")] = None
    min_size: Annotated[int | None, Field(ge=0, description="Minimum file size in bytes")] = None
    max_size: Annotated[int | None, Field(ge=0, description="Maximum file size in bytes")] = None
    min_age_days: Annotated[int | None, Field(ge=0, description="Minimum file age in days")] = None
    max_age_days: Annotated[int | None, Field(ge=0, description="Maximum file age in days")] = None


class Config(BaseModel):
    """Complete cleanup configuration.

    Attributes:
        clean: Folder and file patterns to clean.
        exclude: Paths that are never searched (with their subtrees).
        options: Search and filter options.
    """

    model_config = ConfigDict(extra="forbid")

    clean: Annotated[CleanConfig, Field(default_factory=CleanConfig)]
    exclude: Annotated[list[Path], Field(default_factory=list, description="Excluded paths")]
    options: Annotated[Options, Field(default_factory=Options)]

    def clean_spec(self) -> CleanSpec:
        """Build the CleanSpec consumed by the walker."""
        return CleanSpec(
            folders=tuple(strip_folder_suffix(folder) for folder in self.clean.folders),
            files=tuple(self.clean.files),
        )

    def scan_options(self) -> ScanOptions:
        """Build the ScanOptions consumed by the walker."""
        return ScanOptions(**self.options.model_dump())

    def exclude_set(self) -> ExcludeSet:
        """Build the ExcludeSet consumed by the walker."""
        return ExcludeSet.from_paths(expand_path(path) for path in self.exclude)


def detect_project_type(path: Path) -> ProjectType:
    """Detect the project type from marker files directly inside path.

    Args:
        path: Project root.

    Returns:
        Detected ProjectType, UNKNOWN if nothing matched or path is unreadable.
    """
    try:
        names = sorted(entry.name for entry in path.iterdir())
    except OSError:
        return ProjectType.UNKNOWN

    for name in names:
        project_type = _PROJECT_MARKERS.get(name)
        if project_type is not None:
            return project_type

    return ProjectType.UNKNOWN


def load_default_config(project_type: ProjectType) -> Config:
    """Return the default configuration for a project type."""
    folders, files = DEFAULT_PATTERNS[project_type]
    return Config(clean=CleanConfig(folders=list(folders), files=list(files)))


def _read_config_data(path: Path) -> Any:
    """Read raw configuration data according to the file extension."""
    suffix = path.suffix.lower()

    if suffix == ".toml":
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigParseError(f"Failed to parse TOML: {e}") from e

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigParseError(f"Failed to read config file: {e}") from e

    if suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Failed to parse YAML: {e}") from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Failed to parse JSON: {e}") from e


def parse_config_file(path: Path) -> Config:
    """Parse and validate a configuration file.

    ``.toml`` files are read with tomllib, ``.yaml``/``.yml`` with PyYAML,
    anything else as JSON.

    Args:
        path: Configuration file path.

    Returns:
        Validated Config.

    Raises:
        ConfigParseError: If the file cannot be read, parsed or validated.
    """
    try:
        data = _read_config_data(path)
    except OSError as e:
        raise ConfigParseError(f"Failed to read config file: {e}") from e

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigParseError(f"Invalid configuration in {path}: {e}") from e


def merge_configs(
    default: Config,
    file_config: Config | None = None,
    cli_patterns: list[str] | None = None,
) -> Config:
    """Merge configuration layers.

    File patterns and excludes extend the defaults; file options replace
    them. Command-line patterns ending in a separator are folder rules,
    all others file rules; duplicates are dropped.

    Args:
        default: Project-type defaults.
        file_config: Parsed configuration file, if any.
        cli_patterns: Raw patterns from the command line.

    Returns:
        New merged Config.
    """
    merged = default.model_copy(deep=True)

    if file_config is not None:
        merged.clean.folders.extend(file_config.clean.folders)
        merged.clean.files.extend(file_config.clean.files)
        merged.exclude.extend(file_config.exclude)
        merged.options = file_config.options.model_copy()

    for pattern in cli_patterns or []:
        if is_folder_pattern(pattern):
            folder = strip_folder_suffix(pattern)
            if folder not in merged.clean.folders:
                merged.clean.folders.append(folder)
        elif pattern not in merged.clean.files:
            merged.clean.files.append(pattern)

    return merged


def validate_config(config: Config) -> None:
    """Ensure at least one folder or file pattern is configured.

    Raises:
        InvalidSpecError: If both pattern lists are empty.
    """
    if not config.clean.folders and not config.clean.files:
        raise InvalidSpecError()


def load_config(
    path: Path,
    config_file: Path | None = None,
    cli_patterns: list[str] | None = None,
    extra_excludes: list[Path] | None = None,
) -> Config:
    """Load the effective configuration for a cleanup run.

    Args:
        path: First project root, used to detect the project type.
        config_file: Optional configuration file (TOML, YAML or JSON).
        cli_patterns: Raw patterns from the command line.
        extra_excludes: Exclusion paths from the command line.

    Returns:
        Validated, merged Config.

    Raises:
        PathNotFoundError: If path or config_file does not exist.
        InvalidPathError: If path is neither a file nor a directory.
        ConfigParseError: If the configuration file is invalid.
        InvalidSpecError: If no pattern ends up configured.
    """
    validate_path(path)

    project_type = detect_project_type(path) if path.is_dir() else ProjectType.UNKNOWN
    logger.debug("Detected project type %s for %s", project_type.value, path)
    default = load_default_config(project_type)

    file_config: Config | None = None
    if config_file is not None:
        validate_path(config_file)
        file_config = parse_config_file(config_file)
        logger.debug("Loaded configuration file %s", config_file)

    merged = merge_configs(default, file_config, cli_patterns)
    if extra_excludes:
        merged.exclude.extend(extra_excludes)

    validate_config(merged)
    return merged
