"""Settings file I/O and models.

This module provides Pydantic models for the optional ``config.toml``
settings file and functions to load and save it. Settings supply the
defaults for run flags and replace the built-in pattern tables; CLI
flags still take precedence.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from treescrub.cleaner.models import Configuration, DeletionPatternSet
from treescrub.cleaner.patterns import (
    DEFAULT_DIRECTORY_PATTERNS,
    DEFAULT_EXTRA_DIRECTORY_PATTERNS,
    DEFAULT_FILE_PATTERNS,
    PROJECT_FILE_EXTENSIONS,
)
from treescrub.core.paths import get_settings_path


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when an explicitly requested settings file is missing."""


class SettingsParseError(SettingsError):
    """Raised when the settings file is not valid TOML."""


class SettingsValidationError(SettingsError):
    """Raised when the settings content does not match the schema."""


class CleanSettings(BaseModel):
    """Default run flags ([clean] section).

    Attributes:
        recursive: Scan every level below the root.
        force: Clear read-only attributes before deleting.
        strip_project_bindings: Also rewrite project files.
    """

    model_config = ConfigDict(extra="forbid")

    recursive: bool = True
    force: bool = True
    strip_project_bindings: bool = False


class PatternSettings(BaseModel):
    """Deletion pattern tables ([patterns] section).

    Each list replaces the corresponding built-in table.

    Attributes:
        directories: Build output directory patterns.
        extra_directories: IDE and VCS scratch directory patterns.
        files: File patterns.
        project_extensions: Extensions that identify a project directory.
    """

    model_config = ConfigDict(extra="forbid")

    directories: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_DIRECTORY_PATTERNS)),
    ]
    extra_directories: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_EXTRA_DIRECTORY_PATTERNS)),
    ]
    files: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_FILE_PATTERNS)),
    ]
    project_extensions: Annotated[
        list[str],
        Field(default_factory=lambda: list(PROJECT_FILE_EXTENSIONS)),
    ]

    @field_validator("directories", "extra_directories", "files")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Reject empty patterns and patterns containing path separators."""
        for pattern in v:
            if not pattern.strip():
                msg = "Patterns cannot be empty"
                raise ValueError(msg)
            if "/" in pattern or "\\" in pattern:
                msg = f"Patterns match names only, not paths: {pattern!r}"
                raise ValueError(msg)
        return v

    @field_validator("project_extensions")
    @classmethod
    def validate_extensions(cls, v: list[str]) -> list[str]:
        """Require extensions to start with a dot."""
        for ext in v:
            if not ext.startswith(".") or len(ext) < 2:
                msg = f"Extension must start with '.': {ext!r}"
                raise ValueError(msg)
        return v


class Settings(BaseModel):
    """Root settings model for config.toml.

    Attributes:
        clean: Default run flags.
        patterns: Deletion pattern tables.
    """

    model_config = ConfigDict(extra="forbid")

    clean: Annotated[CleanSettings, Field(default_factory=CleanSettings)]
    patterns: Annotated[PatternSettings, Field(default_factory=PatternSettings)]

    def to_configuration(
        self,
        *,
        recursive: bool | None = None,
        force: bool | None = None,
        strip_project_bindings: bool | None = None,
        dry_run: bool = False,
    ) -> Configuration:
        """Build run flags, letting explicit arguments override the file.

        Args:
            recursive: Override for [clean].recursive, None keeps the file value.
            force: Override for [clean].force, None keeps the file value.
            strip_project_bindings: Override for [clean].strip_project_bindings.
            dry_run: Report without modifying the tree.

        Returns:
            Frozen Configuration for a run.
        """
        return Configuration(
            recursive=self.clean.recursive if recursive is None else recursive,
            force=self.clean.force if force is None else force,
            strip_project_bindings=(
                self.clean.strip_project_bindings
                if strip_project_bindings is None
                else strip_project_bindings
            ),
            dry_run=dry_run,
        )

    def to_pattern_set(self) -> DeletionPatternSet:
        """Build the pattern tables for a run."""
        return DeletionPatternSet(
            directories=tuple(self.patterns.directories),
            extra_directories=tuple(self.patterns.extra_directories),
            files=tuple(self.patterns.files),
            project_extensions=tuple(self.patterns.project_extensions),
        )


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings from a TOML file.

    Args:
        path: Settings file. If None, the default path is used and a
            missing file yields built-in defaults.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If an explicit path does not exist.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        if path is not None:
            raise SettingsNotFoundError(f"Settings file not found: {settings_path}")
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def require_settings(path: Path | None = None) -> Settings:
    """Load settings or exit with a helpful error message.

    Convenience wrapper around load_settings() for CLI commands.

    Args:
        path: Optional explicit settings file.

    Returns:
        Loaded and validated Settings.

    Raises:
        typer.Exit: If the settings cannot be loaded.
    """
    import typer

    from treescrub.utils.formatting import print_error

    try:
        return load_settings(path)
    except SettingsError as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(code=1) from e


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a dictionary suitable for TOML serialization."""
    return settings.model_dump(mode="python")
