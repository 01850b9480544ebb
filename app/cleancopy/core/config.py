"""Run configuration and user settings.

RunConfig is built once from the command line and never changes during a
run. Settings hold user defaults read from an optional TOML file
(~/.config/cleancopy/config.toml) and are merged into RunConfig by the
CLI: settings patterns come first, command line patterns follow.

Example settings file::

    exclude = ["vendor/", "*.d.ts"]
    exclude_minified = true
"""

import logging
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cleancopy.core.errors import ConfigError
from cleancopy.core.paths import get_settings_path, is_within
from cleancopy.filesystem.patterns import ExclusionPattern, compile_patterns

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """User defaults applied to every run.

    Attributes:
        exclude: Exclusion patterns always applied, before command line ones.
        exclude_minified: Skip ``*.min.js`` files even without --no-minified.
    """

    model_config = ConfigDict(extra="forbid")

    exclude: Annotated[
        list[str],
        Field(description="Exclusion patterns (prefix ending in '/' or glob)"),
    ] = []
    exclude_minified: Annotated[
        bool,
        Field(description="Leave minified scripts untouched"),
    ] = False


def load_settings(path: Path | None = None) -> Settings:
    """Load user settings from a TOML file.

    An explicit path must exist. The default location is optional: when it
    is absent, default settings are returned.

    Args:
        path: Settings file given on the command line, or None for the
            default location.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If an explicit file is missing, or any file is
            unreadable, not valid TOML, or does not match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.is_file():
        if path is not None:
            raise ConfigError(f"Settings file not found: {settings_path}")
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings {settings_path}: {e}") from e

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {settings_path}: {e}") from e

    logger.debug("Loaded settings from %s", settings_path)
    return settings


def _resolve_parent(path: Path) -> Path:
    """Make a path absolute without following a symlink at its last component.

    The guard must see a symlinked destination as the link itself, never
    as the directory it points to.
    """
    if path.name in ("", ".", ".."):
        return path.resolve()
    return path.parent.resolve() / path.name


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Immutable configuration of a single run.

    Attributes:
        source_root: Absolute path of the tree to copy.
        dest_root: Absolute path of the destination directory.
        patterns: Compiled exclusion patterns, in the order given.
        exclude_minified: Leave ``*.min.js`` files untouched.
        verbose: Log every phase and file decision.
    """

    source_root: Path
    dest_root: Path
    patterns: tuple[ExclusionPattern, ...] = ()
    exclude_minified: bool = False
    verbose: bool = False

    @classmethod
    def build(
        cls,
        source: Path | str,
        destination: Path | str,
        patterns: Iterable[str] = (),
        *,
        exclude_minified: bool = False,
        verbose: bool = False,
    ) -> "RunConfig":
        """Validate arguments and compile patterns.

        Nothing on disk is modified here.

        Args:
            source: Source directory.
            destination: Destination directory.
            patterns: Raw exclusion patterns.
            exclude_minified: Leave minified scripts untouched.
            verbose: Enable verbose logging.

        Returns:
            A validated RunConfig.

        Raises:
            ConfigError: If the source is missing or not a directory, or if
                source and destination overlap.
        """
        if not str(source).strip():
            raise ConfigError("Source directory is required")
        if not str(destination).strip():
            raise ConfigError("Destination directory is required")

        source_root = Path(source).expanduser().resolve()
        dest_root = _resolve_parent(Path(destination).expanduser())

        if not source_root.exists():
            raise ConfigError(f"Source directory does not exist: {source_root}")
        if not source_root.is_dir():
            raise ConfigError(f"Source is not a directory: {source_root}")

        if dest_root == source_root:
            raise ConfigError("Source and destination must be different directories")
        if is_within(dest_root, source_root):
            raise ConfigError(
                f"Destination {dest_root} is inside the source {source_root}; "
                "the copy would include itself"
            )
        if is_within(source_root, dest_root):
            raise ConfigError(
                f"Destination {dest_root} contains the source {source_root}; "
                "replacing it would delete the source"
            )

        return cls(
            source_root=source_root,
            dest_root=dest_root,
            patterns=compile_patterns(patterns),
            exclude_minified=exclude_minified,
            verbose=verbose,
        )
