"""Cleaning walker.

Visits the copied tree and strips comments from every candidate script
that is not excluded. A failure on one file never stops the walk: it is
logged, recorded and counted as skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from cleancopy.comments import strip_comments
from cleancopy.core.paths import MARKER_FILENAME
from cleancopy.filesystem.copier import get_entry_type, list_entries
from cleancopy.filesystem.models import (
    CANDIDATE_SUFFIXES,
    MINIFIED_SUFFIX,
    CleanFailure,
    EntryType,
    FileOutcome,
    RunStats,
)
from cleancopy.filesystem.patterns import matches, to_relative_posix

if TYPE_CHECKING:
    from cleancopy.core.config import RunConfig

logger = logging.getLogger(__name__)

StripFunc = Callable[..., str]


def is_candidate(name: str) -> bool:
    """Check whether a file name has a recognized script suffix."""
    return name.endswith(CANDIDATE_SUFFIXES)


def classify(relative_path: str, config: RunConfig) -> FileOutcome | None:
    """Decide whether a candidate is excluded from cleaning.

    Minified scripts are checked before patterns; the first rule that
    matches wins.

    Args:
        relative_path: Forward-slash path relative to the destination root.
        config: Run configuration.

    Returns:
        The skip outcome, or None if the file should be cleaned.
    """
    if config.exclude_minified and relative_path.endswith(MINIFIED_SUFFIX):
        return FileOutcome.SKIPPED_MINIFIED
    if matches(relative_path, config.patterns):
        return FileOutcome.SKIPPED_PATTERN
    return None


def clean(
    dest_root: Path,
    config: RunConfig,
    stats: RunStats | None = None,
    strip: StripFunc = strip_comments,
) -> RunStats:
    """Strip comments from every eligible file under the destination.

    Args:
        dest_root: Destination directory holding a complete copy.
        config: Run configuration (patterns, minified exclusion).
        stats: Counters to update; a new RunStats is created if None.
        strip: Comment stripper, called as ``strip(text, preserve_blank_lines=False)``.

    Returns:
        The updated counters.
    """
    if stats is None:
        stats = RunStats()
    _clean_directory(dest_root, dest_root, config, stats, strip)
    logger.debug(
        "Cleaning finished: %d processed, %d skipped", stats.processed, stats.skipped
    )
    return stats


def _clean_directory(
    directory: Path,
    dest_root: Path,
    config: RunConfig,
    stats: RunStats,
    strip: StripFunc,
) -> None:
    """Clean one directory, recursing depth-first."""
    try:
        entries = list_entries(directory)
    except OSError as e:
        # Unreadable directories are reported but hold no countable file
        _record_failure(stats, to_relative_posix(directory, dest_root), e, count=False)
        return

    for entry in entries:
        if directory == dest_root and entry.name == MARKER_FILENAME:
            continue

        try:
            entry_type = get_entry_type(entry)
        except OSError as e:
            logger.warning("Cannot determine type of %s: %s", entry, e)
            continue

        if entry_type == EntryType.DIRECTORY:
            _clean_directory(entry, dest_root, config, stats, strip)
        elif entry_type == EntryType.FILE and is_candidate(entry.name):
            _clean_file(entry, dest_root, config, stats, strip)


def _clean_file(
    path: Path,
    dest_root: Path,
    config: RunConfig,
    stats: RunStats,
    strip: StripFunc,
) -> None:
    """Strip one candidate file in place unless it is excluded."""
    relative_path = to_relative_posix(path, dest_root)

    outcome = classify(relative_path, config)
    if outcome is not None:
        logger.debug("Skipping %s (%s)", relative_path, outcome.value)
        stats.record(outcome)
        return

    try:
        # newline="" keeps CRLF line endings intact
        with open(path, encoding="utf-8", newline="") as f:
            original = f.read()
        cleaned = strip(original, preserve_blank_lines=False)
        if cleaned != original:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(cleaned)
    except (OSError, ValueError) as e:
        _record_failure(stats, relative_path, e)
        return

    logger.debug("Cleaned %s", relative_path)
    stats.record(FileOutcome.PROCESSED)


def _record_failure(
    stats: RunStats, relative_path: str, error: Exception, *, count: bool = True
) -> None:
    """Log a recoverable failure and, for files, count it as skipped."""
    message = str(error) or type(error).__name__
    logger.warning("Failed to clean %s: %s", relative_path, message)
    stats.failures.append(CleanFailure(path=relative_path, error=message))
    if count:
        stats.record(FileOutcome.FAILED)
