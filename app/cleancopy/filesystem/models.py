"""Filesystem domain models for copying and cleaning.

This module defines the counters and records produced while a source
tree is copied and the copy is cleaned, along with the per-file outcome
classification used by the cleaning walker.
"""

from dataclasses import dataclass, field
from enum import Enum

# Source-file suffixes eligible for comment stripping
SCRIPT_SUFFIX = ".js"
TYPED_SCRIPT_SUFFIX = ".ts"
CANDIDATE_SUFFIXES: tuple[str, ...] = (SCRIPT_SUFFIX, TYPED_SCRIPT_SUFFIX)

MINIFIED_SUFFIX = ".min.js"


class EntryType(str, Enum):
    """Type of an entry met while walking a tree.

    Attributes:
        DIRECTORY: Real directory (not a symlink to one).
        FILE: Regular file.
        SYMLINK: Symbolic link, live or dangling.
        SPECIAL: Device, FIFO, socket or anything else.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    SPECIAL = "special"


class FileOutcome(str, Enum):
    """Decision taken by the cleaning walker for a candidate file.

    Attributes:
        PROCESSED: Comments were stripped and the file rewritten.
        SKIPPED_MINIFIED: Minified script excluded by --no-minified.
        SKIPPED_PATTERN: Relative path matched an exclusion pattern.
        FAILED: Reading, stripping or writing failed; file left as copied.
    """

    PROCESSED = "processed"
    SKIPPED_MINIFIED = "skipped_minified"
    SKIPPED_PATTERN = "skipped_pattern"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class CleanFailure:
    """A recoverable failure while cleaning a single file.

    Attributes:
        path: Path relative to the destination root, with forward slashes.
        error: Human-readable description of the failure.
    """

    path: str
    error: str


@dataclass(slots=True)
class RunStats:
    """Mutable counters for the cleaning phase of one run.

    Attributes:
        processed: Candidate files whose comments were stripped.
        skipped: Candidate files excluded or failed.
        failures: Details of every failed candidate (a subset of skipped).
    """

    processed: int = 0
    skipped: int = 0
    failures: list[CleanFailure] = field(default_factory=list)

    def record(self, outcome: FileOutcome) -> None:
        """Count a file outcome."""
        if outcome == FileOutcome.PROCESSED:
            self.processed += 1
        else:
            self.skipped += 1


@dataclass(slots=True)
class CopyStats:
    """Counters for the copy phase of one run.

    Attributes:
        files: Regular files copied.
        directories: Subdirectories created below the destination root.
        ignored: Symlinks and special entries skipped with a warning.
    """

    files: int = 0
    directories: int = 0
    ignored: int = 0
