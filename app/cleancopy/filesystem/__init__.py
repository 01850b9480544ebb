"""Filesystem copying and cleaning module.

This module provides exclusion patterns, the destination guard, the
tree copier and the cleaning walker.
"""

from cleancopy.filesystem.copier import copy_tree
from cleancopy.filesystem.guard import has_marker, prepare
from cleancopy.filesystem.models import (
    CleanFailure,
    CopyStats,
    EntryType,
    FileOutcome,
    RunStats,
)
from cleancopy.filesystem.patterns import ExclusionPattern, compile_patterns, matches
from cleancopy.filesystem.walker import clean

__all__ = [
    "CleanFailure",
    "CopyStats",
    "EntryType",
    "ExclusionPattern",
    "FileOutcome",
    "RunStats",
    "clean",
    "compile_patterns",
    "copy_tree",
    "has_marker",
    "matches",
    "prepare",
]
