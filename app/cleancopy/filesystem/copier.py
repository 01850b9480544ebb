"""Tree copier.

Mirrors a source directory into a prepared destination, byte for byte.
Nothing is cleaned here; the copy must be complete before the cleaning
walker starts, so every I/O failure aborts the run.
"""

import logging
import shutil
import stat
from pathlib import Path

from cleancopy.core.errors import FatalCopyError
from cleancopy.core.paths import MARKER_FILENAME
from cleancopy.filesystem.models import CopyStats, EntryType

logger = logging.getLogger(__name__)


def get_entry_type(path: Path) -> EntryType:
    """Determine the type of a filesystem entry without following symlinks.

    Args:
        path: Entry to classify.

    Returns:
        EntryType classification.

    Raises:
        OSError: If the entry cannot be inspected.
    """
    mode = path.lstat().st_mode
    if stat.S_ISLNK(mode):
        return EntryType.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryType.FILE
    return EntryType.SPECIAL


def list_entries(directory: Path) -> list[Path]:
    """List a directory's entries sorted by name.

    Raises:
        OSError: If the directory cannot be listed.
    """
    return sorted(directory.iterdir())


def copy_tree(src: Path, dest: Path) -> CopyStats:
    """Recursively copy a source tree into an existing destination.

    Symbolic links and special files are skipped with a warning. A
    source-root file named like the ownership marker is skipped too, so
    the destination keeps the marker written by the guard.

    Args:
        src: Source directory.
        dest: Destination directory, already prepared by the guard.

    Returns:
        Counts of copied files, created directories and ignored entries.

    Raises:
        FatalCopyError: On the first entry that cannot be read or written.
    """
    stats = CopyStats()
    _copy_directory(src, dest, stats, is_root=True)
    logger.debug(
        "Copied %d files and %d directories from %s to %s",
        stats.files,
        stats.directories,
        src,
        dest,
    )
    return stats


def _copy_directory(src: Path, dest: Path, stats: CopyStats, *, is_root: bool = False) -> None:
    """Copy the contents of one directory, recursing depth-first."""
    try:
        entries = list_entries(src)
    except OSError as e:
        raise FatalCopyError(src, e.strerror or str(e)) from e

    for entry in entries:
        target = dest / entry.name

        try:
            entry_type = get_entry_type(entry)
        except OSError as e:
            raise FatalCopyError(entry, e.strerror or str(e)) from e

        if is_root and entry.name == MARKER_FILENAME:
            logger.warning("Not copying %s: name is reserved for the ownership marker", entry)
            stats.ignored += 1
            continue

        if entry_type == EntryType.DIRECTORY:
            try:
                target.mkdir()
            except OSError as e:
                raise FatalCopyError(target, e.strerror or str(e)) from e
            stats.directories += 1
            _copy_directory(entry, target, stats)

        elif entry_type == EntryType.FILE:
            try:
                shutil.copyfile(entry, target, follow_symlinks=False)
            except OSError as e:
                raise FatalCopyError(entry, e.strerror or str(e)) from e
            stats.files += 1

        else:
            logger.warning("Skipping %s: %s entries are not copied", entry, entry_type.value)
            stats.ignored += 1
