"""Destination guard.

Protects existing directories from being wiped by a run. A destination
is only ever deleted when it carries the marker file that cleancopy
writes after creating it; anything else is treated as foreign and left
alone.
"""

import logging
import shutil
from datetime import UTC, datetime
from pathlib import Path

import tomli_w

from cleancopy import __version__
from cleancopy.core.errors import ForeignDirectoryError, GuardError
from cleancopy.core.paths import get_marker_path

logger = logging.getLogger(__name__)

_MARKER_HEADER = (
    "# This directory was generated by cleancopy and is replaced on every run.\n"
    "# Remove this file to stop cleancopy from overwriting the directory.\n"
)


def has_marker(dest_root: Path) -> bool:
    """Check whether a directory carries the cleancopy ownership marker."""
    return get_marker_path(dest_root).is_file()


def write_marker(dest_root: Path, source_root: Path | None = None) -> Path:
    """Write the ownership marker into a destination directory.

    Args:
        dest_root: Destination directory (must exist).
        source_root: Source tree being copied, recorded for humans.

    Returns:
        Path of the written marker.

    Raises:
        GuardError: If the marker cannot be written.
    """
    data: dict[str, object] = {
        "tool": "cleancopy",
        "version": __version__,
        "created": datetime.now(UTC).replace(microsecond=0),
    }
    if source_root is not None:
        data["source"] = str(source_root)

    marker = get_marker_path(dest_root)
    try:
        marker.write_text(_MARKER_HEADER + tomli_w.dumps(data), encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write marker file {marker}: {e}"
        raise GuardError(msg) from e
    return marker


def prepare(dest_root: Path, source_root: Path | None = None) -> Path:
    """Make the destination an empty directory owned by cleancopy.

    - Missing destination: created with its ancestors.
    - Existing destination without marker: refused, nothing touched.
    - Existing destination with marker: deleted and recreated.

    The marker check always happens before any deletion.

    Args:
        dest_root: Absolute destination directory.
        source_root: Source tree, recorded in the marker.

    Returns:
        The prepared destination directory.

    Raises:
        ForeignDirectoryError: If the destination is not ours to replace.
        GuardError: If the destination cannot be deleted or created.
    """
    if dest_root.exists() or dest_root.is_symlink():
        if dest_root.is_symlink() or not dest_root.is_dir() or not has_marker(dest_root):
            raise ForeignDirectoryError(dest_root)

        logger.debug("Replacing previous output at %s", dest_root)
        try:
            shutil.rmtree(dest_root)
        except OSError as e:
            msg = f"Cannot remove previous output {dest_root}: {e}"
            raise GuardError(msg) from e

    try:
        dest_root.mkdir(parents=True, exist_ok=False)
    except OSError as e:
        msg = f"Cannot create destination directory {dest_root}: {e}"
        raise GuardError(msg) from e

    write_marker(dest_root, source_root)
    logger.debug("Prepared destination %s", dest_root)
    return dest_root
