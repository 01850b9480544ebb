"""Exception hierarchy for cleancopy.

Phase-level errors (configuration, guard, copy) derive from
CleanCopyError and abort a run. Per-file failures during the cleaning
phase are never raised; they are recorded as CleanFailure entries.
"""

from pathlib import Path


class CleanCopyError(Exception):
    """Base exception for all fatal cleancopy errors."""


class ConfigError(CleanCopyError):
    """Raised when arguments or the settings file are invalid.

    Always raised before any filesystem mutation.
    """


class GuardError(CleanCopyError):
    """Raised when the destination directory cannot be prepared."""


class ForeignDirectoryError(GuardError):
    """Raised when the destination exists without an ownership marker.

    Attributes:
        path: Destination directory that was refused.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Destination {path} exists and was not created by cleancopy "
            "(marker file missing); refusing to overwrite it"
        )


class FatalCopyError(CleanCopyError):
    """Raised when any entry cannot be copied during the copy phase.

    Attributes:
        path: Source or destination path that failed.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to copy {path}: {reason}")
