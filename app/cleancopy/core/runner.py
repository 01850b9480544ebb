"""Run orchestration.

Sequences the three phases of a run: prepare the destination, copy the
source tree into it, then clean the copy. The first two phases are
fatal on error; the cleaning phase tolerates per-file failures.
"""

import logging
from dataclasses import dataclass, field

from cleancopy.core.config import RunConfig
from cleancopy.filesystem import copier, guard, walker
from cleancopy.filesystem.models import CopyStats, RunStats

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunReport:
    """Outcome of a completed run.

    Attributes:
        copy: Counts from the copy phase.
        stats: Counts from the cleaning phase.
    """

    copy: CopyStats = field(default_factory=CopyStats)
    stats: RunStats = field(default_factory=RunStats)

    @property
    def has_failures(self) -> bool:
        """Check whether any file could not be cleaned."""
        return bool(self.stats.failures)


def run(config: RunConfig) -> RunReport:
    """Execute one copy-and-clean run.

    A failed copy leaves the destination partially populated; no rollback
    is attempted. The source tree is only ever read.

    Args:
        config: Validated run configuration.

    Returns:
        RunReport with the counts of both phases.

    Raises:
        GuardError: If the destination cannot be prepared (including
            ForeignDirectoryError for directories we do not own).
        FatalCopyError: If any entry cannot be copied.
    """
    report = RunReport()

    logger.debug("Preparing destination %s", config.dest_root)
    guard.prepare(config.dest_root, config.source_root)

    logger.debug("Copying %s to %s", config.source_root, config.dest_root)
    report.copy = copier.copy_tree(config.source_root, config.dest_root)

    logger.debug("Cleaning %s", config.dest_root)
    walker.clean(config.dest_root, config, report.stats)

    return report
