"""
Latest-only retention of archived artifacts.

The history is walked from the newest build to the oldest while tracking the best outcome seen so far. A build whose
outcome is strictly better than anything newer is kept: it is the newest build at a new high-water mark of quality.
Every other build is superseded by a newer build at least as good, so its artifacts are deleted.
"""

import logging
import shutil
from typing import List

from runtools.archiver.build import BuildHistory, BuildRecord
from runtools.archiver.listener import BuildListener
from runtools.archiver.outcome import Outcome

log = logging.getLogger(__name__)


def superseded_builds(history: BuildHistory) -> List[BuildRecord]:
    """
    Returns builds of the history whose artifacts are not retained, newest first.
    """
    superseded = []
    best_so_far = Outcome.NOT_BUILT
    for record in history:
        if record.outcome.is_better_than(best_so_far):
            best_so_far = record.outcome
        else:
            superseded.append(record)

    return superseded


def sweep(history: BuildHistory, listener: BuildListener) -> List[BuildRecord]:
    """
    Deletes the artifact directories of all superseded builds of the history.

    A failure to delete a directory is reported to the listener and the sweep continues with the next build.

    Returns:
        Builds whose artifact directories were deleted
    """
    deleted = []
    for record in superseded_builds(history):
        if not record.artifacts_dir.exists():
            continue

        listener.info(f"Deleting old artifacts from {record.display_name}")
        try:
            shutil.rmtree(record.artifacts_dir)
        except OSError as e:
            log.warning("event=[artifacts_deletion_failed] build=[%s] dir=[%s]", record, record.artifacts_dir)
            listener.exception(str(e), e)
            continue

        log.info("event=[artifacts_deleted] build=[%s] dir=[%s]", record, record.artifacts_dir)
        deleted.append(record)

    return deleted
