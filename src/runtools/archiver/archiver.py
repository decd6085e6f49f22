"""
The archiving steps run for each build of a job:

 - `pre_build` runs before the build's main work and applies the latest-only retention to the previous builds
 - `archive` runs after the build's main work and copies matching workspace files into the build's artifacts directory

Both steps are best-effort: they never raise to the caller and always report the processing as completed. Failures
are written to the build console, and a misconfigured or unmatched include pattern fails the build by setting its
result.
"""

import logging

from runtools.archiver import fileset, retention
from runtools.archiver.build import Build
from runtools.archiver.config import ArchiveSpec
from runtools.archiver.listener import BuildListener
from runtools.archiver.outcome import Outcome

log = logging.getLogger(__name__)

NO_INCLUDES = ("No artifacts are configured for archiving.\n"
               "You probably forgot to set the file pattern, so please go back to the configuration and specify it.\n"
               "If you really did mean to archive all the files in the workspace, please specify \"**\"")
ARCHIVING_ARTIFACTS = "Archiving artifacts"
NO_MATCH_FOUND = "No artifacts found that match the file pattern \"{}\". Configuration error?"
FAILED_TO_ARCHIVE = "Failed to archive artifacts: {}"
FAILED_TO_CREATE_DIR = "Failed to create artifacts directory {}: {}"


def _warn_or_error(spec: ArchiveSpec, listener: BuildListener, message: str):
    if spec.allow_empty_archive:
        listener.warn(message)
    else:
        listener.error(message)


def archive(spec: ArchiveSpec, build: Build, listener: BuildListener) -> bool:
    """
    Copies workspace files matching the spec's patterns into the artifacts directory of the build.

    Policy:
     - a blank include pattern fails the build without touching the file system
     - an unavailable workspace skips the archiving silently
     - no matching files fail the build unless `allow_empty_archive` is set; the "no match" diagnostic is reported only
       if the build was not already worse than UNSTABLE
     - an I/O error or a failed pattern expansion is reported but does not change the result of the build

    Returns:
        Always True, the pipeline continues regardless of the archiving result
    """
    if not spec.include_pattern.strip():
        listener.error(NO_INCLUDES)
        build.result = Outcome.FAILURE
        log.debug("event=[archive_rejected] reason=[no_includes] build=[%s]", build.display_name)
        return True

    try:
        build.artifacts_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Not fatal here, the copy reports the failure if the directory is really unusable
        log.warning("event=[artifacts_dir_creation_failed] build=[%s] dir=[%s] error=[%s]",
                    build.display_name, build.artifacts_dir, e)
        listener.error(FAILED_TO_CREATE_DIR.format(build.artifacts_dir, e))
    listener.info(ARCHIVING_ARTIFACTS)

    workspace = build.workspace
    if workspace is None:
        log.debug("event=[archive_skipped] reason=[workspace_unavailable] build=[%s]", build.display_name)
        return True

    try:
        artifacts = build.expand(spec.include_pattern)
    except Exception as e:
        log.warning("event=[pattern_expansion_failed] build=[%s] pattern=[%s] error=[%s]",
                    build.display_name, spec.include_pattern, e)
        listener.exception(FAILED_TO_ARCHIVE.format(spec.include_pattern), e)
        return True

    try:
        copied = fileset.copy_recursive(
            workspace, artifacts, spec.exclude_pattern, build.artifacts_dir, default_excludes=spec.default_excludes)
    except OSError as e:
        log.warning("event=[archive_failed] build=[%s] pattern=[%s] error=[%s]", build.display_name, artifacts, e)
        listener.exception(FAILED_TO_ARCHIVE.format(artifacts), e)
        return True

    log.debug("event=[archive_completed] build=[%s] pattern=[%s] files=[%d]", build.display_name, artifacts, copied)
    if copied:
        return True

    # A failed build most likely never got to produce its artifacts, the missing match is not worth reporting
    if build.result.is_better_or_equal_to(Outcome.UNSTABLE):
        _warn_or_error(spec, listener, NO_MATCH_FOUND.format(artifacts))
        msg = None
        try:
            msg = fileset.validate_file_mask(workspace, artifacts)
        except Exception as e:
            _warn_or_error(spec, listener, str(e))
        if msg:
            _warn_or_error(spec, listener, msg)

    if not spec.allow_empty_archive:
        build.result = Outcome.FAILURE

    return True


def pre_build(spec: ArchiveSpec, build: Build, listener: BuildListener) -> bool:
    """
    Deletes superseded artifacts of the previous builds when the spec keeps the latest artifacts only.

    Returns:
        Always True, the pipeline continues regardless of the deletion results
    """
    if spec.latest_only:
        deleted = retention.sweep(build.history, listener)
        log.debug("event=[retention_applied] build=[%s] deleted=[%d]", build.display_name, len(deleted))

    return True
