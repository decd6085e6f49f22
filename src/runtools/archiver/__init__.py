"""
Archiving of build artifacts: copies workspace files selected by Ant-style patterns into a persistent artifacts
directory of the build and optionally keeps only the artifacts of the latest best build.
"""

__version__ = "0.1.0"

from runtools.archiver.archiver import archive, pre_build
from runtools.archiver.build import Build, BuildHistory, BuildRecord
from runtools.archiver.config import ArchiveSpec, load_archive_spec
from runtools.archiver.err import ArchiverException, InvalidConfiguration, ConfigFileNotFoundError
from runtools.archiver.listener import BuildListener
from runtools.archiver.outcome import Outcome
from runtools.archiver.validation import Validation, ValidationKind, validate_include_pattern
