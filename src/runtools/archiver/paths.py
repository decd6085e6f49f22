"""
Followed conventions:
 - https://specifications.freedesktop.org/basedir-spec/basedir-spec-latest.html
"""

import os
from pathlib import Path
from typing import List

from runtools.archiver.err import ConfigFileNotFoundError

CONFIG_DIR = 'runtools'
ARCHIVE_FILE = 'archive.toml'
ARTIFACTS_DIR = 'archive'


def archive_config_search_path() -> List[Path]:
    """Directories searched for the archive config file, in order:

    1. Current working directory
    2. ${XDG_CONFIG_HOME}/runtools, defaults to ${HOME}/.config/runtools
    3. ${XDG_CONFIG_DIRS}/runtools, defaults to /etc/xdg/runtools
    4. /etc/runtools
    """
    config_home = Path(os.environ.get('XDG_CONFIG_HOME') or Path.home() / '.config')
    config_dirs = [Path(d) for d in (os.environ.get('XDG_CONFIG_DIRS') or '/etc/xdg').split(':') if d]
    return [Path.cwd()] + [d / CONFIG_DIR for d in [config_home, *config_dirs, Path('/etc')]]


def lookup_archive_file() -> Path:
    """
    :return: the first archive config file found in the search path
    :raise ConfigFileNotFoundError: when no directory of the search path contains the file
    """
    search_path = archive_config_search_path()
    for config_dir in search_path:
        if (config := config_dir / ARCHIVE_FILE).exists():
            return config

    raise ConfigFileNotFoundError(ARCHIVE_FILE, search_path)


def artifacts_dir(build_dir) -> Path:
    """
    :param build_dir: directory of a single build of a job
    :return: directory holding the archived artifacts of the build
    """
    return Path(build_dir) / ARTIFACTS_DIR
