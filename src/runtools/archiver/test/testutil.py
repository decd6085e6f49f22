from pathlib import Path

import tomli_w

from runtools.archiver import paths


def create_test_config(config):
    return create_custom_test_config(paths.ARCHIVE_FILE, config)


def create_custom_test_config(filename, config):
    path = _custom_test_config_path(filename)
    with open(path, 'wb') as outfile:
        tomli_w.dump(config, outfile)
    return path


def remove_test_config():
    remove_custom_test_config(paths.ARCHIVE_FILE)


def remove_custom_test_config(filename):
    config = _custom_test_config_path(filename)
    if config.exists():
        config.unlink()


def _custom_test_config_path(filename) -> Path:
    return Path.cwd() / filename
