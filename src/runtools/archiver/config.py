from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from runtools.archiver import paths
from runtools.archiver.err import InvalidConfiguration
from runtools.archiver.util import files

ARCHIVE_TABLE = 'archive'


class ArchiveSpec(BaseModel):
    """
    Configuration of the artifact archiving step of a job. Created when the job is configured and read-only after.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    include_pattern: str = Field(
        validation_alias=AliasChoices('include_pattern', 'artifacts'),
        description="Comma or space separated list of patterns of files to be archived"
    )
    exclude_pattern: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices('exclude_pattern', 'excludes'),
        description="Comma or space separated list of patterns of files excluded from archiving"
    )
    latest_only: bool = Field(
        default=False,
        description="Keep the artifacts of the latest best build only, delete the older ones"
    )
    allow_empty_archive: bool = Field(
        default=False,
        description="Only warn instead of failing the build when no artifacts match"
    )
    default_excludes: bool = Field(
        default=True,
        description="Never archive VCS metadata and editor backup files"
    )

    @field_validator('exclude_pattern')
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @classmethod
    def from_dict(cls, as_dict: Dict[str, Any]) -> 'ArchiveSpec':
        """
        Binds a structured configuration payload.

        Raises:
            ValidationError: If the payload is not a valid archive configuration.
        """
        return cls.model_validate(as_dict)


def load_archive_spec(path=None) -> ArchiveSpec:
    """
    Loads the archive configuration from the `[archive]` table of a TOML file.

    Args:
        path: Path to the configuration file; the config search path is used to look up `archive.toml` if None.

    Returns:
        The validated archive configuration.

    Raises:
        ConfigFileNotFoundError: If no path was given and the lookup in the search path failed.
        FileNotFoundError: If the given file does not exist.
        InvalidConfiguration: If the file has no `[archive]` table.
        ValidationError: If the table is not a valid archive configuration.
    """
    config_path = Path(path) if path else paths.lookup_archive_file()
    config = files.read_toml_file(config_path)
    archive_table = config.get(ARCHIVE_TABLE)
    if not isinstance(archive_table, dict):
        raise InvalidConfiguration(f"Table `[{ARCHIVE_TABLE}]` is mandatory in the config file: {config_path}")

    return ArchiveSpec.from_dict(archive_table)
