from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from runtools.archiver import fileset


class ValidationKind(Enum):
    OK = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass(frozen=True)
class Validation:
    kind: ValidationKind
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> 'Validation':
        return cls(ValidationKind.OK)

    @classmethod
    def warning(cls, message) -> 'Validation':
        return cls(ValidationKind.WARNING, message)

    @classmethod
    def error(cls, message) -> 'Validation':
        return cls(ValidationKind.ERROR, message)

    def __bool__(self):
        return self.kind == ValidationKind.OK


def validate_include_pattern(workspace_hint, pattern: Optional[str], *, error_if_not_exist=True) -> Validation:
    """
    Checks an include pattern against a workspace for interactive feedback while the pattern is being configured.
    Nothing here is enforced when archiving.

    Args:
        workspace_hint: Some workspace of the job, or None when no workspace is known yet
        pattern: The include pattern being configured
        error_if_not_exist: Report a pattern matching nothing as an error, otherwise as a warning

    Returns:
        The result of the validation; OK when there is nothing to check against
    """
    if workspace_hint is None or not pattern or not pattern.strip():
        return Validation.ok()

    if pattern.startswith('~'):
        return Validation.error("Tilde expansion is not supported")

    try:
        msg = fileset.validate_file_mask(workspace_hint, pattern)
    except OSError as e:
        return Validation.error(str(e))

    if msg is None:
        return Validation.ok()
    return Validation.error(msg) if error_if_not_exist else Validation.warning(msg)
