"""
The build side of archiving: immutable records of completed builds, their history and the mutable handle of the
build currently being processed.

The history of a job is an ordered snapshot (newest build first) rather than a live chain of builds, so walking it
is never affected by builds completing or being removed in the meantime.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Sequence

from runtools.archiver.outcome import Outcome
from runtools.archiver.util import replace_macro


@dataclass(frozen=True)
class BuildRecord:
    """
    A snapshot of a completed build.

    Attributes:
        number (int): Sequence number of the build within its job.
        display_name (str): Name of the build used in console messages.
        outcome (Outcome): The final outcome of the build.
        artifacts_dir (Path): Directory holding the archived artifacts of the build.
    """
    number: int
    display_name: str
    outcome: Outcome
    artifacts_dir: Path

    @classmethod
    def deserialize(cls, as_dict: Dict[str, Any]) -> 'BuildRecord':
        return cls(
            number=as_dict['number'],
            display_name=as_dict.get('display_name') or f"#{as_dict['number']}",
            outcome=Outcome.from_name(as_dict['outcome']),
            artifacts_dir=Path(as_dict['artifacts_dir']),
        )

    def serialize(self) -> Dict[str, Any]:
        return {
            'number': self.number,
            'display_name': self.display_name,
            'outcome': self.outcome.name,
            'artifacts_dir': str(self.artifacts_dir),
        }

    def __str__(self):
        return f"{self.display_name} [{self.outcome.name}]"


class BuildHistory(Sequence[BuildRecord]):
    """
    Completed builds of a job ordered from the newest to the oldest.
    """

    def __init__(self, records=()):
        self._records: Tuple[BuildRecord, ...] = tuple(records)

    @classmethod
    def from_chain(cls, newest, *, number_attr='number', previous_attr='previous') -> 'BuildHistory':
        """
        Creates a snapshot of a linked chain of builds.

        Each link must provide `outcome`, `artifacts_dir` and `display_name` attributes and a reference to the
        preceding build under `previous_attr`. The reference may also be a zero-argument callable (e.g. a weak
        reference) returning the preceding build or None.

        Args:
            newest: The newest completed build or None for an empty history
            number_attr: Name of the attribute holding the build number; position in the chain is used if missing
            previous_attr: Name of the attribute referencing the preceding build
        """
        links = []
        current = newest
        while current is not None:
            links.append(current)
            previous = getattr(current, previous_attr, None)
            current = previous() if callable(previous) else previous

        records = []
        for index, link in enumerate(links):
            records.append(BuildRecord(
                number=getattr(link, number_attr, len(links) - index),
                display_name=link.display_name,
                outcome=link.outcome,
                artifacts_dir=Path(link.artifacts_dir),
            ))
        return cls(records)

    @classmethod
    def deserialize(cls, as_list) -> 'BuildHistory':
        return cls(BuildRecord.deserialize(r) for r in as_list)

    def serialize(self):
        return [record.serialize() for record in self._records]

    @property
    def newest(self) -> Optional[BuildRecord]:
        return self._records[0] if self._records else None

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BuildHistory(self._records[index])
        return self._records[index]

    def __len__(self):
        return len(self._records)

    def __iter__(self) -> Iterator[BuildRecord]:
        return iter(self._records)

    def __eq__(self, other):
        if not isinstance(other, BuildHistory):
            return NotImplemented
        return self._records == other._records

    def __hash__(self):
        return hash(self._records)

    def __repr__(self):
        return f"BuildHistory({list(self._records)!r})"


@dataclass
class Build:
    """
    The build currently being processed, as seen by the archiving steps.

    The `result` field is the shared outcome of the build. Any step may assign it, but by convention a step only ever
    worsens the outcome; that discipline is left to the callers and not enforced here.

    Attributes:
        display_name: Name of the build used in console messages.
        artifacts_dir: Directory into which the artifacts of this build are archived.
        workspace: Directory with the working files of the build, None when unavailable (e.g. the agent is offline).
        result: Current outcome of the build.
        environment: Variables available for expansion in patterns.
        history: Previously completed builds of the same job, newest first.
        expander: Text substitution applied to patterns; defaults to `$NAME`/`${NAME}` expansion over `environment`.
    """
    display_name: str
    artifacts_dir: Path
    workspace: Optional[Path] = None
    result: Outcome = Outcome.SUCCESS
    environment: Dict[str, str] = field(default_factory=dict)
    history: BuildHistory = field(default_factory=BuildHistory)
    expander: Optional[Callable[[str], str]] = None

    def __post_init__(self):
        self.artifacts_dir = Path(self.artifacts_dir)
        if self.workspace is not None:
            self.workspace = Path(self.workspace)

    def expand(self, text: str) -> str:
        if self.expander:
            return self.expander(text)
        return replace_macro(text, self.environment)
