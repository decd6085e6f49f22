"""
Build outcomes ordered from the worst to the best. Comparisons between outcomes are done through the explicit
`is_better_than` family of methods rather than rich comparison operators so the direction of a comparison is never
ambiguous at the call site.
"""

from enum import Enum


class Outcome(Enum):
    ABORTED = 0  # Interrupted before it could finish.
    NOT_BUILT = 1  # Never got to run its main work.
    FAILURE = 2  # Failed.
    UNSTABLE = 3  # Built but with problems, e.g. failing tests.
    SUCCESS = 4  # Completed successfully.

    @classmethod
    def from_name(cls, name: str) -> 'Outcome':
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown outcome: {name}") from None

    def is_better_than(self, other: 'Outcome') -> bool:
        return self.value > other.value

    def is_better_or_equal_to(self, other: 'Outcome') -> bool:
        return self.value >= other.value

    def is_worse_than(self, other: 'Outcome') -> bool:
        return self.value < other.value

    def is_worse_or_equal_to(self, other: 'Outcome') -> bool:
        return self.value <= other.value

    def combine(self, other: 'Outcome') -> 'Outcome':
        """Returns the worse of the two outcomes."""
        return self if self.is_worse_than(other) else other
