"""
Extraction outcomes for response_values.

Each configured key ends an extraction cycle with one of three outcomes:
a value was found, nothing matched, or evaluating the expression failed.
A cycle's outcomes are collected into an immutable ValueSnapshot.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union


@dataclass(frozen=True)
class Found:
    """One or more matches, joined into a single value."""
    value: str


@dataclass(frozen=True)
class NotFound:
    """The expression matched nothing in this document."""

    @property
    def value(self) -> None:
        return None


@dataclass(frozen=True)
class EvaluationError:
    """The expression could not be evaluated against this document."""
    detail: str

    @property
    def value(self) -> None:
        return None


Outcome = Union[Found, NotFound, EvaluationError]


@dataclass(frozen=True, eq=False)
class ValueSnapshot(Mapping[str, Optional[str]]):
    """
    Immutable result of one extraction cycle.

    Maps every active key to its value, or None when the key produced no value.
    A key present with None is distinguishable from a key that was never
    configured via ``in``.
    """
    outcomes: Mapping[str, Outcome] = field(default_factory=dict)
    document_error: bool = False

    def __post_init__(self):
        object.__setattr__(self, "outcomes", MappingProxyType(dict(self.outcomes)))

    @classmethod
    def empty(cls) -> "ValueSnapshot":
        """Snapshot used before any response has been seen."""
        return cls()

    def skipped(self) -> "ValueSnapshot":
        """Copy of this snapshot flagged as carried over from a failed cycle."""
        return ValueSnapshot(self.outcomes, document_error=True)

    def outcome(self, key: str) -> Optional[Outcome]:
        return self.outcomes.get(key)

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {key: outcome.value for key, outcome in self.outcomes.items()}

    def __getitem__(self, key: str) -> Optional[str]:
        return self.outcomes[key].value

    def __iter__(self) -> Iterator[str]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)
