"""Per-state emission record."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Generic, Hashable, List, Mapping, TypeVar

S = TypeVar("S", bound=Hashable)
O = TypeVar("O", bound=Hashable)


@dataclass(frozen=True)
class HmmState(Generic[S, O]):
    """A hidden state together with its emission distribution.

    Symbols missing from the mapping were never emitted by this state in the
    training corpus and have probability 0.

    Attributes:
        state: The caller-supplied state label.
        emission_probabilities: Read-only mapping symbol -> P(symbol | state).
    """

    state: S
    # Compared by value but excluded from the hash, which uses the label only
    emission_probabilities: Mapping[O, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "emission_probabilities",
            MappingProxyType(dict(self.emission_probabilities)),
        )

    def emit_prob(self, symbol: O) -> float:
        """Return P(symbol | state), 0.0 for symbols never seen with this state."""
        return self.emission_probabilities.get(symbol, 0.0)

    def symbols(self) -> List[O]:
        """Return the symbols this state emitted during training."""
        return list(self.emission_probabilities)
