"""Shared training skeleton for supervised discrete Hidden Markov Models.

A model is built once from the set of possible states and a labeled corpus
of aligned (state sequence, symbol sequence) pairs. Construction computes,
in order: a stable index for every state, the order-specific prior, the
per-state emission distributions and the order-specific transition table.
After construction the model is read-only and can decode symbol sequences
with the Viterbi algorithm any number of times, from any number of threads.

References:
    Jurafsky, D. & Martin, J. H. Speech and Language Processing, Appendix A:
    Hidden Markov Models.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Generic, Hashable, Iterable, List, Sequence, Tuple, TypeVar

import numpy as np

from ..diagnostics import check_trained_tables
from ..logging import get_logger
from .state import HmmState
from .utils import build_state_index, frequency_counts, safe_log

S = TypeVar("S", bound=Hashable)
O = TypeVar("O", bound=Hashable)

logger = get_logger(__name__)


class Hmm(ABC, Generic[S, O]):
    """Base class of supervised HMMs over discrete states and symbols.

    Subclasses supply the prior and transition estimators together with the
    matching Viterbi recurrence; emission estimation, corpus validation and
    table bookkeeping live here.

    Attributes:
        order: Number of preceding states a transition depends on.
        state_count: Number of distinct states N.
    """

    order: int = 1

    def __init__(
        self,
        states: Iterable[S],
        observations: Sequence[Sequence[S]],
        emitted_symbols: Sequence[Sequence[O]],
    ):
        """Train the model from a labeled corpus.

        Args:
            states: All possible states. Ordered iterables fix the index
                assignment; sets are ordered by (type name, repr).
            observations: Training state sequences.
            emitted_symbols: Training symbol sequences, aligned position by
                position with observations.

        Raises:
            ValueError: If the state set is empty, the corpus is empty or
                misaligned, a sequence is shorter than the model order, or a
                training state is not one of `states`.
        """
        self._state_indexes, self._state_labels = build_state_index(states)
        if not self._state_labels:
            raise ValueError("At least one state is required")
        self.state_count = len(self._state_labels)

        observations = [list(seq) for seq in observations]
        emitted_symbols = [list(seq) for seq in emitted_symbols]
        self._validate_corpus(observations, emitted_symbols)

        self._prior = self._calculate_pi(observations)

        hmm_states = []
        for state in self._state_labels:
            emission_probabilities = self.calculate_emission_probabilities(
                state, observations, emitted_symbols
            )
            if not emission_probabilities:
                logger.warning(
                    "State %r never occurs in the training corpus; its emission "
                    "distribution is empty",
                    state,
                )
            hmm_states.append(HmmState(state, emission_probabilities))
        self._states: Tuple[HmmState[S, O], ...] = tuple(hmm_states)

        self._transition = self._calculate_transition_probabilities(observations)

        # Trained tables are shared by concurrent decodes; keep them read-only
        self._prior.setflags(write=False)
        self._transition.setflags(write=False)
        self._log_prior = safe_log(self._prior)
        self._log_trans = safe_log(self._transition)
        self._log_prior.setflags(write=False)
        self._log_trans.setflags(write=False)

        check_trained_tables(
            self._prior,
            self._transition,
            {hmm_state.state: hmm_state.emission_probabilities for hmm_state in self._states},
        )

        logger.debug(
            "Trained order-%d HMM: %d states, %d training sequences",
            self.order,
            self.state_count,
            len(observations),
        )

    def _validate_corpus(
        self,
        observations: List[List[S]],
        emitted_symbols: List[List[O]],
    ) -> None:
        if len(observations) != len(emitted_symbols):
            raise ValueError(
                f"Got {len(observations)} state sequences but "
                f"{len(emitted_symbols)} symbol sequences"
            )
        if not observations:
            raise ValueError("At least one training sequence is required")

        for i, (states, symbols) in enumerate(zip(observations, emitted_symbols)):
            if len(states) != len(symbols):
                raise ValueError(
                    f"Training sequence {i} has {len(states)} states but "
                    f"{len(symbols)} symbols"
                )
            if len(states) < self.order:
                raise ValueError(
                    f"Training sequence {i} has length {len(states)}; an order-{self.order} "
                    f"model needs at least {self.order}"
                )
            unknown = [state for state in states if state not in self._state_indexes]
            if unknown:
                raise ValueError(
                    f"Training sequence {i} contains unknown state(s) {unknown[:5]!r}"
                )

    @abstractmethod
    def _calculate_pi(self, observations: List[List[S]]) -> np.ndarray:
        """Estimate the prior table from the first state(s) of every sequence."""

    @abstractmethod
    def _calculate_transition_probabilities(self, observations: List[List[S]]) -> np.ndarray:
        """Estimate the transition table from consecutive states."""

    @abstractmethod
    def viterbi(self, symbols: Sequence[O]) -> Tuple[List[S], float]:
        """Find the most probable state sequence for a symbol sequence.

        Args:
            symbols: Observed symbols.

        Returns:
            Tuple of (states, log_prob) where states has the same length as
            symbols and log_prob is the log-probability of that path. Every
            zero factor on the path contributes LOG_ZERO, so a sequence no
            path can produce still decodes around the impossible positions.
        """

    @abstractmethod
    def log_probability(self, states: Sequence[S], symbols: Sequence[O]) -> float:
        """Joint log-probability of a labeled sequence under the trained tables."""

    def calculate_emission_probabilities(
        self,
        state: S,
        observations: Sequence[Sequence[S]],
        emitted_symbols: Sequence[Sequence[O]],
    ) -> Dict[O, float]:
        """Estimate P(symbol | state) from every position labeled `state`.

        Args:
            state: State whose emission distribution is estimated.
            observations: Training state sequences.
            emitted_symbols: Aligned training symbol sequences.

        Returns:
            Mapping symbol -> probability. Empty if the state never occurs.
        """
        counts = frequency_counts(state, observations, emitted_symbols)
        total = sum(counts.values())
        if total == 0:
            return {}
        return {symbol: count / total for symbol, count in counts.items()}

    def decode(self, symbols: Sequence[O]) -> List[S]:
        """Return the most probable state sequence for `symbols`.

        Args:
            symbols: Observed symbols; at least `order` of them.

        Returns:
            List of states, same length as symbols.
        """
        path, _ = self.viterbi(symbols)
        return path

    @property
    def states(self) -> List[S]:
        """State labels in index order."""
        return list(self._state_labels)

    @property
    def hmm_states(self) -> Tuple[HmmState[S, O], ...]:
        """Per-state emission records in index order."""
        return self._states

    @property
    def prior(self) -> np.ndarray:
        """Read-only prior table."""
        return self._prior

    @property
    def transition_probabilities(self) -> np.ndarray:
        """Read-only transition table."""
        return self._transition

    def state_index(self, state: S) -> int:
        """Return the index assigned to `state`.

        Raises:
            KeyError: If state is not one of the model's states.
        """
        if state not in self._state_indexes:
            raise KeyError(f"State {state!r} is not part of this model")
        return self._state_indexes[state]

    def emission_probability(self, state: S, symbol: O) -> float:
        """Return P(symbol | state); 0.0 for symbols never emitted by state."""
        return self._states[self.state_index(state)].emit_prob(symbol)

    def _log_emissions(self, symbol: O) -> np.ndarray:
        """Log emission probability of `symbol` for every state, shape (N,)."""
        return safe_log(np.array([hmm_state.emit_prob(symbol) for hmm_state in self._states]))

    def _check_symbols(self, symbols: Sequence[O]) -> List[O]:
        symbols = list(symbols)
        if len(symbols) < self.order:
            raise ValueError(
                f"An order-{self.order} model needs at least {self.order} symbol(s) "
                f"to decode, got {len(symbols)}"
            )
        return symbols

    def _check_labeled(self, states: Sequence[S], symbols: Sequence[O]) -> Tuple[List[int], List[O]]:
        states = list(states)
        symbols = self._check_symbols(symbols)
        if len(states) != len(symbols):
            raise ValueError(f"Got {len(states)} states but {len(symbols)} symbols")
        unknown = [state for state in states if state not in self._state_indexes]
        if unknown:
            raise ValueError(f"Unknown state(s) {unknown[:5]!r}")
        return [self._state_indexes[state] for state in states], symbols

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self.order}, states={self._state_labels!r})"
