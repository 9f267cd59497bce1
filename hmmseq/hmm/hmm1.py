"""First-order Hidden Markov Model: each state depends on the previous one."""

from __future__ import annotations

from typing import Hashable, List, Sequence, Tuple, TypeVar

import numpy as np

from ..logging import get_logger
from .base import Hmm
from .utils import column_normalize, l1_normalize

S = TypeVar("S", bound=Hashable)
O = TypeVar("O", bound=Hashable)

logger = get_logger(__name__)


class Hmm1(Hmm[S, O]):
    """Supervised first-order HMM.

    Tables:
        prior: shape (N,), P(state at position 0).
        transition_probabilities: shape (N, N); cell (i, j) counts i -> j
            transitions, normalized so that each column sums to 1.

    Example:
        >>> hmm = Hmm1(["HOT", "COLD"], [["HOT", "COLD"]], [[3, 1]])
        >>> hmm.decode([3, 1])
        ['HOT', 'COLD']
    """

    order = 1

    def _calculate_pi(self, observations: List[List[S]]) -> np.ndarray:
        """Count the first state of every sequence and L1-normalize."""
        pi = np.zeros(self.state_count)
        for observation in observations:
            pi[self._state_indexes[observation[0]]] += 1.0
        return l1_normalize(pi)

    def _calculate_transition_probabilities(self, observations: List[List[S]]) -> np.ndarray:
        """Count adjacent state pairs and normalize per destination column."""
        counts = np.zeros((self.state_count, self.state_count))
        for current in observations:
            for j in range(len(current) - 1):
                from_idx = self._state_indexes[current[j]]
                to_idx = self._state_indexes[current[j + 1]]
                counts[from_idx, to_idx] += 1.0
        return column_normalize(counts)

    def viterbi(self, symbols: Sequence[O]) -> Tuple[List[S], float]:
        """Viterbi algorithm: find the most likely state sequence.

        Ties are broken in favour of the lowest state index.

        Args:
            symbols: Observed symbols, length T >= 1.

        Returns:
            Tuple of (path, log_prob) where:
            - path: list of T states
            - log_prob: log-probability of this path
        """
        symbols = self._check_symbols(symbols)
        T = len(symbols)
        n = self.state_count

        # Viterbi log-probabilities and backpointers
        log_delta = np.zeros((T, n))
        psi = np.zeros((T, n), dtype=int)

        # Initialization
        log_delta[0, :] = self._log_prior + self._log_emissions(symbols[0])

        # Recursion
        for t in range(1, T):
            log_emit = self._log_emissions(symbols[t])
            for s in range(n):
                log_probs = log_delta[t - 1, :] + self._log_trans[:, s]
                best_prev = int(np.argmax(log_probs))
                log_delta[t, s] = log_probs[best_prev] + log_emit[s]
                psi[t, s] = best_prev

        # Termination: find best final state
        best_final = int(np.argmax(log_delta[T - 1, :]))
        log_prob = float(log_delta[T - 1, best_final])

        # Backtracking
        path = np.zeros(T, dtype=int)
        path[T - 1] = best_final
        for t in range(T - 2, -1, -1):
            path[t] = psi[t + 1, path[t + 1]]

        logger.debug("Decoded %d symbols, best log-probability %.6g", T, log_prob)
        return [self._state_labels[idx] for idx in path], log_prob

    def log_probability(self, states: Sequence[S], symbols: Sequence[O]) -> float:
        """Joint log-probability of a labeled sequence.

        log prior[s_0] + sum_t log e_{s_t}(o_t) + sum_t log trans[s_{t-1}, s_t].

        Args:
            states: State sequence.
            symbols: Symbol sequence of the same length (>= 1).

        Returns:
            Log-probability, with LOG_ZERO added for every zero factor.

        Raises:
            ValueError: If lengths differ or a state is unknown.
        """
        indices, symbols = self._check_labeled(states, symbols)
        log_prob = self._log_prior[indices[0]]
        for t, (idx, symbol) in enumerate(zip(indices, symbols)):
            log_prob += self._log_emissions(symbol)[idx]
            if t > 0:
                log_prob += self._log_trans[indices[t - 1], idx]
        return float(log_prob)
