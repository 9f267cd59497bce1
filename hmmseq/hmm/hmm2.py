"""Second-order Hidden Markov Model: each state depends on the two previous ones.

Decoding runs a first-order shaped Viterbi over N**2 pair states, where the
pair (previous, current) is flattened with encode_pair(previous, current, N).
"""

from __future__ import annotations

from typing import Hashable, List, Sequence, Tuple, TypeVar

import numpy as np

from ..logging import get_logger
from .base import Hmm
from .utils import LOG_ZERO, column_normalize, decode_pair, encode_pair, skip_vector

S = TypeVar("S", bound=Hashable)
O = TypeVar("O", bound=Hashable)

logger = get_logger(__name__)


class Hmm2(Hmm[S, O]):
    """Supervised second-order HMM.

    Tables:
        prior: shape (N, N), joint counts of the first two states, normalized
            per column.
        transition_probabilities: shape (N*N, N); row encode_pair(a, b, N),
            column c counts a -> b -> c triples, normalized per column.
    """

    order = 2

    def _calculate_pi(self, observations: List[List[S]]) -> np.ndarray:
        """Count the first two states of every sequence, normalize per column."""
        pi = np.zeros((self.state_count, self.state_count))
        for observation in observations:
            first = self._state_indexes[observation[0]]
            second = self._state_indexes[observation[1]]
            pi[first, second] += 1.0
        return column_normalize(pi)

    def _calculate_transition_probabilities(self, observations: List[List[S]]) -> np.ndarray:
        """Count consecutive state triples, normalize per destination column."""
        n = self.state_count
        counts = np.zeros((n * n, n))
        for current in observations:
            for j in range(len(current) - 2):
                from1 = self._state_indexes[current[j]]
                from2 = self._state_indexes[current[j + 1]]
                to = self._state_indexes[current[j + 2]]
                counts[encode_pair(from1, from2, n), to] += 1.0
        return column_normalize(counts)

    def viterbi(self, symbols: Sequence[O]) -> Tuple[List[S], float]:
        """Viterbi algorithm over state pairs.

        log_delta[t, encode_pair(a, b)] is the best log-probability of a path
        whose states at t-1 and t are a and b. Row 0 is unused. Ties are
        broken in favour of the lowest index.

        Args:
            symbols: Observed symbols, length T >= 2.

        Returns:
            Tuple of (path, log_prob) where:
            - path: list of T states
            - log_prob: log-probability of this path
        """
        symbols = self._check_symbols(symbols)
        T = len(symbols)
        n = self.state_count
        n_pairs = n * n

        log_delta = np.full((T, n_pairs), LOG_ZERO)
        # psi[t, pair] holds the best pair at t-1
        psi = np.zeros((T, n_pairs), dtype=int)

        # Initialization covers t=0 and t=1 jointly; reshape is row-major so
        # cell (i, j) lands on encode_pair(i, j, n)
        log_e0 = self._log_emissions(symbols[0])
        log_e1 = self._log_emissions(symbols[1])
        log_delta[1, :] = (self._log_prior + log_e0[:, None] + log_e1[None, :]).reshape(n_pairs)

        # Recursion
        for t in range(2, T):
            log_emit = self._log_emissions(symbols[t])
            for pair in range(n_pairs):
                from2, to = decode_pair(pair, n)
                # Both vectors are indexed by from1
                log_trans = skip_vector(self._log_trans[:, to], n, from2)
                previous = skip_vector(log_delta[t - 1, :], n, from2)
                log_probs = log_trans + previous
                best_from1 = int(np.argmax(log_probs))
                log_delta[t, pair] = log_probs[best_from1] + log_emit[to]
                psi[t, pair] = encode_pair(best_from1, from2, n)

        # Termination: best final pair
        best_final = int(np.argmax(log_delta[T - 1, :]))
        log_prob = float(log_delta[T - 1, best_final])

        # Backtracking: each pair contributes its second state, the pair at
        # t=1 also contributes the first state of the sequence
        pairs = np.zeros(T, dtype=int)
        pairs[T - 1] = best_final
        for t in range(T - 2, 0, -1):
            pairs[t] = psi[t + 1, pairs[t + 1]]

        path = [0] * T
        path[0] = decode_pair(pairs[1], n)[0]
        for t in range(1, T):
            path[t] = decode_pair(pairs[t], n)[1]

        logger.debug("Decoded %d symbols, best log-probability %.6g", T, log_prob)
        return [self._state_labels[idx] for idx in path], log_prob

    def log_probability(self, states: Sequence[S], symbols: Sequence[O]) -> float:
        """Joint log-probability of a labeled sequence.

        log prior[s_0, s_1] + sum_t log e_{s_t}(o_t)
        + sum_{t>=2} log trans[encode_pair(s_{t-2}, s_{t-1}), s_t].

        Args:
            states: State sequence.
            symbols: Symbol sequence of the same length (>= 2).

        Returns:
            Log-probability, with LOG_ZERO added for every zero factor.

        Raises:
            ValueError: If lengths differ, are shorter than 2, or a state is unknown.
        """
        indices, symbols = self._check_labeled(states, symbols)
        n = self.state_count
        log_prob = self._log_prior[indices[0], indices[1]]
        for t, (idx, symbol) in enumerate(zip(indices, symbols)):
            log_prob += self._log_emissions(symbol)[idx]
            if t > 1:
                log_prob += self._log_trans[encode_pair(indices[t - 2], indices[t - 1], n), idx]
        return float(log_prob)
