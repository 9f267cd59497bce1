"""Tests for the second-order Hidden Markov Model."""

import itertools

import numpy as np
import pytest

from hmmseq.diagnostics import debug_context, is_column_stochastic
from hmmseq.hmm import LOG_ZERO, Hmm2, decode_pair, encode_pair


@pytest.fixture
def weather_hmm2(weather_states, weather_corpus):
    observations, emitted_symbols = weather_corpus
    return Hmm2(weather_states, observations, emitted_symbols)


@pytest.fixture
def deterministic_hmm2():
    """State A always emits 'a', state B always emits 'b'."""
    observations = [
        ["A", "A", "B"],
        ["A", "B", "B"],
        ["B", "A", "A"],
        ["B", "B", "A"],
    ]
    emitted_symbols = [[state.lower() for state in seq] for seq in observations]
    return Hmm2(["A", "B"], observations, emitted_symbols)


def _brute_force_best(hmm, symbols):
    best = -np.inf
    for path in itertools.product(hmm.states, repeat=len(symbols)):
        best = max(best, hmm.log_probability(path, symbols))
    return best


class TestEstimation:
    """Parameter estimation on the weather corpus."""

    def test_prior_is_joint_over_first_two_states(self, weather_hmm2):
        # First pairs: (H,H), (H,C), (H,C), (C,C), (C,H)
        expected = np.array([[0.5, 2 / 3], [0.5, 1 / 3]])
        assert weather_hmm2.prior.shape == (2, 2)
        assert np.allclose(weather_hmm2.prior, expected)
        assert np.allclose(np.sum(weather_hmm2.prior, axis=0), 1.0)

    def test_transition_table_shape_and_values(self, weather_hmm2):
        trans = weather_hmm2.transition_probabilities
        assert trans.shape == (4, 2)
        # Rows: (H,H), (H,C), (C,H), (C,C); columns: next state H, C
        expected = np.array(
            [
                [1 / 5, 1 / 6],
                [1 / 5, 2 / 6],
                [2 / 5, 1 / 6],
                [1 / 5, 2 / 6],
            ]
        )
        assert np.allclose(trans, expected)
        assert is_column_stochastic(trans)

    def test_transition_rows_use_pair_encoding(self, weather_hmm2):
        hot = weather_hmm2.state_index("HOT")
        cold = weather_hmm2.state_index("COLD")
        trans = weather_hmm2.transition_probabilities
        # Two COLD -> HOT -> HOT triples out of five transitions into HOT
        assert trans[encode_pair(cold, hot, 2), hot] == pytest.approx(2 / 5)

    def test_emissions_match_order1_estimator(self, weather_hmm2):
        assert weather_hmm2.emission_probability("HOT", 3) == pytest.approx(0.5)
        assert weather_hmm2.emission_probability("COLD", 1) == pytest.approx(7 / 11)
        for hmm_state in weather_hmm2.hmm_states:
            assert sum(hmm_state.emission_probabilities.values()) == pytest.approx(1.0)

    def test_no_triples_leaves_zero_transitions(self):
        hmm = Hmm2(["A", "B"], [["A", "B"], ["B", "B"]], [["x", "y"], ["y", "y"]])
        assert np.all(hmm.transition_probabilities == 0.0)
        assert not np.any(np.isnan(hmm.transition_probabilities))
        # Column A of the prior was never observed
        assert np.all(hmm.prior[:, 0] == 0.0)
        assert np.allclose(hmm.prior[:, 1], [0.5, 0.5])

        # Every path pays one zero transition; the emissions still decide
        path, log_prob = hmm.viterbi(["x", "y", "y"])
        assert path == ["A", "B", "B"]
        assert log_prob == pytest.approx(np.log(0.5) + LOG_ZERO)

    def test_debug_mode_accepts_trained_tables(self, weather_states, weather_corpus):
        observations, emitted_symbols = weather_corpus
        with debug_context(True):
            hmm = Hmm2(weather_states, observations, emitted_symbols)
        assert hmm.order == 2


class TestViterbi:
    """Order-2 Viterbi decoding over state pairs."""

    def test_deterministic_emissions(self, deterministic_hmm2):
        assert deterministic_hmm2.decode(["a", "b", "b", "a"]) == ["A", "B", "B", "A"]
        assert deterministic_hmm2.decode(["a", "a", "b"]) == ["A", "A", "B"]
        assert deterministic_hmm2.decode(["b", "a", "a", "b", "b", "a"]) == [
            "B",
            "A",
            "A",
            "B",
            "B",
            "A",
        ]

    def test_length_two_returns_best_initial_pair(self, weather_hmm2):
        symbols = [2, 3]
        n = weather_hmm2.state_count
        scores = np.full(n * n, LOG_ZERO)
        for i, first in enumerate(weather_hmm2.states):
            for j, second in enumerate(weather_hmm2.states):
                p = (
                    weather_hmm2.prior[i, j]
                    * weather_hmm2.emission_probability(first, symbols[0])
                    * weather_hmm2.emission_probability(second, symbols[1])
                )
                if p > 0:
                    scores[encode_pair(i, j, n)] = np.log(p)
        first, second = decode_pair(int(np.argmax(scores)), n)

        path, log_prob = weather_hmm2.viterbi(symbols)
        assert path == [weather_hmm2.states[first], weather_hmm2.states[second]]
        assert log_prob == pytest.approx(np.max(scores))

    def test_length_two_deterministic(self, deterministic_hmm2):
        assert deterministic_hmm2.decode(["b", "a"]) == ["B", "A"]

    def test_output_length_matches_input(self, weather_hmm2):
        for length in range(2, 9):
            symbols = [1, 2, 3] * 3
            assert len(weather_hmm2.decode(symbols[:length])) == length

    def test_decode_is_deterministic(self, weather_hmm2):
        symbols = [3, 2, 1, 1, 2, 3]
        first = weather_hmm2.decode(symbols)
        assert all(weather_hmm2.decode(symbols) == first for _ in range(5))

    def test_matches_brute_force(self, weather_hmm2):
        for symbols in ([1, 2, 3, 3, 2], [2, 2, 2], [3, 1, 3, 1], [2, 3]):
            path, log_prob = weather_hmm2.viterbi(symbols)
            best = _brute_force_best(weather_hmm2, symbols)
            assert log_prob == pytest.approx(best)
            assert weather_hmm2.log_probability(path, symbols) == pytest.approx(best)

    def test_random_corpus_matches_brute_force(self, random_corpus, rng):
        states, observations, emitted_symbols = random_corpus(
            n_states=3, n_symbols=3, n_sequences=12, length=8
        )
        hmm = Hmm2(states, observations, emitted_symbols)
        for _ in range(5):
            symbols = [f"s{v}" for v in rng.integers(0, 3, size=5)]
            path, log_prob = hmm.viterbi(symbols)
            best = _brute_force_best(hmm, symbols)
            assert len(path) == len(symbols)
            assert log_prob == pytest.approx(best)
            assert hmm.log_probability(path, symbols) == pytest.approx(best)

    def test_unseen_symbol_is_not_an_error(self, deterministic_hmm2):
        path, log_prob = deterministic_hmm2.viterbi(["a", "z", "b"])
        assert path[0] == "A"
        assert path[2] == "B"
        assert log_prob == pytest.approx(2 * np.log(0.5) + LOG_ZERO)

    def test_unseen_symbol_keeps_surrounding_evidence(self, weather_hmm2):
        symbols = [1, 1, 99, 1, 1]
        path, log_prob = weather_hmm2.viterbi(symbols)
        assert [path[t] for t in (0, 1, 3, 4)] == ["COLD"] * 4
        assert path == ["COLD"] * 5
        assert 2 * LOG_ZERO < log_prob <= LOG_ZERO
        assert log_prob == pytest.approx(weather_hmm2.log_probability(path, symbols))


class TestPreconditions:
    """Boundary validation."""

    def test_training_sequence_too_short(self):
        with pytest.raises(ValueError, match="at least 2"):
            Hmm2(["A"], [["A", "A"], ["A"]], [["x", "x"], ["x"]])

    def test_decode_input_too_short(self, weather_hmm2):
        with pytest.raises(ValueError, match="at least 2"):
            weather_hmm2.decode([1])
        with pytest.raises(ValueError, match="at least 2"):
            weather_hmm2.decode([])

    def test_log_probability_needs_two_positions(self, weather_hmm2):
        with pytest.raises(ValueError, match="at least 2"):
            weather_hmm2.log_probability(["HOT"], [3])

    def test_empty_state_set(self):
        with pytest.raises(ValueError, match="At least one state"):
            Hmm2(set(), [["A", "A"]], [["x", "x"]])
