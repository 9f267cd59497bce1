"""Pytest configuration and shared fixtures for hmmseq tests.

This module provides:
- A deterministic numpy RNG fixture
- The labeled HOT/COLD weather corpus used by the decoding regression tests
- A factory for random labeled corpora
"""

import os
from typing import Callable, List, Tuple

import numpy as np
import pytest

CorpusT = Tuple[List[int], List[List[int]], List[List[str]]]


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture(scope="session")
def weather_states() -> List[str]:
    """The two hidden weather states, HOT first."""
    return ["HOT", "COLD"]


@pytest.fixture(scope="session")
def weather_corpus() -> Tuple[List[List[str]], List[List[int]]]:
    """Labeled corpus: daily weather and number of ice creams eaten (1-3)."""
    observations = [
        ["HOT", "HOT", "HOT"],
        ["HOT", "COLD", "COLD", "COLD"],
        ["HOT", "COLD", "HOT", "COLD"],
        ["COLD", "COLD", "COLD", "HOT", "HOT"],
        ["COLD", "HOT", "HOT", "COLD", "COLD"],
    ]
    emitted_symbols = [
        [3, 2, 3],
        [2, 2, 1, 1],
        [3, 1, 2, 1],
        [3, 1, 2, 2, 3],
        [1, 2, 3, 2, 1],
    ]
    return observations, emitted_symbols


@pytest.fixture(scope="function")
def random_corpus(rng: np.random.Generator) -> Callable[..., CorpusT]:
    """Factory for random labeled corpora over integer states and string symbols."""

    def make(n_states: int, n_symbols: int, n_sequences: int, length: int) -> CorpusT:
        states = list(range(n_states))
        observations = [
            rng.integers(0, n_states, size=length).tolist() for _ in range(n_sequences)
        ]
        emitted_symbols = [
            [f"s{v}" for v in rng.integers(0, n_symbols, size=length)]
            for _ in range(n_sequences)
        ]
        return states, observations, emitted_symbols

    return make
