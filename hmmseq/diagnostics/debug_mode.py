"""Debug mode for hmmseq.

When debug mode is on, every model validates its trained tables right after
estimation: each emission map must sum to one (or be empty for a state that
never occurs), the prior must be a distribution (order 1) or column-stochastic
(order 2), and the transition table must be column-stochastic. Debug mode
starts from the HMMSEQ_DEBUG environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Hashable, Iterator, Mapping

import numpy as np

from ..logging import get_logger
from .core import assert_column_stochastic, assert_distribution

_DEBUG_ENV_VAR = "HMMSEQ_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})

logger = get_logger(__name__)


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(_DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """Return whether trained tables are validated after estimation."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Globally enable or disable table validation for models trained afterwards."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """Temporarily enable or disable debug mode.

    Args:
        enabled: Debug mode inside the block. The previous mode is restored on
            exit, also when the block raises.

    Example:
        >>> with debug_context(True):
        ...     hmm = Hmm1(states, observations, emitted_symbols)  # validated
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev


def check_trained_tables(
    prior: np.ndarray,
    transition: np.ndarray,
    emissions: Mapping[Hashable, Mapping[Hashable, float]],
    atol: float = 1e-8,
) -> bool:
    """Validate freshly estimated HMM tables if debug mode is on.

    Args:
        prior: Prior table, shape (N,) or (N, N).
        transition: Transition table, shape (N, N) or (N*N, N).
        emissions: Mapping state -> (symbol -> probability).
        atol: Absolute tolerance on every sum.

    Returns:
        True if the checks ran, False if debug mode is off.

    Raises:
        ValueError: If debug mode is on and a table is not normalized. The
            message names the offending table.
    """
    if not _debug_enabled:
        return False

    for state, probabilities in emissions.items():
        assert_distribution(
            list(probabilities.values()),
            atol=atol,
            allow_zero=True,
            name=f"Emission distribution of {state!r}",
        )
    if np.ndim(prior) == 1:
        assert_distribution(prior, atol=atol, name="Prior")
    else:
        assert_column_stochastic(prior, atol=atol, name="Prior")
    assert_column_stochastic(transition, atol=atol, name="Transition matrix")

    logger.debug(
        "Debug checks passed: prior %s, transitions %s, %d emission maps",
        np.shape(prior),
        np.shape(transition),
        len(emissions),
    )
    return True
