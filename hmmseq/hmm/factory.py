"""Factory for creating trained HMMs from configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Sequence

from .base import Hmm
from .hmm1 import Hmm1
from .hmm2 import Hmm2

_MODELS = {1: Hmm1, 2: Hmm2}


@dataclass(frozen=True)
class HmmConfig:
    """
    Configuration for creating an HMM.

    Args:
        order: Markov order of the transition model. Supported values: 1, 2.
    """

    order: int = 1


def create_hmm(
    config: HmmConfig | int,
    states: Iterable[Hashable],
    observations: Sequence[Sequence[Hashable]],
    emitted_symbols: Sequence[Sequence[Hashable]],
) -> Hmm:
    """
    Train an HMM of the configured order.

    Args:
        config: HmmConfig, or the order as a plain int.
        states: All possible states.
        observations: Training state sequences.
        emitted_symbols: Aligned training symbol sequences.

    Returns:
        A trained Hmm1 or Hmm2.

    Raises:
        ValueError: If the order is not supported, or if training fails
            validation.
    """
    order = config.order if isinstance(config, HmmConfig) else config
    if order not in _MODELS:
        raise ValueError(
            f"Unsupported HMM order: {order!r}. Supported orders are: 1, 2."
        )
    return _MODELS[order](states, observations, emitted_symbols)
