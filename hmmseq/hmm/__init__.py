"""Supervised discrete Hidden Markov Models.

This package provides:
- Maximum-likelihood estimation of priors, emissions and transitions from
  fully labeled training sequences
- First-order (Hmm1) and second-order (Hmm2) models
- Log-space Viterbi decoding; the second-order decoder runs over
  flattened state pairs

All estimation is deterministic and trained models are read-only.
"""

from .base import Hmm
from .factory import HmmConfig, create_hmm
from .hmm1 import Hmm1
from .hmm2 import Hmm2
from .state import HmmState
from .utils import (
    LOG_ZERO,
    build_state_index,
    column_normalize,
    decode_pair,
    encode_pair,
    frequency_counts,
    l1_normalize,
    safe_log,
    skip_vector,
)

__all__ = [
    "Hmm",
    "Hmm1",
    "Hmm2",
    "HmmState",
    "HmmConfig",
    "create_hmm",
    "LOG_ZERO",
    "safe_log",
    "l1_normalize",
    "column_normalize",
    "skip_vector",
    "encode_pair",
    "decode_pair",
    "build_state_index",
    "frequency_counts",
]

# Example usage:
# from hmmseq.hmm import Hmm1
#
# hmm = Hmm1(["HOT", "COLD"], [["HOT", "HOT", "COLD"]], [[3, 2, 1]])
# hmm.decode([3, 3, 1])  # ['HOT', 'HOT', 'COLD']
