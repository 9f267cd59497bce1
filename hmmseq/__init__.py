"""hmmseq - supervised discrete Hidden Markov Models with Viterbi decoding."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_column_stochastic,
    assert_distribution,
    check_trained_tables,
    debug_context,
    is_column_stochastic,
    is_debug_enabled,
    is_distribution,
    set_debug_enabled,
)

# Models
from .hmm import (
    LOG_ZERO,
    Hmm,
    Hmm1,
    Hmm2,
    HmmConfig,
    HmmState,
    build_state_index,
    column_normalize,
    create_hmm,
    decode_pair,
    encode_pair,
    frequency_counts,
    l1_normalize,
    safe_log,
    skip_vector,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    # Version
    "__version__",
    # Models
    "Hmm",
    "Hmm1",
    "Hmm2",
    "HmmState",
    "HmmConfig",
    "create_hmm",
    # Numerical helpers
    "LOG_ZERO",
    "safe_log",
    "l1_normalize",
    "column_normalize",
    "skip_vector",
    "encode_pair",
    "decode_pair",
    "build_state_index",
    "frequency_counts",
    # Diagnostics
    "is_distribution",
    "assert_distribution",
    "is_column_stochastic",
    "assert_column_stochastic",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "check_trained_tables",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
