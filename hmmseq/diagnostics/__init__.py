"""Diagnostics and debugging utilities for hmmseq."""

from .core import (
    assert_column_stochastic,
    assert_distribution,
    is_column_stochastic,
    is_distribution,
)
from .debug_mode import (
    check_trained_tables,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "is_distribution",
    "assert_distribution",
    "is_column_stochastic",
    "assert_column_stochastic",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    "check_trained_tables",
]
