"""Logging utilities for hmmseq.

Provides package-scoped loggers with a shared format and level control.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_LOG_LEVEL_ENV_VAR = "HMMSEQ_LOG_LEVEL"

# Default logging level, overridable through HMMSEQ_LOG_LEVEL
_DEFAULT_LEVEL = getattr(
    logging, os.getenv(_LOG_LEVEL_ENV_VAR, "WARNING").upper(), logging.WARNING
)
if not isinstance(_DEFAULT_LEVEL, int):
    _DEFAULT_LEVEL = logging.WARNING

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be `__name__` from the calling module.

    Args:
        name: Logger name (typically `__name__`). If None, returns the
            package root logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from hmmseq.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Training order-1 model")
    """
    if name is None:
        name = "hmmseq"

    logger_name = name if name == "hmmseq" or name.startswith("hmmseq.") else f"hmmseq.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)

        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))

        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all hmmseq loggers.

    Args:
        level: Logging level (logging.DEBUG, logging.INFO, etc.) or string
            ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').

    Example:
        >>> from hmmseq.logging import set_log_level
        >>> set_log_level("DEBUG")
    """
    level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    # Update default for new loggers
    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> None:
    """Configure logging for hmmseq.

    Replaces the handlers of every package logger created so far. It should
    typically be called once at application startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: sys.stderr).
    """
    level = _coerce_level(level)

    if stream is None:
        stream = sys.stderr

    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level
