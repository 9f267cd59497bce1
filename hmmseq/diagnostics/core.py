"""Core diagnostic functions for probability tables."""

from __future__ import annotations

from typing import Iterable

import numpy as np


def _as_array(values: np.ndarray | Iterable[float]) -> np.ndarray:
    if isinstance(values, np.ndarray):
        return values.astype(float, copy=False)
    return np.asarray(list(values), dtype=float)


def is_distribution(
    values: np.ndarray | Iterable[float],
    atol: float = 1e-8,
    allow_zero: bool = False,
) -> bool:
    """
    Check whether values form a probability distribution.

    Parameters
    ----------
    values:
        Non-negative probabilities, any shape (flattened).
    atol:
        Absolute tolerance for |sum - 1|.
    allow_zero:
        Also accept an all-zero vector (a distribution that was never
        observed during training).

    Returns
    -------
    bool
        True if all values are finite, non-negative and sum to 1 (or are
        all zero when allow_zero is set).
    """
    arr = _as_array(values)
    if arr.size == 0:
        return allow_zero
    if not np.all(np.isfinite(arr)) or np.any(arr < 0.0):
        return False

    total = float(np.sum(arr))
    if allow_zero and total == 0.0:
        return True
    return abs(total - 1.0) <= atol


def assert_distribution(
    values: np.ndarray | Iterable[float],
    atol: float = 1e-8,
    allow_zero: bool = False,
    name: str = "distribution",
) -> None:
    """
    Assert that values form a probability distribution.

    Parameters
    ----------
    values:
        Non-negative probabilities.
    atol:
        Absolute tolerance for |sum - 1|.
    allow_zero:
        Accept an all-zero (or empty) distribution.
    name:
        Name used in the error message.

    Raises
    ------
    ValueError
        If the values are not a distribution within the tolerance.
    """
    arr = _as_array(values)
    if not is_distribution(arr, atol=atol, allow_zero=allow_zero):
        raise ValueError(
            f"{name} is not a probability distribution within tolerance {atol}. "
            f"Sum found: {float(np.sum(arr)) if arr.size else 0.0}"
        )


def is_column_stochastic(mat: np.ndarray, atol: float = 1e-8) -> bool:
    """
    Check whether every column of a matrix sums to 1 or is entirely zero.

    Zero columns correspond to destination states that were never observed
    during training.

    Parameters
    ----------
    mat:
        2D array of non-negative values.
    atol:
        Absolute tolerance for checking column sums.

    Returns
    -------
    bool
        True if the matrix satisfies the column-wise normalization
        invariant, False otherwise.
    """
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2:
        return False
    if not np.all(np.isfinite(mat)) or np.any(mat < 0.0):
        return False

    col_sums = np.sum(mat, axis=0)
    ok = np.isclose(col_sums, 1.0, atol=atol, rtol=0.0) | (col_sums == 0.0)
    return bool(np.all(ok))


def assert_column_stochastic(
    mat: np.ndarray,
    atol: float = 1e-8,
    name: str = "matrix",
) -> None:
    """
    Assert that every column of a matrix sums to 1 or is entirely zero.

    Parameters
    ----------
    mat:
        2D array of non-negative values.
    atol:
        Absolute tolerance for checking column sums.
    name:
        Name used in the error message.

    Raises
    ------
    ValueError
        If the matrix is not column-stochastic within the tolerance.
    """
    if not is_column_stochastic(mat, atol=atol):
        col_sums = np.sum(np.asarray(mat, dtype=float), axis=0) if np.ndim(mat) == 2 else None
        raise ValueError(
            f"{name} columns do not each sum to 1 (or 0) within tolerance {atol}. "
            f"Column sums found: {None if col_sums is None else col_sums.tolist()}"
        )
