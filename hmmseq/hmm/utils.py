"""Numerical and indexing utilities shared by the HMM estimators and decoders.

Provides a safe logarithm, normalization helpers, strided slicing of Viterbi
rows, the state-pair index encoding used by second-order models, and the
state/symbol bookkeeping used during supervised training.
"""

from collections import Counter
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple, Union

import numpy as np


# Finite stand-in for log(0). Paths rank first by their number of zero
# factors, then by the rest of their score.
LOG_ZERO: float = float(np.iinfo(np.int32).min)


def safe_log(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Compute the natural logarithm, mapping non-positive inputs to LOG_ZERO.

    log(x) is undefined for x <= 0. LOG_ZERO is far below any sum of genuine
    log-probabilities, so impossible factors lose every max-comparison in the
    Viterbi recurrence, yet sums stay finite and never produce NaN.

    Args:
        x: Scalar or array of probabilities.

    Returns:
        log(x) elementwise, with LOG_ZERO wherever x <= 0. Scalars return float.

    Examples:
        >>> safe_log(1.0)
        0.0
        >>> safe_log(0.0)
        -2147483648.0
        >>> safe_log(np.array([0.5, 0.0]))
        array([-6.93147181e-01, -2.14748365e+09])
    """
    arr = np.asarray(x, dtype=float)
    positive = arr > 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.where(positive, np.log(np.where(positive, arr, 1.0)), LOG_ZERO)
    if result.ndim == 0:
        return float(result)
    return result


def l1_normalize(vec: np.ndarray) -> np.ndarray:
    """Divide every entry by the sum of the vector.

    An all-zero vector is returned unchanged instead of becoming NaN.

    Args:
        vec: Non-negative vector, shape (n,).

    Returns:
        New normalized vector, shape (n,).
    """
    vec = np.asarray(vec, dtype=float)
    total = np.sum(vec)
    if total == 0.0:
        return vec.copy()
    return vec / total


def column_normalize(mat: np.ndarray) -> np.ndarray:
    """Divide every cell by the total of its column.

    Columns whose total is zero stay all-zero.

    Args:
        mat: Non-negative matrix, shape (rows, cols).

    Returns:
        New matrix whose non-empty columns each sum to 1.

    Examples:
        >>> column_normalize(np.array([[1.0, 0.0], [3.0, 0.0]]))
        array([[0.25, 0.  ],
               [0.75, 0.  ]])
    """
    mat = np.asarray(mat, dtype=float)
    col_sums = np.sum(mat, axis=0, keepdims=True)
    col_sums[col_sums == 0] = 1.0  # Avoid division by zero
    return mat / col_sums


def skip_vector(vec: np.ndarray, stride: int, offset: int) -> np.ndarray:
    """Extract the strided sub-vector vec[offset], vec[offset + stride], ...

    In a second-order Viterbi row indexed by encode_pair(first, second, n),
    skip_vector(row, n, second) lists the scores of every pair ending in
    `second`, ordered by `first`.

    Args:
        vec: Input vector.
        stride: Distance between consecutive extracted entries. Must be positive.
        offset: Index of the first extracted entry.

    Returns:
        The strided sub-vector (a copy).

    Raises:
        ValueError: If stride is not positive or offset is out of range.
    """
    vec = np.asarray(vec)
    if stride <= 0:
        raise ValueError(f"stride must be positive, got {stride}")
    if offset < 0 or offset >= max(len(vec), 1):
        raise ValueError(f"offset {offset} out of range for vector of length {len(vec)}")
    return vec[offset::stride].copy()


def encode_pair(first: int, second: int, n_states: int) -> int:
    """Flatten a (first, second) state-index pair into [0, n_states**2).

    Args:
        first: Index of the earlier state.
        second: Index of the later state.
        n_states: Number of states.

    Returns:
        first * n_states + second.

    Raises:
        ValueError: If either index is outside [0, n_states).

    Examples:
        >>> encode_pair(1, 2, 3)
        5
    """
    if not (0 <= first < n_states and 0 <= second < n_states):
        raise ValueError(
            f"State indices ({first}, {second}) out of range for {n_states} states"
        )
    return first * n_states + second


def decode_pair(pair_index: int, n_states: int) -> Tuple[int, int]:
    """Inverse of encode_pair.

    Args:
        pair_index: Flattened pair index in [0, n_states**2).
        n_states: Number of states.

    Returns:
        Tuple of (first, second) state indices.

    Raises:
        ValueError: If pair_index is outside [0, n_states**2).

    Examples:
        >>> decode_pair(5, 3)
        (1, 2)
    """
    if not 0 <= pair_index < n_states * n_states:
        raise ValueError(f"Pair index {pair_index} out of range for {n_states} states")
    first, second = divmod(int(pair_index), n_states)
    return first, second


def build_state_index(states: Iterable[Hashable]) -> Tuple[Dict[Hashable, int], List[Hashable]]:
    """Create a deterministic bijection from states to indices 0..n-1.

    Ordered iterables keep their order (first occurrence wins for
    duplicates). Unordered sets are sorted by (type name, repr), since their
    iteration order depends on per-process hash seeds. Labels whose repr is
    not stable across runs, such as objects with the default address-based
    repr, only get a reproducible index when passed as an ordered sequence.

    Args:
        states: Iterable of hashable state labels.

    Returns:
        Tuple of (state_to_index dict, index_to_state list).

    Example:
        >>> build_state_index(["HOT", "COLD", "HOT"])
        ({'HOT': 0, 'COLD': 1}, ['HOT', 'COLD'])
        >>> build_state_index({"b", "a"})
        ({'a': 0, 'b': 1}, ['a', 'b'])
    """
    if isinstance(states, (set, frozenset)):
        ordered = sorted(states, key=lambda x: (type(x).__name__, repr(x)))
    else:
        ordered = list(dict.fromkeys(states))
    state_to_index = {state: idx for idx, state in enumerate(ordered)}
    return state_to_index, ordered


def frequency_counts(
    target: Hashable,
    observations: Sequence[Sequence[Hashable]],
    emitted_symbols: Sequence[Sequence[Hashable]],
) -> Counter:
    """Count the symbols aligned with `target` across a labeled corpus.

    Args:
        target: State whose emissions are counted.
        observations: State sequences.
        emitted_symbols: Symbol sequences aligned with observations.

    Returns:
        Counter mapping symbol -> number of times `target` emitted it.
    """
    counts: Counter = Counter()
    for states, symbols in zip(observations, emitted_symbols):
        for state, symbol in zip(states, symbols):
            if state == target:
                counts[symbol] += 1
    return counts
