"""Benchmark HMM training and Viterbi decoding."""

import time
from typing import Dict

import numpy as np

from hmmseq import HmmConfig, create_hmm


def benchmark_viterbi(
    order: int,
    n_states: int,
    seq_length: int = 200,
    n_sequences: int = 50,
    n_symbols: int = 10,
    seed: int = 0,
) -> Dict[str, float]:
    """Benchmark training and decoding on a random labeled corpus.

    Args:
        order: Model order (1 or 2).
        n_states: Number of hidden states.
        seq_length: Length of every training and decoded sequence.
        n_sequences: Number of training sequences.
        n_symbols: Number of distinct symbols.
        seed: RNG seed.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(seed)
    states = list(range(n_states))
    observations = [rng.integers(0, n_states, size=seq_length).tolist() for _ in range(n_sequences)]
    emitted_symbols = [rng.integers(0, n_symbols, size=seq_length).tolist() for _ in range(n_sequences)]
    symbols = rng.integers(0, n_symbols, size=seq_length).tolist()

    start = time.perf_counter()
    hmm = create_hmm(HmmConfig(order=order), states, observations, emitted_symbols)
    train_time = time.perf_counter() - start

    # Warmup
    hmm.decode(symbols[: order + 1])

    start = time.perf_counter()
    hmm.decode(symbols)
    decode_time = time.perf_counter() - start

    return {
        "order": order,
        "n_states": n_states,
        "seq_length": seq_length,
        "train_time_sec": train_time,
        "decode_time_sec": decode_time,
        "symbols_per_sec": seq_length / decode_time,
    }


if __name__ == "__main__":
    print("Viterbi Decoding Benchmark")
    print("=" * 60)

    for order in (1, 2):
        for n_states in (2, 4, 8):
            result = benchmark_viterbi(order=order, n_states=n_states)
            print(
                f"order={result['order']} states={result['n_states']:2d}: "
                f"train {result['train_time_sec'] * 1e3:8.2f} ms, "
                f"decode {result['decode_time_sec'] * 1e3:8.2f} ms "
                f"({result['symbols_per_sec']:.0f} symbols/s)"
            )
