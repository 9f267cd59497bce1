"""Example: Decoding hidden weather from ice-cream counts with hmmseq

Trains first- and second-order HMMs on a small labeled diary (was the day HOT
or COLD, and how many ice creams were eaten) and decodes new diaries.
"""

import hmmseq as hs
from hmmseq import Hmm1, Hmm2, HmmConfig, create_hmm

STATES = ["HOT", "COLD"]

OBSERVATIONS = [
    ["HOT", "HOT", "HOT"],
    ["HOT", "COLD", "COLD", "COLD"],
    ["HOT", "COLD", "HOT", "COLD"],
    ["COLD", "COLD", "COLD", "HOT", "HOT"],
    ["COLD", "HOT", "HOT", "COLD", "COLD"],
]

ICE_CREAMS = [
    [3, 2, 3],
    [2, 2, 1, 1],
    [3, 1, 2, 1],
    [3, 1, 2, 2, 3],
    [1, 2, 3, 2, 1],
]


def example_first_order():
    """Example: order-1 model, each day depends on the previous day."""
    print("=" * 60)
    print("Example 1: First-order HMM")
    print("=" * 60)

    hmm = Hmm1(STATES, OBSERVATIONS, ICE_CREAMS)

    print(f"Prior:       {dict(zip(hmm.states, hmm.prior.round(3).tolist()))}")
    print("Transitions (column-normalized, rows = from, cols = to):")
    print(hmm.transition_probabilities.round(3))
    for hmm_state in hmm.hmm_states:
        emissions = {k: round(v, 3) for k, v in sorted(hmm_state.emission_probabilities.items())}
        print(f"Emissions {hmm_state.state}: {emissions}")

    for diary in ([1, 1, 1, 1, 1, 1], [3, 3, 3, 3, 3, 3], [1, 2, 3, 3, 2, 1]):
        path, log_prob = hmm.viterbi(diary)
        print(f"{diary} -> {path} (log-prob {log_prob:.4f})")

    print()


def example_second_order():
    """Example: order-2 model, each day depends on the two previous days."""
    print("=" * 60)
    print("Example 2: Second-order HMM")
    print("=" * 60)

    hmm = create_hmm(HmmConfig(order=2), STATES, OBSERVATIONS, ICE_CREAMS)
    assert isinstance(hmm, Hmm2)

    print(f"Transition table shape: {hmm.transition_probabilities.shape}")
    for diary in ([2, 3], [1, 2, 3, 3, 2, 1], [3, 1, 2, 2, 3]):
        path, log_prob = hmm.viterbi(diary)
        print(f"{diary} -> {path} (log-prob {log_prob:.4f})")

    print()


if __name__ == "__main__":
    print(f"hmmseq {hs.__version__}\n")
    example_first_order()
    example_second_order()
    print("Decoding complete")
