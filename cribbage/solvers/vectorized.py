"""
Vectorized scoring over integer-encoded hands.

score_encoded() applies the same four rules as engine.scoring.score() to N
hands at once, one numpy column operation per rule step:

    held : int array, shape (N, 4)   card integers 0–51 (rank * 4 + suit)
    cut  : int array, shape (N,)

Fifteens use the 26 index subsets of size 2–5 over the five card columns.
Runs and pairs build an (N, 14) rank histogram and run the sentinel-slot
scan across all hands in lockstep, slot by slot.

Every hand scores exactly as score() scores it.
"""

from __future__ import annotations

import itertools
from typing import Iterable

import numpy as np

from cribbage.engine.cards import NUM_SUITS, RANK_VALUES, Rank, card_to_int
from cribbage.engine.hand import HELD_SIZE, Hand
from cribbage.engine.scoring import (
    FIFTEEN,
    FLUSH_POINTS,
    HISTOGRAM_SLOTS,
    MIN_RUN,
    NOBS_POINTS,
    POINTS_PER_FIFTEEN,
)

_HAND_SIZE: int = HELD_SIZE + 1
_CUT_COL: int = HELD_SIZE

_VALUE_LOOKUP: np.ndarray = np.array(RANK_VALUES, dtype=np.int16)

FIFTEEN_SUBSETS: list[tuple[int, ...]] = [
    subset
    for size in range(2, _HAND_SIZE + 1)
    for subset in itertools.combinations(range(_HAND_SIZE), size)
]
"""Column subsets checked for fifteens (C(5,2)+C(5,3)+C(5,4)+C(5,5) = 26)."""


def encode_hands(hands: Iterable[Hand]) -> tuple[np.ndarray, np.ndarray]:
    """Convert Hands into (held, cut) integer arrays for score_encoded().

    Examples:
        >>> from cribbage.engine.hand import hand_from_codes
        >>> held, cut = encode_hands([hand_from_codes(['AH', '2H', '3H', '4H'], 'KC')])
        >>> held.tolist(), cut.tolist()
        ([[0, 4, 8, 12]], [51])
    """
    held_rows: list[list[int]] = []
    cuts: list[int] = []
    for hand in hands:
        held_rows.append([card_to_int(c) for c in hand.held])
        cuts.append(card_to_int(hand.cut))
    held = np.array(held_rows, dtype=np.int8).reshape(-1, HELD_SIZE)
    return held, np.array(cuts, dtype=np.int8)


def score_encoded(held: np.ndarray, cut: np.ndarray) -> np.ndarray:
    """Score N integer-encoded hands.

    Args:
        held: Card integers of the held cards, shape (N, 4).
        cut:  Card integers of the cuts, shape (N,).

    Returns:
        int8 array of shape (N,) with each hand's score.

    Raises:
        ValueError: If the array shapes do not match.
    """
    held = np.asarray(held, dtype=np.int16)
    cut = np.asarray(cut, dtype=np.int16)
    if held.ndim != 2 or held.shape[1] != HELD_SIZE:
        raise ValueError(f"held must have shape (N, {HELD_SIZE}), got {held.shape}")
    if cut.shape != (held.shape[0],):
        raise ValueError(f"cut must have shape ({held.shape[0]},), got {cut.shape}")

    cards = np.column_stack((held, cut))
    ranks = cards // NUM_SUITS
    suits = cards % NUM_SUITS
    n = cards.shape[0]
    total = np.zeros(n, dtype=np.int16)

    # Flush: four held suits equal, cut bonus only on top of that.
    held_suits = suits[:, :HELD_SIZE]
    is_flush = (held_suits == held_suits[:, :1]).all(axis=1)
    cut_matches = suits[:, _CUT_COL] == suits[:, 0]
    total += is_flush * (FLUSH_POINTS + cut_matches.astype(np.int16))

    # Nobs
    jacks = ranks[:, :HELD_SIZE] == int(Rank.JACK)
    same_suit = held_suits == suits[:, _CUT_COL:]
    total += (jacks & same_suit).any(axis=1) * np.int16(NOBS_POINTS)

    # Fifteens
    values = _VALUE_LOOKUP[ranks]
    n_fifteens = np.zeros(n, dtype=np.int16)
    for subset in FIFTEEN_SUBSETS:
        n_fifteens += values[:, list(subset)].sum(axis=1) == FIFTEEN
    total += n_fifteens * np.int16(POINTS_PER_FIFTEEN)

    # Runs and pairs: histogram with sentinel slot, scanned slot by slot.
    counts = np.zeros((n, HISTOGRAM_SLOTS), dtype=np.int16)
    rows = np.arange(n)
    for col in range(_HAND_SIZE):
        counts[rows, ranks[:, col]] += 1

    run_len = np.zeros(n, dtype=np.int16)
    run_combos = np.ones(n, dtype=np.int16)
    for slot in range(HISTOGRAM_SLOTS):
        b = counts[:, slot]
        present = b > 0
        total += b * (b - 1)
        closing = ~present & (run_len >= MIN_RUN)
        total += closing * (run_len * run_combos)
        run_len = np.where(present, run_len + 1, 0).astype(np.int16)
        run_combos = np.where(present, run_combos * b, 1).astype(np.int16)

    return total.astype(np.int8)
