"""
Enumeration of every (held, cut) hand and the complete score table.

Two ways to walk the 12,994,800 hands:

    enumerate_hands()  — lazy generator of (held, cut, score) records, one
                         Hand at a time through engine.scoring.score(). Memory
                         stays bounded and the caller may stop at any point.

    build_table()      — materialises every score into a ScoreTable. The
                         270,725 held combinations are split into chunks,
                         each scored independently by the vectorized kernel
                         (optionally in worker processes) and concatenated
                         in chunk order.

Table layout:
    combos : int8 (270,725, 4)   held combinations, itertools.combinations order
    cuts   : int8 (12,994,800,)  48 cuts per combination, ascending
    scores : int8 (12,994,800,)

Entry for held combination i and its j-th remaining card is at i * 48 + j,
so a Hand is located in O(1) from the lexicographic rank of its held cards.
"""

from __future__ import annotations

import functools
import itertools
import math
from collections.abc import Mapping
from concurrent.futures import ProcessPoolExecutor
from typing import Iterator, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from cribbage.engine.cards import Card, card_to_int, format_card, int_to_card
from cribbage.engine.deck import DECK_SIZE, FULL_DECK, excluding
from cribbage.engine.hand import HELD_SIZE, Hand, make_hand
from cribbage.engine.scoring import score
from cribbage.solvers.vectorized import score_encoded

# ─── Constants ────────────────────────────────────────────────────────────────

CUTS_PER_HAND: int = DECK_SIZE - HELD_SIZE
N_HELD_COMBINATIONS: int = math.comb(DECK_SIZE, HELD_SIZE)
TOTAL_HANDS: int = N_HELD_COMBINATIONS * CUTS_PER_HAND

DEFAULT_CHUNK_SIZE: int = 10_000
"""Held combinations scored per chunk (480,000 hands)."""

TABLE_COLUMNS: list[str] = ["hand0", "hand1", "hand2", "hand3", "cut", "score"]

_CARD_CODES: list[str] = [format_card(c) for c in FULL_DECK]

Record = tuple[tuple[Card, ...], Card, int]


# ─── Lazy enumeration ─────────────────────────────────────────────────────────


def enumerate_hands(
    deck: Sequence[Card] | None = None,
    max_records: int | None = None,
) -> Iterator[Record]:
    """Yield (held, cut, score) for every held 4-combination and legal cut.

    Each call starts a fresh enumeration. Held cards come out in canonical
    order; cuts follow deck order.

    Args:
        deck:        Cards to enumerate over. Defaults to the full deck.
        max_records: Stop after this many records. None for no cap.

    Raises:
        ValueError: If max_records is negative.

    Examples:
        >>> held, cut, points = next(enumerate_hands())
        >>> [format_card(c) for c in held], format_card(cut), points
        (['AH', 'AS', 'AD', 'AC'], '2H', 12)
    """
    if max_records is not None and max_records < 0:
        raise ValueError(f"max_records must be non-negative, got {max_records}")
    cards = FULL_DECK if deck is None else tuple(deck)

    produced = 0
    for held in itertools.combinations(cards, HELD_SIZE):
        for cut in excluding(held, cards):
            if max_records is not None and produced >= max_records:
                return
            hand = make_hand(held, cut)
            yield hand.held, hand.cut, score(hand)
            produced += 1


# ─── Table addressing ─────────────────────────────────────────────────────────


def combination_rank(indices: Sequence[int], n: int = DECK_SIZE) -> int:
    """Return the lexicographic rank of a sorted combination of range(n).

    Matches the position of the combination in itertools.combinations(range(n), k).

    Examples:
        >>> combination_rank([0, 1, 2, 3])
        0
        >>> combination_rank([48, 49, 50, 51])
        270724
    """
    k = len(indices)
    rank = math.comb(n, k) - 1
    for i, c in enumerate(indices):
        rank -= math.comb(n - 1 - c, k - i)
    return rank


@functools.cache
def held_combinations() -> np.ndarray:
    """Return all 270,725 held combinations as a read-only int8 array (N, 4)."""
    flat = np.fromiter(
        itertools.chain.from_iterable(itertools.combinations(range(DECK_SIZE), HELD_SIZE)),
        dtype=np.int8,
        count=N_HELD_COMBINATIONS * HELD_SIZE,
    )
    combos = flat.reshape(N_HELD_COMBINATIONS, HELD_SIZE)
    combos.setflags(write=False)
    return combos


def remaining_cards(combos: np.ndarray) -> np.ndarray:
    """Return, per held combination, the 48 cards not held, ascending.

    Args:
        combos: int array of shape (M, 4).

    Returns:
        int8 array of shape (M, 48).
    """
    m = combos.shape[0]
    mask = np.ones((m, DECK_SIZE), dtype=bool)
    mask[np.arange(m)[:, None], combos.astype(np.intp)] = False
    _, cols = np.nonzero(mask)
    return cols.reshape(m, CUTS_PER_HAND).astype(np.int8)


def _score_chunk(start: int, stop: int) -> tuple[np.ndarray, np.ndarray]:
    """Score held combinations [start, stop) against each of their 48 cuts.

    Module-level so it can be sent to worker processes.
    """
    combos = held_combinations()[start:stop]
    cuts = remaining_cards(combos).ravel()
    held = np.repeat(combos, CUTS_PER_HAND, axis=0)
    return cuts, score_encoded(held, cuts)


# ─── ScoreTable ───────────────────────────────────────────────────────────────


class ScoreTable(Mapping):
    """Read-only mapping from canonical Hand to score.

    Backed by three int8 arrays (see module docstring) instead of 13M Python
    objects. Lookup computes the entry position directly; iteration yields
    Hands lazily in enumeration order.
    """

    def __init__(self, combos: np.ndarray, cuts: np.ndarray, scores: np.ndarray) -> None:
        if combos.ndim != 2 or combos.shape[1] != HELD_SIZE:
            raise ValueError(f"combos must have shape (N, {HELD_SIZE}), got {combos.shape}")
        expected = combos.shape[0] * CUTS_PER_HAND
        if cuts.shape != (expected,) or scores.shape != (expected,):
            raise ValueError(
                f"Expected {expected} cuts and scores, got {cuts.shape} and {scores.shape}"
            )
        self._combos = combos
        self._cuts = cuts
        self._scores = scores
        for arr in (self._cuts, self._scores):
            arr.setflags(write=False)

    @property
    def combos(self) -> np.ndarray:
        return self._combos

    @property
    def cuts(self) -> np.ndarray:
        return self._cuts

    @property
    def scores(self) -> np.ndarray:
        return self._scores

    def __len__(self) -> int:
        return len(self._scores)

    def _position(self, hand: Hand) -> int:
        # Hand keeps held cards sorted, and card_to_int preserves that order.
        held_ints = [card_to_int(c) for c in hand.held]
        cut_int = card_to_int(hand.cut)
        combo = combination_rank(held_ints)
        if combo >= len(self._combos):
            raise KeyError(hand)
        cut_pos = cut_int - sum(1 for h in held_ints if h < cut_int)
        return combo * CUTS_PER_HAND + cut_pos

    def __getitem__(self, hand: Hand) -> int:
        if not isinstance(hand, Hand):
            raise KeyError(hand)
        return int(self._scores[self._position(hand)])

    def __iter__(self) -> Iterator[Hand]:
        for i, combo in enumerate(self._combos):
            held = tuple(int_to_card(int(c)) for c in combo)
            for cut_int in self._cuts[i * CUTS_PER_HAND:(i + 1) * CUTS_PER_HAND]:
                yield Hand(held, int_to_card(int(cut_int)))

    def records(self) -> Iterator[Record]:
        """Yield (held, cut, score) in table order."""
        for hand, points in zip(self, self._scores):
            yield hand.held, hand.cut, int(points)

    def to_frame(self) -> pd.DataFrame:
        """Return the table as a DataFrame with columns hand0..hand3, cut, score.

        Card columns are categoricals over the 52 card codes, keeping the
        frame close to the size of the underlying arrays.
        """
        held = np.repeat(self._combos, CUTS_PER_HAND, axis=0)
        columns = {
            name: pd.Categorical.from_codes(held[:, i], categories=_CARD_CODES)
            for i, name in enumerate(TABLE_COLUMNS[:HELD_SIZE])
        }
        columns["cut"] = pd.Categorical.from_codes(self._cuts, categories=_CARD_CODES)
        columns["score"] = self._scores
        return pd.DataFrame(columns, columns=TABLE_COLUMNS)


# ─── Table builder ────────────────────────────────────────────────────────────


def _chunk_bounds(n_combos: int, chunk_size: int) -> list[tuple[int, int]]:
    return [(s, min(s + chunk_size, n_combos)) for s in range(0, n_combos, chunk_size)]


def build_table(
    n_workers: int = 1,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress: bool = False,
) -> ScoreTable:
    """Score every (held, cut) hand in the deck.

    Args:
        n_workers:  Worker processes. 1 scores every chunk in-process.
        chunk_size: Held combinations per chunk.
        progress:   Show a tqdm bar over chunks.

    Returns:
        ScoreTable with TOTAL_HANDS entries.

    Raises:
        ValueError: If n_workers or chunk_size is not positive.
    """
    if n_workers < 1:
        raise ValueError(f"n_workers must be at least 1, got {n_workers}")
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")

    combos = held_combinations()
    bounds = _chunk_bounds(len(combos), chunk_size)
    starts = [b[0] for b in bounds]
    stops = [b[1] for b in bounds]

    if n_workers == 1:
        parts = list(
            tqdm(
                map(_score_chunk, starts, stops),
                total=len(bounds),
                desc="Scoring",
                unit="chunk",
                disable=not progress,
            )
        )
    else:
        with ProcessPoolExecutor(max_workers=n_workers) as pool:
            parts = list(
                tqdm(
                    pool.map(_score_chunk, starts, stops),
                    total=len(bounds),
                    desc="Scoring",
                    unit="chunk",
                    disable=not progress,
                )
            )

    cuts = np.concatenate([p[0] for p in parts])
    scores = np.concatenate([p[1] for p in parts])
    return ScoreTable(combos, cuts, scores)
