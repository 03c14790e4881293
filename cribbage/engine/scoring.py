"""
Cribbage hand scoring.

score(hand) adds four contributions, always computed in this order:

    1. Flush           4 if all held cards share a suit, 5 if the cut matches too
    2. Nobs            1 for a held Jack of the cut's suit
    3. Fifteens        2 per subset of the 5 cards (size 2–5) summing to 15
    4. Runs and pairs  one pass over a rank histogram (see score_runs_and_pairs)

A four-card flush is a precondition for the cut bonus: a cut matching three
held cards of one suit scores nothing.

The result is always within 0..MAX_SCORE.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Sequence

from .cards import NUM_RANKS, Card, Rank, parse_card, parse_cards, rank_value
from .hand import Hand, make_hand

MAX_SCORE: int = 29

FIFTEEN: int = 15
POINTS_PER_FIFTEEN: int = 2
FLUSH_POINTS: int = 4
NOBS_POINTS: int = 1
MIN_RUN: int = 3

# One slot per rank plus an always-empty sentinel after King, so a run
# ending at King is closed out inside the same loop.
HISTOGRAM_SLOTS: int = NUM_RANKS + 1


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points by category for one hand."""

    flush: int
    nobs: int
    fifteens: int
    runs_and_pairs: int

    @property
    def total(self) -> int:
        return self.flush + self.nobs + self.fifteens + self.runs_and_pairs

    def __str__(self) -> str:
        return (
            f"flush {self.flush} | nobs {self.nobs} | fifteens {self.fifteens} | "
            f"runs+pairs {self.runs_and_pairs} | total {self.total}"
        )


# ─── Individual rules ─────────────────────────────────────────────────────────


def score_flush(held: Sequence[Card], cut: Card | None = None) -> int:
    """Return flush points for the held cards and an optional cut.

    Examples:
        >>> score_flush(parse_cards(['2H', '3H', '5H', 'TH']), parse_card('5C'))
        4
        >>> score_flush(parse_cards(['2H', '3H', '5H', 'TH']), parse_card('KH'))
        5
        >>> score_flush(parse_cards(['2H', '3H', '5H', 'TC']), parse_card('KH'))
        0
    """
    suit = held[0].suit
    if any(c.suit != suit for c in held[1:]):
        return 0
    if cut is not None and cut.suit == suit:
        return FLUSH_POINTS + 1
    return FLUSH_POINTS


def score_nobs(held: Sequence[Card], cut: Card) -> int:
    """Return 1 if a held Jack matches the cut's suit, else 0."""
    for card in held:
        if card.rank == Rank.JACK and card.suit == cut.suit:
            return NOBS_POINTS
    return 0


def score_fifteens(cards: Sequence[Card]) -> int:
    """Return 2 points for every subset of two or more cards summing to 15.

    Single cards are skipped: no point value reaches 15 alone.

    Examples:
        >>> score_fifteens(parse_cards(['5H', '5C', '5S', 'JD', '5D']))
        16
    """
    values = [rank_value(c) for c in cards]
    points = 0
    for size in range(2, len(values) + 1):
        for subset in itertools.combinations(values, size):
            if sum(subset) == FIFTEEN:
                points += POINTS_PER_FIFTEEN
    return points


def rank_histogram(cards: Sequence[Card]) -> list[int]:
    """Count cards per rank ordinal; the last slot is the empty sentinel."""
    counts = [0] * HISTOGRAM_SLOTS
    for card in cards:
        counts[card.rank] += 1
    return counts


def score_runs_and_pairs(cards: Sequence[Card]) -> int:
    """Score pairs and runs in a single ascending scan of the rank histogram.

    For each non-empty slot holding b cards:
        pairs       += b * (b - 1)       (2 points per same-rank pair)
        run_len     += 1
        run_combos  *= b                 (ways to pick one card per rank)
    On an empty slot the current run closes: if run_len >= 3 it scores
    run_len * run_combos, then run_len and run_combos reset.

    Examples:
        >>> score_runs_and_pairs(parse_cards(['AH', 'AD', 'AC', '2C', '3C']))
        15
        >>> score_runs_and_pairs(parse_cards(['JD', 'QC', 'KC', 'KD', 'QD']))
        16
    """
    points = 0
    run_len = 0
    run_combos = 1
    for count in rank_histogram(cards):
        if count:
            points += count * (count - 1)
            run_len += 1
            run_combos *= count
        else:
            if run_len >= MIN_RUN:
                points += run_len * run_combos
            run_len = 0
            run_combos = 1
    return points


# ─── Whole-hand scoring ───────────────────────────────────────────────────────


def score_breakdown(hand: Hand) -> ScoreBreakdown:
    """Return the per-category points of a hand."""
    cards = hand.cards
    return ScoreBreakdown(
        flush=score_flush(hand.held, hand.cut),
        nobs=score_nobs(hand.held, hand.cut),
        fifteens=score_fifteens(cards),
        runs_and_pairs=score_runs_and_pairs(cards),
    )


def score(hand: Hand) -> int:
    """Return the point value of a hand.

    Examples:
        >>> score(make_hand(parse_cards(['2H', '3H', '5H', 'TH']), parse_card('5C')))
        14
        >>> score(make_hand(parse_cards(['5H', '5C', '5S', 'JD']), parse_card('5D')))
        29
    """
    cards = hand.cards
    return (
        score_flush(hand.held, hand.cut)
        + score_nobs(hand.held, hand.cut)
        + score_fifteens(cards)
        + score_runs_and_pairs(cards)
    )


def score_codes(held_codes: Sequence[str], cut_code: str) -> int:
    """Score a hand given as card codes, e.g. (['2H', '3H', '5H', 'TH'], '5C').

    Raises:
        ParseError: If any code is malformed.
        InvalidHand: If the cards do not form a valid hand.
    """
    return score(make_hand(parse_cards(held_codes), parse_card(cut_code)))


def score_held(held: Sequence[Card]) -> int:
    """Score held cards before the cut is known.

    Counts fifteens, runs and pairs, and a four-card flush. Nobs needs a
    cut and is never awarded.
    """
    return score_flush(held) + score_fifteens(held) + score_runs_and_pairs(held)
