"""
Discard strategies: choose which 4 of the 6 dealt cards to keep.

A strategy is any callable matching DiscardStrategy. The factories below
return closures so each strategy can carry its own state (e.g. an RNG that
is independent of the one dealing the cards).
"""

from __future__ import annotations

import itertools
from typing import Callable, Sequence

import numpy as np

from cribbage.engine.cards import Card, cards_to_str
from cribbage.engine.hand import HELD_SIZE, InvalidHand
from cribbage.engine.scoring import score_held

DEALT_SIZE: int = 6

DiscardStrategy = Callable[[Sequence[Card]], tuple[Card, ...]]
"""(dealt: 6 cards) -> the 4 cards kept, in canonical order."""


def _check_dealt(dealt: Sequence[Card]) -> tuple[Card, ...]:
    dealt = tuple(dealt)
    if len(dealt) != DEALT_SIZE or len(set(dealt)) != DEALT_SIZE:
        raise InvalidHand(
            f"A deal must be {DEALT_SIZE} distinct cards, got: {cards_to_str(dealt)}"
        )
    return dealt


def make_random_strategy(seed: int | np.random.SeedSequence | None = None) -> DiscardStrategy:
    """Return a strategy that keeps 4 random cards.

    Args:
        seed: Seed or SeedSequence for the strategy's own RNG. None for
              non-deterministic.
    """
    rng = np.random.default_rng(seed)

    def _strategy(dealt: Sequence[Card]) -> tuple[Card, ...]:
        dealt = _check_dealt(dealt)
        keep = rng.choice(DEALT_SIZE, size=HELD_SIZE, replace=False)
        return tuple(sorted(dealt[i] for i in keep))

    return _strategy


def make_max_score_strategy() -> DiscardStrategy:
    """Return a strategy that keeps the 4 cards scoring most before the cut.

    Ties go to the first combination in dealt order.
    """

    def _strategy(dealt: Sequence[Card]) -> tuple[Card, ...]:
        dealt = _check_dealt(dealt)
        best = max(itertools.combinations(dealt, HELD_SIZE), key=score_held)
        return tuple(sorted(best))

    return _strategy
