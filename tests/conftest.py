"""
Shared pytest fixtures for the cribbage scorer tests.

Provides convenience wrappers around parse_card for building known hands.
"""

from __future__ import annotations

import numpy as np
import pytest

from cribbage.engine.cards import Card, parse_card
from cribbage.engine.deck import create_deck
from cribbage.engine.hand import Hand, make_hand


def cards(*codes: str) -> tuple[Card, ...]:
    """Build a tuple of Cards from card codes.

    Examples:
        >>> cards('AH', 'KC')
        (Card(rank=<Rank.ACE: 0>, suit=<Suit.HEARTS: 0>), Card(rank=<Rank.KING: 12>, suit=<Suit.CLUBS: 3>))
    """
    return tuple(parse_card(c) for c in codes)


def hand(held: str, cut: str) -> Hand:
    """Build a Hand from a space-separated held string and a cut code.

    Examples:
        >>> str(hand('2H 3H 5H TH', '5C'))
        '2H 3H 5H TH | 5C'
    """
    return make_hand(cards(*held.split()), parse_card(cut))


@pytest.fixture
def fresh_deck() -> np.ndarray:
    """Return a full 52-card availability mask."""
    return create_deck()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
