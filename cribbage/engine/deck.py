"""
The 52-card deck: immutable full-deck constant, exclusion views, and a
mutable availability mask for dealing random hands.

FULL_DECK is built once at import as the rank-major cross product of the 13
ranks and 4 suits, so FULL_DECK[i] encodes to the integer i.

The dealing helpers use a numpy int8 array of length 52:
    1 = card is available in the deck
    0 = card has been dealt
"""

from __future__ import annotations

import itertools
from typing import Iterable, Sequence

import numpy as np

from .cards import Card, Rank, Suit, card_to_int, int_to_card, parse_card

DECK_SIZE: int = 52

FULL_DECK: tuple[Card, ...] = tuple(
    Card(rank, suit) for rank, suit in itertools.product(Rank, Suit)
)


# ─── Immutable views ──────────────────────────────────────────────────────────


def full_deck() -> tuple[Card, ...]:
    """Return the full 52-card deck in rank-major order.

    Examples:
        >>> len(full_deck())
        52
        >>> str(full_deck()[0]), str(full_deck()[51])
        ('AH', 'KC')
    """
    return FULL_DECK


def excluding(
    cards: Iterable[Card],
    deck: Sequence[Card] = FULL_DECK,
) -> tuple[Card, ...]:
    """Return the deck minus the given cards, keeping deck order.

    The input need not be sorted and may repeat a card; excluding a card
    twice is the same as excluding it once.

    Args:
        cards: Cards to leave out (already drawn).
        deck:  Deck to filter. Defaults to the full 52-card deck.

    Examples:
        >>> rest = excluding([parse_card('5H'), parse_card('5H')])
        >>> len(rest)
        51
    """
    drawn = frozenset(cards)
    return tuple(c for c in deck if c not in drawn)


# ─── Dealing mask ─────────────────────────────────────────────────────────────


def create_deck() -> np.ndarray:
    """Create a fresh availability mask with all 52 cards available.

    Returns:
        np.ndarray: int8 array of shape (52,), all 1s.
    """
    return np.ones(DECK_SIZE, dtype=np.int8)


def available_cards(deck: np.ndarray) -> np.ndarray:
    """Return the integer codes of cards still available in the deck."""
    return np.flatnonzero(deck == 1)


def cards_remaining(deck: np.ndarray) -> int:
    return int(deck.sum())


def deal_card(deck: np.ndarray, rng: np.random.Generator) -> Card:
    """Draw one random available card and mark it as dealt.

    Args:
        deck: Mutable deck array, modified in place.
        rng:  Random generator used for the draw.

    Raises:
        ValueError: If the deck is empty.
    """
    avail = available_cards(deck)
    if len(avail) == 0:
        raise ValueError("Cannot deal from an empty deck.")
    card_int = int(rng.choice(avail))
    deck[card_int] = 0
    return int_to_card(card_int)


def deal_cards(deck: np.ndarray, rng: np.random.Generator, n: int) -> tuple[Card, ...]:
    """Draw n distinct random cards from the deck."""
    return tuple(deal_card(deck, rng) for _ in range(n))


def deal_specific_card(deck: np.ndarray, card: Card) -> None:
    """Mark a specific card as dealt without randomness.

    Raises:
        ValueError: If the card has already been dealt.
    """
    card_int = card_to_int(card)
    if deck[card_int] == 0:
        raise ValueError(f"Card {card} has already been dealt.")
    deck[card_int] = 0


def deal_specific_card_by_str(deck: np.ndarray, code: str) -> Card:
    """Mark a card given by its code as dealt and return it."""
    card = parse_card(code)
    deal_specific_card(deck, card)
    return card


def build_deck_from_hands(*hands: Iterable[Card]) -> np.ndarray:
    """Create a deck mask with every card of the given hands already dealt.

    Raises:
        ValueError: If a card appears in more than one hand.
    """
    deck = create_deck()
    for hand in hands:
        for card in hand:
            deal_specific_card(deck, card)
    return deck
