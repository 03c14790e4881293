"""
Hand canonicalization: four held cards plus the cut.

A Hand stores its held cards sorted by the Card total order, so two hands
built from the same four cards in any order compare equal and hash alike.
The cut is a separate field: changing it always changes the hand's identity.
Validation and sorting happen on construction, whichever way a Hand is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .cards import Card, cards_to_str, format_card, parse_card, parse_cards
from .deck import create_deck, deal_cards

HELD_SIZE: int = 4


class InvalidHand(ValueError):
    """Held cards are not 4 distinct cards, or the cut repeats a held card."""


@dataclass(frozen=True)
class Hand:
    """A canonical cribbage hand.

    Attributes:
        held: The four held cards in ascending (rank, suit) order, whatever
              order they were given in.
        cut:  The cut card, distinct from every held card.

    Raises:
        InvalidHand: If held is not four distinct cards or cut is among them.

    A Hand only compares equal to another Hand, never to a plain tuple.
    """

    held: tuple[Card, ...]
    cut: Card

    def __post_init__(self) -> None:
        held = tuple(self.held)
        if len(held) != HELD_SIZE:
            raise InvalidHand(f"A hand holds exactly {HELD_SIZE} cards, got {len(held)}.")
        if len(set(held)) != HELD_SIZE:
            raise InvalidHand(f"Held cards must be distinct: {cards_to_str(held)}")
        if self.cut in held:
            raise InvalidHand(f"Cut card {format_card(self.cut)} is already held.")
        object.__setattr__(self, "held", tuple(sorted(held)))

    @property
    def cards(self) -> tuple[Card, ...]:
        """All five cards, held first then the cut."""
        return self.held + (self.cut,)

    def __str__(self) -> str:
        return f"{cards_to_str(self.held)} | {format_card(self.cut)}"


def make_hand(held: Iterable[Card], cut: Card) -> Hand:
    """Build a canonical Hand from held cards in any order.

    Args:
        held: Exactly four pairwise-distinct cards, in any order. Any
              iterable, including a generator.
        cut:  The cut card.

    Raises:
        InvalidHand: If held is not four distinct cards or cut is among them.

    Examples:
        >>> a = make_hand(parse_cards(['KC', '2H', '5D', '5S']), parse_card('JH'))
        >>> b = make_hand(parse_cards(['5S', '5D', 'KC', '2H']), parse_card('JH'))
        >>> a == b and hash(a) == hash(b)
        True
    """
    return Hand(tuple(held), cut)


def hand_from_codes(held_codes: Iterable[str], cut_code: str) -> Hand:
    """Parse card codes and build a canonical Hand.

    Raises:
        ParseError: If any code is malformed.
        InvalidHand: If the parsed cards do not form a valid hand.
    """
    return make_hand(parse_cards(held_codes), parse_card(cut_code))


def random_hand(rng: np.random.Generator) -> Hand:
    """Deal four held cards and a cut from a fresh shuffled deck."""
    deck = create_deck()
    held = deal_cards(deck, rng, HELD_SIZE)
    cut = deal_cards(deck, rng, 1)[0]
    return make_hand(held, cut)
