"""
Card model: ranks, suits, parsing and formatting.

A card is a (rank, suit) NamedTuple. Ranks carry two projections:
    rank index (0–12)  ->  0=A, 1=2, ..., 8=9, 9=T, 10=J, 11=Q, 12=K
    point value (1–10) ->  A=1, 2–9 face value, T/J/Q/K=10

Integer encoding (0–51), used by the vectorized kernel and the score table:
    card_int = rank_index * 4 + suit_index
    suit_index: 0=H, 1=S, 2=D, 3=C

String codes are two characters, rank then suit, e.g. '5H', 'TD', 'KC'.
'0' is accepted as an alias for Ten on input; output always uses 'T'.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, NamedTuple


class Suit(IntEnum):
    HEARTS = 0
    SPADES = 1
    DIAMONDS = 2
    CLUBS = 3


class Rank(IntEnum):
    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12


# Index matches Rank / Suit ordinal.
RANK_CODES: list[str] = ['A', '2', '3', '4', '5', '6', '7', '8', '9', 'T', 'J', 'Q', 'K']
SUIT_CODES: list[str] = ['H', 'S', 'D', 'C']
RANK_VALUES: list[int] = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 10, 10, 10]

NUM_RANKS: int = 13
NUM_SUITS: int = 4

_RANK_ALIASES: dict[str, Rank] = {'0': Rank.TEN}
_RANK_BY_CODE: dict[str, Rank] = {code: Rank(i) for i, code in enumerate(RANK_CODES)}
_RANK_BY_CODE.update(_RANK_ALIASES)
_SUIT_BY_CODE: dict[str, Suit] = {code: Suit(i) for i, code in enumerate(SUIT_CODES)}


# ─── Errors ───────────────────────────────────────────────────────────────────


class ParseError(ValueError):
    """A card code could not be parsed."""


class WrongLengthError(ParseError):
    """The code is not exactly two characters."""


class UnknownRankError(ParseError):
    """The first character is not a rank code."""


class UnknownSuitError(ParseError):
    """The second character is not a suit code."""


# ─── Card ─────────────────────────────────────────────────────────────────────


class Card(NamedTuple):
    """A playing card.

    Field order (rank, suit) gives the total order used for canonical
    sorting: by rank first, then suit. The order has no scoring meaning.

    Example:
        >>> Card(Rank.FIVE, Suit.HEARTS)
        Card(rank=<Rank.FIVE: 4>, suit=<Suit.HEARTS: 0>)
        >>> str(Card(Rank.FIVE, Suit.HEARTS))
        '5H'
    """
    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return format_card(self)


def rank_index(card: Card) -> int:
    """Return the rank ordinal (0–12) of a card.

    Examples:
        >>> rank_index(parse_card('AH'))
        0
        >>> rank_index(parse_card('KC'))
        12
    """
    return int(card.rank)


def rank_value(card: Card) -> int:
    """Return the point value (1–10) used when counting fifteens.

    Examples:
        >>> rank_value(parse_card('7D'))
        7
        >>> rank_value(parse_card('QS'))
        10
    """
    return RANK_VALUES[card.rank]


def card_to_int(card: Card) -> int:
    """Encode a card as an integer 0–51 (rank-major, matches full_deck() order)."""
    return card.rank * NUM_SUITS + card.suit


def int_to_card(card_int: int) -> Card:
    """Decode an integer 0–51 back into a Card.

    Raises:
        ValueError: If card_int is outside 0–51.
    """
    if not 0 <= card_int < NUM_RANKS * NUM_SUITS:
        raise ValueError(f"Card integer out of range: {card_int}")
    return Card(Rank(card_int // NUM_SUITS), Suit(card_int % NUM_SUITS))


# ─── String I/O ───────────────────────────────────────────────────────────────


def parse_card(code: str) -> Card:
    """Parse a two-character card code.

    Args:
        code: Rank code followed by suit code, e.g. '5H', 'TD', '0D'.

    Returns:
        The parsed Card.

    Raises:
        WrongLengthError: If code is not a string of exactly two characters.
        UnknownRankError: If the first character is not a rank code.
        UnknownSuitError: If the second character is not a suit code.

    Examples:
        >>> parse_card('5H')
        Card(rank=<Rank.FIVE: 4>, suit=<Suit.HEARTS: 0>)
        >>> parse_card('0D') == parse_card('TD')
        True
    """
    if not isinstance(code, str) or len(code) != 2:
        raise WrongLengthError(f"Card code must be exactly 2 characters: {code!r}")
    rank_code, suit_code = code[0], code[1]
    rank = _RANK_BY_CODE.get(rank_code)
    if rank is None:
        raise UnknownRankError(f"Unrecognized rank {rank_code!r} in card code {code!r}")
    suit = _SUIT_BY_CODE.get(suit_code)
    if suit is None:
        raise UnknownSuitError(f"Unrecognized suit {suit_code!r} in card code {code!r}")
    return Card(rank, suit)


def format_card(card: Card) -> str:
    """Return the canonical two-character code of a card.

    Examples:
        >>> format_card(Card(Rank.TEN, Suit.DIAMONDS))
        'TD'
    """
    return RANK_CODES[card.rank] + SUIT_CODES[card.suit]


def parse_cards(codes: Iterable[str]) -> tuple[Card, ...]:
    """Parse several card codes; the first malformed code raises."""
    return tuple(parse_card(code) for code in codes)


def cards_to_str(cards: Iterable[Card]) -> str:
    """Join card codes with spaces.

    Examples:
        >>> cards_to_str(parse_cards(['AH', 'KC']))
        'AH KC'
    """
    return ' '.join(format_card(c) for c in cards)
