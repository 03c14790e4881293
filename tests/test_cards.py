"""Tests for cribbage/engine/cards.py — ranks, suits, parsing and formatting."""

from __future__ import annotations

import pytest

from cribbage.engine.cards import (
    RANK_CODES,
    RANK_VALUES,
    SUIT_CODES,
    Card,
    ParseError,
    Rank,
    Suit,
    UnknownRankError,
    UnknownSuitError,
    WrongLengthError,
    card_to_int,
    cards_to_str,
    format_card,
    int_to_card,
    parse_card,
    parse_cards,
    rank_index,
    rank_value,
)

ALL_CODES = [r + s for r in RANK_CODES for s in SUIT_CODES]


class TestRank:
    def test_thirteen_ranks(self):
        assert len(Rank) == 13
        assert len(RANK_CODES) == 13
        assert len(RANK_VALUES) == 13

    def test_ordinals_contiguous(self):
        assert [int(r) for r in Rank] == list(range(13))

    def test_ace_low_king_high(self):
        assert Rank.ACE == 0
        assert Rank.KING == 12

    def test_values_non_decreasing(self):
        assert all(a <= b for a, b in zip(RANK_VALUES, RANK_VALUES[1:]))

    def test_values_saturate_at_ten(self):
        for rank in Rank:
            expected = min(int(rank) + 1, 10)
            assert rank_value(Card(rank, Suit.HEARTS)) == expected


class TestRankIndexAndValue:
    def test_ace(self):
        card = parse_card("AS")
        assert rank_index(card) == 0
        assert rank_value(card) == 1

    def test_nine(self):
        card = parse_card("9D")
        assert rank_index(card) == 8
        assert rank_value(card) == 9

    @pytest.mark.parametrize("code", ["TH", "JH", "QH", "KH"])
    def test_ten_value_cards(self, code):
        assert rank_value(parse_card(code)) == 10

    def test_king_index(self):
        assert rank_index(parse_card("KC")) == 12


class TestParseCard:
    def test_five_of_hearts(self):
        assert parse_card("5H") == Card(Rank.FIVE, Suit.HEARTS)

    def test_ten_alias_zero(self):
        assert parse_card("0D") == parse_card("TD") == Card(Rank.TEN, Suit.DIAMONDS)

    def test_all_suits(self):
        for suit_idx, code in enumerate(SUIT_CODES):
            assert parse_card(f"A{code}").suit == suit_idx

    def test_all_ranks(self):
        for rank_idx, code in enumerate(RANK_CODES):
            assert parse_card(f"{code}C").rank == rank_idx

    @pytest.mark.parametrize("code", ["", "A", "AHX", "10H"])
    def test_wrong_length(self, code):
        with pytest.raises(WrongLengthError):
            parse_card(code)

    def test_non_string_is_wrong_length(self):
        with pytest.raises(WrongLengthError):
            parse_card(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("code", ["1H", "XH", "aH", "♡H"])
    def test_unknown_rank(self, code):
        with pytest.raises(UnknownRankError):
            parse_card(code)

    @pytest.mark.parametrize("code", ["AX", "Ah", "A♡", "55"])
    def test_unknown_suit(self, code):
        with pytest.raises(UnknownSuitError):
            parse_card(code)

    def test_errors_are_parse_errors_and_value_errors(self):
        for exc in (WrongLengthError, UnknownRankError, UnknownSuitError):
            assert issubclass(exc, ParseError)
            assert issubclass(exc, ValueError)

    def test_message_names_input(self):
        with pytest.raises(UnknownSuitError, match="AX"):
            parse_card("AX")


class TestFormatCard:
    def test_ten_formats_as_t(self):
        assert format_card(Card(Rank.TEN, Suit.SPADES)) == "TS"

    def test_str_uses_code(self):
        assert str(parse_card("QD")) == "QD"

    def test_roundtrip_all_codes(self):
        assert len(ALL_CODES) == 52
        for code in ALL_CODES:
            assert format_card(parse_card(code)) == code


class TestOrdering:
    def test_rank_then_suit(self):
        assert parse_card("AC") < parse_card("2H")
        assert parse_card("5H") < parse_card("5C")

    def test_equality_needs_rank_and_suit(self):
        assert parse_card("5H") == parse_card("5H")
        assert parse_card("5H") != parse_card("5C")
        assert parse_card("5H") != parse_card("6H")


class TestIntegerEncoding:
    def test_roundtrip(self):
        for i in range(52):
            assert card_to_int(int_to_card(i)) == i

    def test_known_codes(self):
        assert card_to_int(parse_card("AH")) == 0
        assert card_to_int(parse_card("KC")) == 51
        assert card_to_int(parse_card("5H")) == 16

    def test_encoding_preserves_order(self):
        ordered = sorted(parse_cards(ALL_CODES))
        assert [card_to_int(c) for c in ordered] == list(range(52))

    @pytest.mark.parametrize("bad", [-1, 52])
    def test_out_of_range(self, bad):
        with pytest.raises(ValueError):
            int_to_card(bad)


class TestHelpers:
    def test_parse_cards(self):
        assert parse_cards(["AH", "KC"]) == (parse_card("AH"), parse_card("KC"))

    def test_parse_cards_propagates_error(self):
        with pytest.raises(UnknownRankError):
            parse_cards(["AH", "ZC"])

    def test_cards_to_str(self):
        assert cards_to_str(parse_cards(["2H", "TD"])) == "2H TD"

    def test_cards_to_str_empty(self):
        assert cards_to_str(()) == ""
