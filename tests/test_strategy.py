"""Tests for cribbage/solvers/strategy.py — discard strategies."""

from __future__ import annotations

import itertools

import pytest

from cribbage.engine.hand import InvalidHand
from cribbage.engine.scoring import score_held
from cribbage.solvers.strategy import make_max_score_strategy, make_random_strategy
from tests.conftest import cards

DEALT = cards("5H", "5C", "JD", "KS", "2C", "9H")


class TestRandomStrategy:
    def test_keeps_four_of_dealt(self):
        keep = make_random_strategy(0)(DEALT)
        assert len(keep) == 4
        assert set(keep) <= set(DEALT)
        assert len(set(keep)) == 4

    def test_canonical_order(self):
        keep = make_random_strategy(0)(DEALT)
        assert list(keep) == sorted(keep)

    def test_seeded_reproducible(self):
        a = make_random_strategy(3)
        b = make_random_strategy(3)
        assert [a(DEALT) for _ in range(5)] == [b(DEALT) for _ in range(5)]

    def test_varies_between_calls(self):
        strategy = make_random_strategy(11)
        assert len({strategy(DEALT) for _ in range(50)}) > 1


class TestMaxScoreStrategy:
    def test_keeps_best_held_score(self):
        keep = make_max_score_strategy()(DEALT)
        best = max(score_held(c) for c in itertools.combinations(DEALT, 4))
        assert score_held(keep) == best

    def test_keeps_fifteens(self):
        # 5-5-J-K: two pairs of fifteens per five plus the pair of fives
        keep = make_max_score_strategy()(DEALT)
        assert keep == cards("5H", "5C", "JD", "KS")
        assert score_held(keep) == 10

    def test_keeps_run(self):
        keep = make_max_score_strategy()(cards("4H", "5S", "6D", "KC", "8H", "QD"))
        assert set(cards("4H", "5S", "6D")) <= set(keep)

    def test_input_order_irrelevant_to_score(self):
        strategy = make_max_score_strategy()
        a = strategy(DEALT)
        b = strategy(tuple(reversed(DEALT)))
        assert score_held(a) == score_held(b)


class TestDealValidation:
    @pytest.mark.parametrize("factory", [make_max_score_strategy, make_random_strategy])
    def test_five_cards_rejected(self, factory):
        with pytest.raises(InvalidHand):
            factory()(DEALT[:5])

    @pytest.mark.parametrize("factory", [make_max_score_strategy, make_random_strategy])
    def test_duplicates_rejected(self, factory):
        with pytest.raises(InvalidHand):
            factory()(DEALT[:5] + DEALT[:1])
