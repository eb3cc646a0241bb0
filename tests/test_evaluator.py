"""Tests for the lookup-table hand evaluator."""

import numpy as np
import pytest
from treys import Card as TreysCard, Evaluator as TreysEvaluator

from splitpot.game.cards import Deck, parse_cards
from splitpot.game.errors import OracleFailure
from splitpot.game.evaluator import (
    HandCategory, HandEvaluator, HandValue, LookupTable, get_oracle,
)
from splitpot.game.variants import GameVariant


@pytest.fixture
def evaluator():
    return HandEvaluator()


@pytest.fixture
def short_evaluator():
    return HandEvaluator(short_deck=True)


def rank_of(evaluator, text):
    return evaluator.rank(parse_cards(text))


class TestLookupTable:
    def test_full_deck_size(self):
        assert len(LookupTable()) == 7462

    def test_short_deck_size(self):
        assert len(LookupTable(short_deck=True)) == 1404

    def test_category_bounds(self):
        table = LookupTable()
        assert table.category(1) == HandCategory.STRAIGHT_FLUSH
        assert table.category(10) == HandCategory.STRAIGHT_FLUSH
        assert table.category(11) == HandCategory.FOUR_OF_A_KIND
        assert table.category(323) == HandCategory.FLUSH
        assert table.category(1609) == HandCategory.STRAIGHT
        assert table.category(7462) == HandCategory.HIGH_CARD

    def test_category_out_of_range(self):
        with pytest.raises(OracleFailure):
            LookupTable().category(7463)


class TestHandEvaluator:
    def test_royal_flush_is_best(self, evaluator):
        value = rank_of(evaluator, "AsKsQsJsTs")
        assert value.rank == 1
        assert value.category == HandCategory.STRAIGHT_FLUSH

    def test_worst_hand(self, evaluator):
        value = rank_of(evaluator, "7c5d4h3s2c")
        assert value.rank == 7462
        assert value.label == "High Card"

    def test_wheel(self, evaluator):
        wheel = rank_of(evaluator, "As2d3h4c5s")
        six_high = rank_of(evaluator, "2d3h4c5s6s")
        assert wheel.category == HandCategory.STRAIGHT
        assert six_high < wheel

    @pytest.mark.parametrize("stronger, weaker", [
        ("AhAdAcKsKh", "AsKsQsJs9s"),   # full house vs flush
        ("KhKdKcKs2h", "AhAdAcKsKh"),   # quads vs full house
        ("AhAdKcKs2h", "AhAdKcQs2h"),   # two pair vs pair
        ("9h9d9c2s3h", "AhAdKcKsQh"),   # trips vs two pair
        ("AhAd9c5s3h", "AhAd9c5s2h"),   # kicker
    ])
    def test_ordering(self, evaluator, stronger, weaker):
        a = rank_of(evaluator, stronger)
        b = rank_of(evaluator, weaker)
        assert evaluator.compare(a, b) < 0
        assert evaluator.compare(b, a) > 0

    def test_seven_cards_picks_best_five(self, evaluator):
        value = rank_of(evaluator, "AhKh2h7h9hAsAd")
        assert value.category == HandCategory.FLUSH
        assert len(value.cards) == 5
        assert all(c.suit == value.cards[0].suit for c in value.cards)

    def test_equal_ranks_compare_equal(self, evaluator):
        a = rank_of(evaluator, "AhKd9c5s3h")
        b = rank_of(evaluator, "AsKc9d5h3c")
        assert a == b
        assert evaluator.compare(a, b) == 0

    def test_too_few_cards(self, evaluator):
        with pytest.raises(OracleFailure):
            rank_of(evaluator, "AhKhQh")

    def test_too_many_cards(self, evaluator):
        with pytest.raises(OracleFailure):
            rank_of(evaluator, "AhKhQhJhTh9h8h7h")

    def test_duplicate_cards(self, evaluator):
        with pytest.raises(OracleFailure):
            rank_of(evaluator, "AhAhQhJhTh")

    def test_matches_treys(self, evaluator):
        reference = TreysEvaluator()
        rng = np.random.default_rng(7)
        cards = Deck().cards

        for _ in range(300):
            picked = [cards[i] for i in rng.choice(52, size=7, replace=False)]
            ours = evaluator.rank(picked)
            treys_cards = [TreysCard.new(str(c)) for c in picked]
            theirs = reference.evaluate(treys_cards[:2], treys_cards[2:])

            assert ours.rank == theirs
            assert ours.label == reference.class_to_string(
                reference.get_rank_class(theirs)
            )


class TestWinners:
    def test_single_winner(self, evaluator):
        values = [
            rank_of(evaluator, "AhAdKc9s3h"),
            rank_of(evaluator, "KhKdKc9s3h"),
        ]
        assert evaluator.winners(values) == [1]

    def test_tie(self, evaluator):
        values = [
            rank_of(evaluator, "AhKd9c5s3h"),
            rank_of(evaluator, "QhJd9c5s3h"),
            rank_of(evaluator, "AsKc9d5h3c"),
        ]
        assert evaluator.winners(values) == [0, 2]

    def test_empty(self, evaluator):
        with pytest.raises(OracleFailure):
            evaluator.winners([])

    def test_hand_value_ordering(self):
        a = HandValue(5, HandCategory.STRAIGHT_FLUSH)
        b = HandValue(200, HandCategory.FULL_HOUSE)
        assert min(a, b) is a


class TestShortDeck:
    def test_flush_beats_full_house(self, short_evaluator):
        flush = rank_of(short_evaluator, "AsKsQsJs9s")
        boat = rank_of(short_evaluator, "AhAdAcKsKh")
        assert flush.category == HandCategory.FLUSH
        assert short_evaluator.compare(flush, boat) < 0

    def test_low_straight(self, short_evaluator):
        wheel = rank_of(short_evaluator, "As6d7h8c9s")
        ten_high = rank_of(short_evaluator, "6d7h8c9sTs")
        assert wheel.category == HandCategory.STRAIGHT
        assert ten_high < wheel

    def test_rejects_low_cards(self, short_evaluator):
        with pytest.raises(OracleFailure):
            rank_of(short_evaluator, "As2d7h8c9s")

    def test_get_oracle_per_variant(self):
        assert get_oracle(GameVariant.SHORT_DECK).table.short_deck
        assert not get_oracle(GameVariant.TEXAS_HOLDEM).table.short_deck
        assert get_oracle(GameVariant.OMAHA_HOLDEM).table is get_oracle(GameVariant.TEXAS_HOLDEM).table
