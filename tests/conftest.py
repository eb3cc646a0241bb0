"""Pytest configuration and fixtures."""

import pytest

from splitpot.game.cards import Card, parse_cards
from splitpot.game.evaluator import HandEvaluator


class CountingEvaluator(HandEvaluator):
    """Evaluator that counts how many hands it ranks."""

    def __init__(self, short_deck: bool = False):
        super().__init__(short_deck=short_deck)
        self.calls = 0

    def rank(self, cards):
        self.calls += 1
        return super().rank(cards)


@pytest.fixture
def counting_oracle():
    return CountingEvaluator()


@pytest.fixture
def board_flop() -> list[Card]:
    return parse_cards("Ks7d2c")


@pytest.fixture
def board_turn() -> list[Card]:
    return parse_cards("Ks7d2c9h")


@pytest.fixture
def board_river() -> list[Card]:
    return parse_cards("Ks7d2c9h3s")
