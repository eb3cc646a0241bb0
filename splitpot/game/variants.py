"""Supported game variants and their fixed parameters."""

from enum import Enum
from typing import Union

from .cards import ALL_RANKS
from .errors import UnsupportedVariant


SHORT_DECK_RANKS = (14, 13, 12, 11, 10, 9, 8, 7, 6)


class SelectionRule(Enum):
    """How hole and board cards combine into a 5-card hand."""
    ANY_CARDS = "any"          # best 5 of hole + board (at most 7 cards)
    BEST_SEVEN = "best_seven"  # best 7-card subset of hole + board
    TWO_PLUS_THREE = "two_plus_three"  # exactly 2 hole + exactly 3 board


class GameVariant(Enum):
    """Game variants understood by the equity engine."""
    TEXAS_HOLDEM = "texas-holdem"
    SHORT_DECK = "short-deck"
    SUPER_HOLDEM = "super-holdem"
    OMAHA_HOLDEM = "omaha-holdem"

    @property
    def hole_cards(self) -> int:
        """Number of hole cards each player holds."""
        return _HOLE_CARDS[self]

    @property
    def ranks(self) -> tuple[int, ...]:
        """Rank alphabet of this variant's deck, highest first."""
        if self is GameVariant.SHORT_DECK:
            return SHORT_DECK_RANKS
        return ALL_RANKS

    @property
    def deck_size(self) -> int:
        return len(self.ranks) * 4

    @property
    def selection_rule(self) -> SelectionRule:
        return _SELECTION[self]

    @property
    def simulation_iterations(self) -> int:
        """Default Monte Carlo trial count."""
        return _ITERATIONS.get(self, DEFAULT_ITERATIONS)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: Union["GameVariant", str]) -> "GameVariant":
        """
        Resolve a variant from an instance, its tag or its enum name.

        'texas-holdem', 'TEXAS_HOLDEM' and 'texas_holdem' all resolve
        to GameVariant.TEXAS_HOLDEM.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            for variant in cls:
                if key == variant.value or key.upper().replace("-", "_") == variant.name:
                    return variant
        raise UnsupportedVariant(f"Unsupported game type: {value!r}")


DEFAULT_ITERATIONS = 5000

_HOLE_CARDS = {
    GameVariant.TEXAS_HOLDEM: 2,
    GameVariant.SHORT_DECK: 2,
    GameVariant.SUPER_HOLDEM: 3,
    GameVariant.OMAHA_HOLDEM: 4,
}

_SELECTION = {
    GameVariant.TEXAS_HOLDEM: SelectionRule.ANY_CARDS,
    GameVariant.SHORT_DECK: SelectionRule.ANY_CARDS,
    GameVariant.SUPER_HOLDEM: SelectionRule.BEST_SEVEN,
    GameVariant.OMAHA_HOLDEM: SelectionRule.TWO_PLUS_THREE,
}

# Short deck has no entry and falls back to DEFAULT_ITERATIONS
_ITERATIONS = {
    GameVariant.TEXAS_HOLDEM: 50000,
    GameVariant.SUPER_HOLDEM: 10000,
    GameVariant.OMAHA_HOLDEM: 2000,
}

_LABELS = {
    GameVariant.TEXAS_HOLDEM: "Texas Hold'em",
    GameVariant.SHORT_DECK: "Short Deck (6+)",
    GameVariant.SUPER_HOLDEM: "Super Hold'em",
    GameVariant.OMAHA_HOLDEM: "Omaha Hold'em",
}
