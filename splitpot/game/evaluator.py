"""
Five-card hand evaluation.

Every distinct 5-card hand class gets an integer value, 1 being the
strongest (royal flush). Flushes are looked up by the bitmask of their
ranks; all other hands by the product of their rank primes, which is
unique per rank multiset. Evaluating 6 or 7 cards takes the best of
every 5-card subset.
"""

from abc import ABC, abstractmethod
from bisect import bisect_left
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from itertools import combinations
from typing import Iterable, Sequence

from .cards import ALL_RANKS, RANK_PRIMES, Card
from .errors import OracleFailure
from .variants import SHORT_DECK_RANKS, GameVariant


class HandCategory(Enum):
    """Hand classes, labelled for display."""
    STRAIGHT_FLUSH = "Straight Flush"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "Three of a Kind"
    TWO_PAIR = "Two Pair"
    ONE_PAIR = "Pair"
    HIGH_CARD = "High Card"


@dataclass(frozen=True, order=True)
class HandValue:
    """
    Ranked hand. Ordering and equality use `rank` only.

    Lower rank is stronger.
    """
    rank: int
    category: HandCategory = field(compare=False)
    cards: tuple[Card, ...] = field(default=(), compare=False)

    @property
    def label(self) -> str:
        return self.category.value

    def __str__(self) -> str:
        shown = " ".join(str(c) for c in self.cards)
        return f"{self.label} ({shown})" if shown else self.label


def _prime_product(ranks: Iterable[int]) -> int:
    product = 1
    for r in ranks:
        product *= RANK_PRIMES[r]
    return product


def _bitmask(ranks: Iterable[int]) -> int:
    mask = 0
    for r in ranks:
        mask |= 1 << (r - 2)
    return mask


class LookupTable:
    """
    Maps every 5-card hand class to its value.

    The full deck yields 7462 classes. The short deck table (ranks 6-A)
    treats A-6-7-8-9 as the lowest straight and ranks flushes above
    full houses.
    """

    def __init__(self, short_deck: bool = False):
        self.short_deck = short_deck
        self.ranks = SHORT_DECK_RANKS if short_deck else ALL_RANKS
        self.flush_lookup: dict[int, int] = {}
        self.unsuited_lookup: dict[int, int] = {}
        # (worst value in category, category), ascending by value
        self._bounds: list[tuple[int, HandCategory]] = []
        self._build()

    def __len__(self) -> int:
        return len(self.flush_lookup) + len(self.unsuited_lookup)

    @property
    def worst(self) -> int:
        return self._bounds[-1][0]

    def category(self, value: int) -> HandCategory:
        """Hand class for a value."""
        if not 1 <= value <= self.worst:
            raise OracleFailure(f"Hand value out of range: {value}")
        idx = bisect_left(self._bounds, (value,))
        return self._bounds[idx][1]

    def lookup(self, cards: Sequence[Card]) -> int:
        """Value of exactly five cards."""
        ranks = [c.rank for c in cards]
        try:
            if len({c.suit for c in cards}) == 1:
                return self.flush_lookup[_bitmask(ranks)]
            return self.unsuited_lookup[_prime_product(ranks)]
        except KeyError:
            shown = " ".join(str(c) for c in cards)
            raise OracleFailure(f"Cannot evaluate {shown}") from None

    def _straights(self) -> list[tuple[int, ...]]:
        ranks = self.ranks
        straights = [tuple(ranks[i:i + 5]) for i in range(len(ranks) - 4)]
        # Wheel: ace plays low under the lowest four ranks
        straights.append(tuple(ranks[-4:]) + (14,))
        return straights

    def _build(self) -> None:
        ranks = self.ranks
        straights = self._straights()
        straight_sets = {frozenset(s) for s in straights}
        highs = [
            combo for combo in combinations(ranks, 5)
            if frozenset(combo) not in straight_sets
        ]

        def others(*used):
            return [r for r in ranks if r not in used]

        quads = [(q,) * 4 + (k,) for q in ranks for k in others(q)]
        full_houses = [(t,) * 3 + (p,) * 2 for t in ranks for p in others(t)]
        trips = [
            (t,) * 3 + kickers
            for t in ranks
            for kickers in combinations(others(t), 2)
        ]
        two_pairs = [
            (hi, hi, lo, lo, k)
            for hi, lo in combinations(ranks, 2)
            for k in others(hi, lo)
        ]
        pairs = [
            (p, p) + kickers
            for p in ranks
            for kickers in combinations(others(p), 3)
        ]

        order = [
            (HandCategory.STRAIGHT_FLUSH, straights, True),
            (HandCategory.FOUR_OF_A_KIND, quads, False),
            (HandCategory.FULL_HOUSE, full_houses, False),
            (HandCategory.FLUSH, highs, True),
            (HandCategory.STRAIGHT, straights, False),
            (HandCategory.THREE_OF_A_KIND, trips, False),
            (HandCategory.TWO_PAIR, two_pairs, False),
            (HandCategory.ONE_PAIR, pairs, False),
            (HandCategory.HIGH_CARD, highs, False),
        ]
        if self.short_deck:
            # Fewer cards per suit make flushes rarer than full houses
            order[2], order[3] = order[3], order[2]

        value = 0
        for category, hands, suited in order:
            for hand in hands:
                value += 1
                if suited:
                    self.flush_lookup[_bitmask(hand)] = value
                else:
                    self.unsuited_lookup[_prime_product(hand)] = value
            self._bounds.append((value, category))


class ScoringOracle(ABC):
    """
    Ranks and compares completed hands.

    Implementations return a HandValue for 5-7 cards; lower values are
    stronger.
    """

    @abstractmethod
    def rank(self, cards: Sequence[Card]) -> HandValue:
        """Best 5-card value among the given cards."""

    def compare(self, a: HandValue, b: HandValue) -> int:
        """Negative if `a` is stronger, positive if `b` is, zero on a tie."""
        return a.rank - b.rank

    def winners(self, values: Sequence[HandValue]) -> list[int]:
        """
        Indices of the values sharing the single best rank.

        More than one index means a tie.
        """
        if not values:
            raise OracleFailure("No hands to compare")
        best = min(v.rank for v in values)
        return [i for i, v in enumerate(values) if v.rank == best]

    def hand_class(self, value: HandValue) -> str:
        return value.label


class HandEvaluator(ScoringOracle):
    """Lookup-table evaluator for 5, 6 or 7 cards."""

    def __init__(self, short_deck: bool = False):
        self.table = _table(short_deck)

    def rank(self, cards: Sequence[Card]) -> HandValue:
        cards = tuple(cards)
        if not 5 <= len(cards) <= 7:
            raise OracleFailure(f"Expected 5-7 cards, got {len(cards)}")
        if len(set(cards)) != len(cards):
            raise OracleFailure("Duplicate cards in hand")

        lookup = self.table.lookup
        best = None
        best_cards: tuple[Card, ...] = ()
        for combo in combinations(cards, 5):
            value = lookup(combo)
            if best is None or value < best:
                best = value
                best_cards = combo

        return HandValue(best, self.table.category(best), best_cards)


@lru_cache(maxsize=None)
def _table(short_deck: bool) -> LookupTable:
    return LookupTable(short_deck=short_deck)


@lru_cache(maxsize=None)
def get_oracle(variant: GameVariant) -> HandEvaluator:
    """Shared evaluator for a variant's ranking rules."""
    return HandEvaluator(short_deck=variant is GameVariant.SHORT_DECK)
