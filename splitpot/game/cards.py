"""Card, hand and deck representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Union
import re


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}

# One prime per rank; a product of primes identifies a rank multiset
RANK_PRIMES = {
    2: 2, 3: 3, 4: 5, 5: 7, 6: 11, 7: 13, 8: 17, 9: 19,
    10: 23, 11: 29, 12: 31, 13: 37, 14: 41,
}

ALL_RANKS = tuple(range(14, 1, -1))


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def prime(self) -> int:
        """Prime assigned to this card's rank."""
        return RANK_PRIMES[self.rank]

    @property
    def bit(self) -> int:
        """Single bit for this card's rank (deuce is bit 0)."""
        return 1 << (self.rank - 2)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '2c'."""
        if len(s) != 2:
            raise ValueError(f"Invalid card string: {s}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise ValueError(f"Invalid rank: {rank_char}")
        if suit_char not in STR_SUIT:
            raise ValueError(f"Invalid suit: {suit_char}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])


CardLike = Union[Card, str]


def parse_cards(text: str) -> list[Card]:
    """
    Parse a run of cards.

    Accepts 'AsKhTd', 'As Kh Td' or 'As,Kh,Td'.
    """
    compact = re.sub(r"[\s,]+", "", text)
    if len(compact) % 2:
        raise ValueError(f"Invalid card string: {text}")
    return [Card.from_string(compact[i:i + 2]) for i in range(0, len(compact), 2)]


def to_cards(cards: Union[str, Iterable[CardLike]]) -> list[Card]:
    """Normalize a string or a sequence of cards/card strings to Cards."""
    if isinstance(cards, str):
        return parse_cards(cards)
    result = []
    for card in cards:
        if isinstance(card, Card):
            result.append(card)
        else:
            result.extend(parse_cards(card))
    return result


@dataclass(frozen=True)
class Hand:
    """One player's hole cards, in the order they were placed."""
    cards: tuple[Card, ...]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        return "".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({', '.join(str(c) for c in self.cards)})"

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Parse hand from string like 'AsKh' or 'AsKhQdJc'."""
        return cls(tuple(parse_cards(s)))

    @classmethod
    def coerce(cls, value: Union["Hand", str, Iterable[CardLike]]) -> "Hand":
        """Build a Hand from a Hand, a string, or a sequence of cards."""
        if isinstance(value, Hand):
            return value
        return cls(tuple(to_cards(value)))


class Deck:
    """A deck built from a rank alphabet (52 cards by default)."""

    def __init__(self, ranks: Iterable[int] = ALL_RANKS):
        self.ranks = tuple(ranks)
        self.cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to every card of its rank alphabet."""
        self.cards = [
            Card(rank, suit)
            for rank in self.ranks
            for suit in (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)
        ]

    def remove(self, cards: Iterable[Card]) -> None:
        """Remove specific cards from the deck."""
        for card in cards:
            if card in self.cards:
                self.cards.remove(card)

    def __contains__(self, card: Card) -> bool:
        return card in self.cards

    def __len__(self) -> int:
        return len(self.cards)
