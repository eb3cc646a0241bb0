"""Derivation of the unseen-card pool for an equity request."""

from collections import Counter
from typing import Sequence

from .cards import Card, Deck, Hand
from .errors import DuplicateCardError, InvalidCardError
from .variants import GameVariant


def check_duplicates(hands: Sequence[Hand], board: Sequence[Card]) -> None:
    """Raise DuplicateCardError if any card is placed more than once."""
    counts = Counter(card for hand in hands for card in hand)
    counts.update(board)
    repeated = [card for card, n in counts.items() if n > 1]
    if repeated:
        raise DuplicateCardError(repeated)


def check_in_deck(
    hands: Sequence[Hand],
    board: Sequence[Card],
    variant: GameVariant,
) -> None:
    """Raise InvalidCardError for cards outside the variant's rank alphabet."""
    ranks = set(variant.ranks)
    for card in [c for hand in hands for c in hand] + list(board):
        if card.rank not in ranks:
            raise InvalidCardError(f"{card} is not part of the {variant.label} deck")


def build_deck(
    hands: Sequence[Hand],
    board: Sequence[Card],
    variant: GameVariant,
) -> list[Card]:
    """
    Build the pool of cards not yet placed in any hand or on the board.

    Args:
        hands: Every player's hole cards
        board: Known board cards (0-5)
        variant: Game variant, which fixes the rank alphabet

    Returns:
        Unseen cards; len == variant.deck_size - placed cards
    """
    check_duplicates(hands, board)
    check_in_deck(hands, board, variant)

    deck = Deck(variant.ranks)
    deck.remove([card for hand in hands for card in hand])
    deck.remove(board)
    return deck.cards
