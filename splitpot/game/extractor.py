"""Best-hand selection per game variant."""

from itertools import combinations
from typing import Sequence

from .cards import Card
from .errors import UnsupportedVariant
from .evaluator import HandValue, ScoringOracle
from .variants import GameVariant, SelectionRule


def best_hand(
    hole: Sequence[Card],
    board: Sequence[Card],
    variant: GameVariant,
    oracle: ScoringOracle,
) -> HandValue:
    """
    Best legal 5-card hand for one player.

    Args:
        hole: Player's hole cards
        board: Completed board (5 cards)
        variant: Game variant deciding which cards may combine
        oracle: Evaluator used to rank candidate hands

    Returns:
        Strongest HandValue among the legal combinations
    """
    rule = variant.selection_rule

    if rule is SelectionRule.ANY_CARDS:
        return oracle.rank(list(hole) + list(board))

    if rule is SelectionRule.BEST_SEVEN:
        cards = list(hole) + list(board)
        if len(cards) <= 7:
            return oracle.rank(cards)
        return min(oracle.rank(subset) for subset in combinations(cards, 7))

    if rule is SelectionRule.TWO_PLUS_THREE:
        return min(
            oracle.rank(hole_pair + board_three)
            for hole_pair in combinations(hole, 2)
            for board_three in combinations(board, 3)
        )

    raise UnsupportedVariant(f"Unsupported game type: {variant.value}")


def best_hands(
    hands: Sequence[Sequence[Card]],
    board: Sequence[Card],
    variant: GameVariant,
    oracle: ScoringOracle,
) -> list[HandValue]:
    """Best hand for every player, in input order."""
    return [best_hand(hole, board, variant, oracle) for hole in hands]
