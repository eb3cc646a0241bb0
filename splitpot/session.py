"""
Card-selection session state.

Holds what a front end needs between clicks: the variant, every
player's hole-card slots, the board slots and which selector is active.
Cards fill the first empty slot of the active selector, and the cursor
moves on by itself once that selector is full.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
import json
import logging

from splitpot.game.cards import Card, Hand
from splitpot.game.deck import check_duplicates
from splitpot.game.equity import (
    BOARD_SIZE, MAX_PLAYERS, MIN_PLAYERS,
    EquityCalculator, EquityResult,
)
from splitpot.game.errors import (
    DuplicateCardError, InvalidBoardSize, InvalidCardError,
    InvalidHandSize, InvalidPlayerCount,
)
from splitpot.game.variants import GameVariant


logger = logging.getLogger(__name__)

BOARD = "board"

Slot = Optional[Card]
Selector = Union[int, str]


def _empty_hands(players: int, variant: GameVariant) -> list[list[Slot]]:
    return [[None] * variant.hole_cards for _ in range(players)]


@dataclass
class TableSession:
    """Serializable state of one equity table."""
    variant: GameVariant = GameVariant.TEXAS_HOLDEM
    hands: list[list[Slot]] = field(default_factory=list)
    board: list[Slot] = field(default_factory=lambda: [None] * BOARD_SIZE)
    active: Selector = 0
    result: Optional[EquityResult] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.hands:
            self.hands = _empty_hands(MIN_PLAYERS, self.variant)

    @property
    def num_players(self) -> int:
        return len(self.hands)

    def placed_cards(self) -> list[Card]:
        """Every card currently in a hand or on the board."""
        cards = [c for hand in self.hands for c in hand if c is not None]
        cards.extend(c for c in self.board if c is not None)
        return cards

    def _slots(self, selector: Selector) -> list[Slot]:
        if selector == BOARD:
            return self.board
        return self.hands[selector]

    def _is_full(self, selector: Selector) -> bool:
        return all(c is not None for c in self._slots(selector))

    @property
    def ready(self) -> bool:
        """True once every player holds a complete hand."""
        return all(self._is_full(i) for i in range(self.num_players))

    @property
    def complete(self) -> bool:
        return self.ready and self._is_full(BOARD)

    def select(self, card: Union[Card, str]) -> bool:
        """
        Place a card in the first empty slot of the active selector.

        Returns False when the active selector is already full.

        Raises:
            DuplicateCardError: card is already on the table
            InvalidCardError: card is not in the variant's deck
        """
        if isinstance(card, str):
            card = Card.from_string(card)
        if card in self.placed_cards():
            raise DuplicateCardError([card])
        if card.rank not in self.variant.ranks:
            raise InvalidCardError(f"{card} is not part of the {self.variant.label} deck")

        slots = self._slots(self.active)
        if None not in slots:
            return False
        slots[slots.index(None)] = card
        self.result = None
        self.advance()
        return True

    def advance(self) -> None:
        """Move the cursor on if the active selector is full."""
        if self.complete:
            return

        if self.active == BOARD:
            if self._is_full(BOARD):
                self.active = 0
            return

        if not self._is_full(self.active):
            return
        if self.active < self.num_players - 1:
            self.active += 1
        elif not self._is_full(BOARD):
            self.active = BOARD
        else:
            self.active = 0

    def remove(self, selector: Selector, index: int) -> Optional[Card]:
        """Empty one slot, leaving the other slots where they are."""
        slots = self._slots(selector)
        card = slots[index]
        slots[index] = None
        self.result = None
        return card

    def activate(self, selector: Selector) -> None:
        """Make a player (by index) or the board the active selector."""
        if selector != BOARD:
            if not isinstance(selector, int) or not 0 <= selector < self.num_players:
                raise InvalidPlayerCount(
                    f"No player {selector!r} at a {self.num_players}-player table"
                )
        self.active = selector

    def clear_hand(self, player: int) -> None:
        """Empty every slot of one player's hand."""
        if not 0 <= player < self.num_players:
            raise InvalidPlayerCount(f"No player {player} at a {self.num_players}-player table")
        self.hands[player] = [None] * self.variant.hole_cards
        self.result = None

    def add_player(self) -> bool:
        if self.num_players >= MAX_PLAYERS:
            return False
        self.hands.append([None] * self.variant.hole_cards)
        self.result = None
        return True

    def remove_player(self) -> bool:
        if self.num_players <= MIN_PLAYERS:
            return False
        self.hands.pop()
        self.result = None
        if self.active != BOARD and self.active >= self.num_players:
            self.active = self.num_players - 1
        return True

    def reset(self) -> None:
        """Clear every card, keeping the player count and variant."""
        self.hands = _empty_hands(self.num_players, self.variant)
        self.board = [None] * BOARD_SIZE
        self.active = 0
        self.result = None

    def set_variant(self, variant: Union[GameVariant, str]) -> None:
        """Switch variant; hole-card slots are resized and cleared."""
        self.variant = GameVariant.parse(variant)
        self.reset()

    def hands_and_board(self) -> tuple[list[Hand], list[Card], GameVariant]:
        """Validated (hands, board, variant) for the engine."""
        if not self.ready:
            missing = [i + 1 for i in range(self.num_players) if not self._is_full(i)]
            raise InvalidHandSize(
                f"Players {missing} need {self.variant.hole_cards} cards each"
            )
        hands = [Hand(tuple(hand)) for hand in self.hands]
        board = [c for c in self.board if c is not None]
        return hands, board, self.variant

    def calculate(
        self,
        calculator: Optional[EquityCalculator] = None,
        **kwargs,
    ) -> EquityResult:
        """Run the engine on the current cards and keep the result."""
        hands, board, variant = self.hands_and_board()
        calculator = calculator or EquityCalculator()
        logger.debug("Calculating %s for %d players", variant.value, len(hands))
        self.result = calculator.compute(hands, board, variant, **kwargs)
        return self.result

    def to_dict(self) -> dict:
        def _card(c: Slot):
            return str(c) if c is not None else None

        return {
            "variant": self.variant.value,
            "hands": [[_card(c) for c in hand] for hand in self.hands],
            "board": [_card(c) for c in self.board],
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TableSession":
        def _card(s):
            return Card.from_string(s) if s is not None else None

        variant = GameVariant.parse(data.get("variant", GameVariant.TEXAS_HOLDEM.value))
        hands = [[_card(s) for s in hand] for hand in data["hands"]]
        board = [_card(s) for s in data.get("board", [])]
        if not MIN_PLAYERS <= len(hands) <= MAX_PLAYERS:
            raise InvalidPlayerCount(f"Sessions hold {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(hands)}")
        if len(board) > BOARD_SIZE:
            raise InvalidBoardSize(f"Board can hold at most {BOARD_SIZE} cards, got {len(board)}")
        board += [None] * (BOARD_SIZE - len(board))

        for hand in hands:
            if len(hand) != variant.hole_cards:
                raise InvalidHandSize(
                    f"Hand slots must hold {variant.hole_cards} cards for {variant.label}"
                )
        check_duplicates(
            [[c for c in hand if c is not None] for hand in hands],
            [c for c in board if c is not None],
        )

        active = data.get("active", 0)
        if active != BOARD:
            try:
                active = int(active)
            except (TypeError, ValueError):
                active = 0
            if not 0 <= active < len(hands):
                active = 0

        return cls(variant=variant, hands=hands, board=board, active=active)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "TableSession":
        return cls.from_dict(json.loads(text))
