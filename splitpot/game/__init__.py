"""Equity engine module."""

from .cards import Card, Hand, Deck, parse_cards
from .variants import GameVariant
from .deck import build_deck
from .evaluator import HandEvaluator, HandValue, HandCategory, ScoringOracle, get_oracle
from .extractor import best_hand
from .equity import (
    EquityCalculator, EquityConfig, EquityResult,
    calculate_equity, compute_equity_async,
)
from .errors import (
    EquityError, InvalidPlayerCount, InvalidHandSize, InvalidBoardSize,
    InvalidCardError, UnsupportedVariant, DuplicateCardError,
    OracleFailure, CalculationCancelled,
)

__all__ = [
    "Card",
    "Hand",
    "Deck",
    "parse_cards",
    "GameVariant",
    "build_deck",
    "HandEvaluator",
    "HandValue",
    "HandCategory",
    "ScoringOracle",
    "get_oracle",
    "best_hand",
    "EquityCalculator",
    "EquityConfig",
    "EquityResult",
    "calculate_equity",
    "compute_equity_async",
    "EquityError",
    "InvalidPlayerCount",
    "InvalidHandSize",
    "InvalidBoardSize",
    "InvalidCardError",
    "UnsupportedVariant",
    "DuplicateCardError",
    "OracleFailure",
    "CalculationCancelled",
]
