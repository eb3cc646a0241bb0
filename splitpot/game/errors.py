"""Exceptions raised by the equity engine."""


class EquityError(Exception):
    """Base class for all equity engine errors."""


class InvalidPlayerCount(EquityError, ValueError):
    """Number of hands is outside the supported 2-6 range."""


class InvalidHandSize(EquityError, ValueError):
    """A hand does not hold the variant's hole-card count."""


class InvalidBoardSize(EquityError, ValueError):
    """Board holds more than five cards."""


class InvalidCardError(EquityError, ValueError):
    """Card is not part of the active variant's deck."""


class UnsupportedVariant(EquityError, ValueError):
    """Game variant is not recognised."""


class DuplicateCardError(EquityError, ValueError):
    """The same card was placed more than once across hands and board."""

    def __init__(self, cards):
        self.cards = list(cards)
        names = ", ".join(str(c) for c in self.cards)
        super().__init__(f"Duplicate cards detected: {names}")


class OracleFailure(EquityError):
    """The hand evaluator was given a malformed set of cards."""


class CalculationCancelled(EquityError):
    """Calculation was cancelled or ran past its deadline."""
