"""Multi-player equity calculation."""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from itertools import combinations
from math import comb
from typing import Iterable, Iterator, Optional, Sequence, Union
import logging
import os
import time

import numpy as np

from .cards import Card, CardLike, Hand, to_cards
from .deck import build_deck
from .errors import (
    CalculationCancelled, EquityError, InvalidBoardSize,
    InvalidHandSize, InvalidPlayerCount,
)
from .evaluator import ScoringOracle, get_oracle
from .extractor import best_hands
from .variants import GameVariant


logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 6
BOARD_SIZE = 5

HandsInput = Sequence[Union[Hand, str, Sequence[CardLike]]]
BoardInput = Union[str, Sequence[CardLike]]
RandomSource = Union[np.random.Generator, int, None]


@dataclass
class EquityConfig:
    """Configuration for equity calculations."""
    iterations: Optional[int] = None   # Monte Carlo trials (None = variant default)
    max_enumerated_cards: int = 2      # Enumerate exactly up to this many missing cards
    check_interval: int = 500          # Trials between cancellation checks
    deadline: Optional[float] = None   # Seconds before the calculation is abandoned
    seed: Optional[int] = None         # Seed used when no generator is passed

    def __post_init__(self):
        if self.iterations is not None and self.iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {self.iterations}")
        if self.check_interval < 1:
            raise ValueError(f"check_interval must be at least 1, got {self.check_interval}")

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "EquityConfig":
        """
        Build a config from SPLITPOT_* environment variables.

        SPLITPOT_ITERATIONS, SPLITPOT_SEED and SPLITPOT_DEADLINE are
        read; unset or empty variables keep the defaults.
        """
        env = os.environ if environ is None else environ

        def _get(name, cast):
            value = env.get(name, "").strip()
            return cast(value) if value else None

        return cls(
            iterations=_get("SPLITPOT_ITERATIONS", int),
            seed=_get("SPLITPOT_SEED", int),
            deadline=_get("SPLITPOT_DEADLINE", float),
        )

    def iterations_for(self, variant: GameVariant) -> int:
        if self.iterations is not None:
            return self.iterations
        return variant.simulation_iterations


@dataclass
class EquityResult:
    """
    Per-player outcome frequencies, aligned with the input hands.

    `ties[i]` is the share of trials player i tied for best. Every tied
    player is credited in full, so a column of equities + ties can sum
    past 1 across players.
    """
    equities: list[float]
    ties: list[float]
    wins_count: list[int]
    ties_count: list[int]
    trials: int
    method: str  # "enumeration" or "simulation"

    @property
    def exact(self) -> bool:
        return self.method == "enumeration"

    def to_dict(self) -> dict:
        return {
            "equities": self.equities,
            "ties": self.ties,
            "wins_count": self.wins_count,
            "ties_count": self.ties_count,
            "trials": self.trials,
            "method": self.method,
        }


class EquityTally:
    """Running win/tie counts per player."""

    def __init__(self, num_players: int):
        self.wins = np.zeros(num_players, dtype=np.int64)
        self.ties = np.zeros(num_players, dtype=np.int64)
        self.trials = 0

    def record(self, winners: Sequence[int]) -> None:
        """Record one trial's winning player indices."""
        self.trials += 1
        if len(winners) == 1:
            self.wins[winners[0]] += 1
        else:
            self.ties[list(winners)] += 1

    def result(self, method: str) -> EquityResult:
        if self.trials == 0:
            raise EquityError("No trials were run")
        return EquityResult(
            equities=(self.wins / self.trials).tolist(),
            ties=(self.ties / self.trials).tolist(),
            wins_count=self.wins.tolist(),
            ties_count=self.ties.tolist(),
            trials=self.trials,
            method=method,
        )


class _CancelCheck:
    """Polls a cancel flag and deadline every `interval` trials."""

    def __init__(self, cancel, deadline: Optional[float], interval: int):
        self.cancel = cancel
        self.interval = max(1, interval)
        self.expires = time.monotonic() + deadline if deadline is not None else None

    def __call__(self, trial: int) -> None:
        if trial % self.interval:
            return
        if self.cancel is not None and self.cancel.is_set():
            logger.info("Equity calculation cancelled after %d trials", trial)
            raise CalculationCancelled("Calculation cancelled")
        if self.expires is not None and time.monotonic() > self.expires:
            logger.info("Equity calculation hit its deadline after %d trials", trial)
            raise CalculationCancelled("Calculation exceeded its deadline")


def validate_inputs(
    hands: HandsInput,
    board: BoardInput,
    variant: GameVariant,
) -> tuple[list[Hand], list[Card]]:
    """
    Normalize and check hands and board.

    Raises:
        InvalidPlayerCount: fewer than 2 or more than 6 hands
        InvalidHandSize: a hand without the variant's hole-card count
        InvalidBoardSize: more than 5 board cards
    """
    if not MIN_PLAYERS <= len(hands) <= MAX_PLAYERS:
        raise InvalidPlayerCount(
            f"Number of players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, "
            f"got {len(hands)}"
        )

    parsed = [Hand.coerce(h) for h in hands]
    for i, hand in enumerate(parsed):
        if len(hand) != variant.hole_cards:
            raise InvalidHandSize(
                f"Player {i + 1} has {len(hand)} cards; "
                f"{variant.label} needs {variant.hole_cards}"
            )

    board_cards = to_cards(board)
    if len(board_cards) > BOARD_SIZE:
        raise InvalidBoardSize(f"Board can hold at most {BOARD_SIZE} cards, got {len(board_cards)}")

    return parsed, board_cards


def _make_rng(rng: RandomSource, seed: Optional[int]) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng if rng is not None else seed)


def _sample_runouts(
    deck: list[Card],
    missing: int,
    iterations: int,
    rng: np.random.Generator,
) -> Iterator[list[Card]]:
    """Random board completions from full permutations of the deck."""
    for _ in range(iterations):
        order = rng.permutation(len(deck))
        yield [deck[i] for i in order[:missing]]


class EquityCalculator:
    """
    Equity calculations for 2-6 players across game variants.

    Uses exact enumeration when at most two board cards are missing and
    Monte Carlo simulation otherwise.
    """

    def __init__(
        self,
        oracle: Optional[ScoringOracle] = None,
        config: Optional[EquityConfig] = None,
    ):
        """
        Args:
            oracle: Hand evaluator (defaults to the variant's lookup evaluator)
            config: Calculation settings
        """
        self.oracle = oracle
        self.config = config or EquityConfig()

    def compute(
        self,
        hands: HandsInput,
        board: BoardInput = (),
        variant: Union[GameVariant, str] = GameVariant.TEXAS_HOLDEM,
        rng: RandomSource = None,
        cancel=None,
    ) -> EquityResult:
        """
        Calculate every player's win and tie frequency.

        Args:
            hands: Hole cards per player, as Hands, strings or card lists
            board: Known board cards (0-5)
            variant: Game variant or its tag
            rng: numpy Generator or seed for simulation
            cancel: Object with is_set() (e.g. threading.Event)

        Returns:
            EquityResult aligned with `hands`
        """
        variant = GameVariant.parse(variant)
        parsed_hands, board_cards = validate_inputs(hands, board, variant)
        deck = build_deck(parsed_hands, board_cards, variant)
        oracle = self.oracle or get_oracle(variant)

        missing = BOARD_SIZE - len(board_cards)
        if missing <= self.config.max_enumerated_cards:
            method = "enumeration"
            runouts: Iterable = combinations(deck, missing)
            logger.debug(
                "Enumerating %d runouts from %d cards for %d players (%s)",
                comb(len(deck), missing), len(deck), len(parsed_hands), variant.value,
            )
        else:
            method = "simulation"
            iterations = self.config.iterations_for(variant)
            runouts = _sample_runouts(
                deck, missing, iterations, _make_rng(rng, self.config.seed)
            )
            logger.debug(
                "Simulating %d runouts from %d cards for %d players (%s)",
                iterations, len(deck), len(parsed_hands), variant.value,
            )

        check = _CancelCheck(cancel, self.config.deadline, self.config.check_interval)
        hole_cards = [hand.cards for hand in parsed_hands]
        tally = EquityTally(len(parsed_hands))

        for trial, runout in enumerate(runouts):
            check(trial)
            values = best_hands(hole_cards, board_cards + list(runout), variant, oracle)
            tally.record(oracle.winners(values))

        return tally.result(method)


def calculate_equity(
    hands: HandsInput,
    board: BoardInput = (),
    variant: Union[GameVariant, str] = GameVariant.TEXAS_HOLDEM,
    iterations: Optional[int] = None,
    seed: RandomSource = None,
) -> EquityResult:
    """
    Calculate equities for a set of hands.

    Args:
        hands: Hole cards per player (e.g. ["AsAh", "KdKc"])
        board: Board cards (e.g. "Ks7d2c")
        variant: Game variant or its tag
        iterations: Monte Carlo trials (None = variant default)
        seed: Seed or Generator for reproducible simulation

    Returns:
        EquityResult
    """
    calculator = EquityCalculator(config=EquityConfig(iterations=iterations))
    return calculator.compute(hands, board, variant, rng=seed)


def compute_equity_async(
    hands: HandsInput,
    board: BoardInput = (),
    variant: Union[GameVariant, str] = GameVariant.TEXAS_HOLDEM,
    calculator: Optional[EquityCalculator] = None,
    executor: Optional[Executor] = None,
    **kwargs,
) -> Future:
    """
    Run a calculation off the calling thread.

    Returns a Future resolving to an EquityResult, or raising the
    calculation's error. Extra keyword arguments go to compute().
    """
    calculator = calculator or EquityCalculator()
    if executor is not None:
        return executor.submit(calculator.compute, hands, board, variant, **kwargs)

    pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="splitpot")
    try:
        return pool.submit(calculator.compute, hands, board, variant, **kwargs)
    finally:
        pool.shutdown(wait=False)
