#!/usr/bin/env python3
"""Calculate multi-player equity from the command line."""

import argparse
import logging
import sys
import threading
from dataclasses import replace
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from splitpot.game.cards import parse_cards
from splitpot.game.equity import EquityCalculator, EquityConfig, EquityResult
from splitpot.game.errors import EquityError
from splitpot.game.evaluator import get_oracle
from splitpot.game.extractor import best_hand
from splitpot.game.variants import GameVariant


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Calculate each player's equity for a set of hole cards"
    )
    parser.add_argument(
        "hands",
        nargs="+",
        help="Hole cards per player (e.g. 'AsKh QdQc')",
    )
    parser.add_argument(
        "-b", "--board",
        default="",
        help="Board cards (e.g., 'Ks7d2c' or 'Ks 7d 2c')",
    )
    parser.add_argument(
        "-g", "--game",
        choices=[v.value for v in GameVariant],
        default=GameVariant.TEXAS_HOLDEM.value,
        help="Game variant (default: texas-holdem)",
    )
    parser.add_argument(
        "-i", "--iterations",
        type=int,
        help="Monte Carlo iterations (default: per variant)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducible simulation",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Abandon the calculation after this many seconds",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)
    console = Console()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )

    variant = GameVariant.parse(args.game)

    overrides = {
        "iterations": args.iterations,
        "seed": args.seed,
        "deadline": args.timeout,
    }
    try:
        hands = [parse_cards(h) for h in args.hands]
        board = parse_cards(args.board)
        config = replace(
            EquityConfig.from_env(),
            **{k: v for k, v in overrides.items() if v is not None},
        )
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        return 1

    console.print(f"[bold]Game:[/] {variant.label}")
    if board:
        console.print(f"[bold]Board:[/] {' '.join(str(c) for c in board)}")
    console.print()

    calculator = EquityCalculator(config=config)
    outcome: dict = {}

    def run():
        try:
            outcome["result"] = calculator.compute(hands, board, variant)
        except Exception as e:
            outcome["error"] = e

    # Calculate in the background so the spinner keeps rendering
    worker = threading.Thread(target=run, daemon=True)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Calculating equity...")
        worker.start()
        while worker.is_alive():
            worker.join(timeout=0.1)

    error = outcome.get("error")
    if isinstance(error, EquityError):
        console.print(f"[red]{error}[/]")
        return 1
    if error is not None:
        raise error

    _display_result(console, outcome["result"], hands, board, variant)
    return 0


def _display_result(
    console: Console,
    result: EquityResult,
    hands: list,
    board: list,
    variant: GameVariant,
) -> None:
    """Display per-player win and tie frequencies."""
    table = Table(title="Equity")
    table.add_column("Player", style="bold")
    table.add_column("Hand")
    table.add_column("Win %", justify="right", style="green")
    table.add_column("Tie %", justify="right", style="yellow")
    if len(board) == 5:
        table.add_column("Made Hand")

    oracle = get_oracle(variant)
    for i, hand in enumerate(hands):
        row = [
            f"P{i + 1}",
            " ".join(str(c) for c in hand),
            f"{result.equities[i] * 100:.2f}",
            f"{result.ties[i] * 100:.2f}",
        ]
        if len(board) == 5:
            row.append(str(best_hand(hand, board, variant, oracle)))
        table.add_row(*row)

    console.print(table)
    method = "exact enumeration" if result.exact else "Monte Carlo"
    console.print(f"[dim]{result.trials:,} runouts ({method})[/]")


if __name__ == "__main__":
    sys.exit(main())
