"""
Command-line entrypoint: play Game of Life rounds through the constraint solver.

Usage:
    # 10x10 board, 30 rounds, board read from stdin (L*L tokens of 0/1)
    python -m lifecsp.runners.cli 10 30 < board.txt

    # Check every round against direct simulation, show the starting board
    lifecsp 5 4 --verify --show-initial < blinker.txt

Output (stdout), per round:

    Round 1
    >> [BOARD] <------
    0 0 0 0 0
    ...

Logs go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, List, Optional

from lifecsp.core.board_io import BoardFormatError, read_activations
from lifecsp.core.grid_types import CoordinateOutOfRangeError, format_board
from lifecsp.runners.config import InvalidConfigurationError, RunConfig
from lifecsp.runners.rounds import build_initial_model, iter_rounds
from lifecsp.solver.branching import VALUE_SELECTIONS, VARIABLE_SELECTIONS
from lifecsp.solver.lp_solver import NoSolutionError


# Logger for this module
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID_CONFIGURATION = 1
EXIT_BAD_BOARD = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifecsp",
        description="Play Conway's Game of Life by solving each round as a constraint system.",
        epilog="Example: lifecsp 10 30 < board.txt  (a 10*10 board, playing 30 rounds)",
    )
    parser.add_argument("length", type=int, help="Square-root length of the board (> 0).")
    parser.add_argument("rounds", type=int, help="Number of rounds to play (>= 0).")
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Optional CBC time limit per round, in seconds.",
    )
    parser.add_argument(
        "--variable-selection",
        choices=VARIABLE_SELECTIONS,
        default="max_range_max_value",
        help="Branching variable order.",
    )
    parser.add_argument(
        "--value-selection",
        choices=VALUE_SELECTIONS,
        default="max",
        help="Branching value preference.",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Compare every round with direct simulation and warn on differences.",
    )
    parser.add_argument(
        "--show-initial",
        action="store_true",
        help="Print the starting board before the first round.",
    )
    parser.add_argument(
        "--solver-msg",
        action="store_true",
        help="Show CBC solver output.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (stderr).",
    )
    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[IO[str]] = None,
    stdout: Optional[IO[str]] = None,
) -> int:
    """CLI entrypoint. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    config = RunConfig(
        length=args.length,
        rounds=args.rounds,
        time_limit=args.time_limit,
        solver_msg=args.solver_msg,
        variable_selection=args.variable_selection,
        value_selection=args.value_selection,
        verify=args.verify,
    )

    try:
        config.validate()
    except InvalidConfigurationError as e:
        logger.error("%s", e)
        return EXIT_INVALID_CONFIGURATION

    try:
        initial = build_initial_model(config.length, read_activations(stdin, config.length))
    except (BoardFormatError, CoordinateOutOfRangeError) as e:
        logger.error("Could not read the initial board: %s", e)
        return EXIT_BAD_BOARD

    logger.info(
        "Playing %d rounds on a %dx%d board (%d activated cells)",
        config.rounds, config.length, config.length, len(initial.activations),
    )

    if args.show_initial:
        stdout.write("\nInitial\n" + format_board(initial.activation_board()) + "\n")

    try:
        for rr in iter_rounds(
            initial,
            config.rounds,
            strategy=config.strategy,
            time_limit=config.time_limit,
            msg=config.solver_msg,
            verify=config.verify,
        ):
            stdout.write(f"\nRound {rr.round_number}\n" + format_board(rr.next) + "\n")
            stdout.flush()
    except NoSolutionError as e:
        logger.warning("Round %s: %s", e.round_number, e)
        stdout.write("Not any solution found.\n")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
