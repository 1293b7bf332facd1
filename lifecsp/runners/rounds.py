"""
Round controller for the Game of Life constraint solver.

This module drives generations one round at a time:
  1. Build the round model (activations from input or from the previous round)
  2. Post border, closure and transition constraints
  3. Propagate, order variables for branching, search with CBC
  4. Decode x -> (current, next) boards into a solved model
  5. Chain: the solved next grid seeds the next round's model

Rounds are strictly sequential and share no state: a new round only copies
the solved values of the previous one.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from lifecsp.constraints.indexing import num_grid_variables
from lifecsp.constraints.life_rule import post_game_of_life_constraints
from lifecsp.core.grid_types import Cell
from lifecsp.core.simulate import life_step
from lifecsp.model.board import BoardModel
from lifecsp.runners.config import RunConfig
from lifecsp.runners.results import RoundResult, RunResult, compute_grid_mismatches
from lifecsp.solver.branching import BranchingStrategy, branch_order
from lifecsp.solver.decoding import x_to_boards
from lifecsp.solver.lp_solver import NoSolutionError, propagate_unary, solve_constraints


logger = logging.getLogger(__name__)


def build_initial_model(length: int, activations: Iterable[Cell]) -> BoardModel:
    """
    Round-1 model: activate every given (row, col) on a fresh board.

    Raises:
        InvalidConfigurationError: If length < 1
        CoordinateOutOfRangeError: If a cell is not on the board
    """
    model = BoardModel(length)
    for r, c in activations:
        model.activate(r, c)
    return model


def run_round(
    model: BoardModel,
    strategy: BranchingStrategy = BranchingStrategy(),
    time_limit: Optional[float] = None,
    msg: bool = False,
) -> BoardModel:
    """
    Search one round and return its first satisfying assignment.

    Posts the Game of Life constraints if that has not happened yet. The
    input model's cells stay unbound; the solution is a derived copy with
    every cell bound.

    Raises:
        NoSolutionError: If propagation or search finds no assignment
    """
    if not model.constraints_posted:
        post_game_of_life_constraints(model)

    lo, hi = propagate_unary(model.builder)
    order = branch_order(lo, hi, model.length, strategy)

    x, status = solve_constraints(
        model.builder,
        lo,
        hi,
        order,
        objective_vars=list(range(num_grid_variables(model.length))),
        value_selection=strategy.value_selection,
        time_limit=time_limit,
        msg=msg,
    )

    solution = BoardModel.derive(model)
    solution.current[:, :], solution.next[:, :] = x_to_boards(x, model.length)
    solution.solver_status = status

    if not solution.is_solved():
        raise NoSolutionError("Solver left cells unassigned", solver_status=status)

    return solution


def iter_rounds(
    initial: BoardModel,
    nb_rounds: int,
    strategy: BranchingStrategy = BranchingStrategy(),
    time_limit: Optional[float] = None,
    msg: bool = False,
    verify: bool = False,
) -> Iterator[RoundResult]:
    """
    Yield one RoundResult per generation, pulling rounds on demand.

    Round k+1 is built from round k's solved next grid. With verify=True,
    each round's next grid is compared with the reference simulation of its
    current grid.

    Raises:
        NoSolutionError: For the first round without a solution, with
            round_number set; earlier rounds were already yielded
    """
    model = initial

    for k in range(1, nb_rounds + 1):
        try:
            solution = run_round(model, strategy, time_limit, msg)
        except NoSolutionError as e:
            e.round_number = k
            raise

        result = RoundResult(
            round_number=k,
            current=solution.current_grid(),
            next=solution.next_grid(),
            solver_status=solution.solver_status,
            num_constraints=len(solution.builder.constraints),
            num_variables=solution.builder.num_variables,
            constraint_counts=solution.builder.counts_by_tag(),
        )

        if verify:
            result.mismatches = compute_grid_mismatches(life_step(result.current), result.next)
            if result.mismatches:
                logger.warning(
                    "Round %d disagrees with direct simulation on %d cells",
                    k, len(result.mismatches),
                )

        logger.info("Round %d solved: %d live cells", k, int(result.next.sum()))
        yield result

        if k < nb_rounds:
            model = BoardModel.from_previous_round(solution)


def run_game(
    initial: BoardModel,
    nb_rounds: int,
    strategy: BranchingStrategy = BranchingStrategy(),
    time_limit: Optional[float] = None,
    msg: bool = False,
    verify: bool = False,
) -> RunResult:
    """
    Run nb_rounds generations and collect them.

    A round without a solution stops the run with status "no_solution";
    rounds produced before it are kept.

    Example:
        >>> model = build_initial_model(5, [(2, 1), (2, 2), (2, 3)])
        >>> result = run_game(model, 2)
        >>> result.rounds[0].next[1:4, 2].tolist()
        [1, 1, 1]
    """
    result = RunResult(length=initial.length, rounds_requested=nb_rounds)

    try:
        for round_result in iter_rounds(initial, nb_rounds, strategy, time_limit, msg, verify):
            result.rounds.append(round_result)
    except NoSolutionError as e:
        logger.warning("No solution at round %s: %s", e.round_number, e)
        result.status = "no_solution"
        result.failed_round = e.round_number
        result.error_message = str(e)
        return result

    if any(rr.mismatches for rr in result.rounds):
        result.status = "mismatch"

    return result


def run_game_from_config(config: RunConfig, activations: Iterable[Cell]) -> RunResult:
    """
    Validate config, build the round-1 model and run every round.

    Raises:
        InvalidConfigurationError: Before any model is built
    """
    config.validate()
    initial = build_initial_model(config.length, activations)
    return run_game(
        initial,
        config.rounds,
        strategy=config.strategy,
        time_limit=config.time_limit,
        msg=config.solver_msg,
        verify=config.verify,
    )
