"""
ILP search wrapper for one Game of Life round.

This module provides the "propagate, then branch and search" step:
  - Unary propagation: single-variable equalities from the ConstraintBuilder
    narrow the {0,1} domains (a contradiction means no solution)
  - Creates one integer variable per x entry with the propagated bounds,
    named in branch order
  - Adds all builder constraints
  - Solves using PuLP's CBC solver (branch and bound)
  - Returns the first satisfying assignment as a numpy vector

Uses standard pulp library (no custom solver implementation).
"""

import logging
from typing import List, Optional, Tuple

import numpy as np
import pulp

from lifecsp.constraints.builder import ConstraintBuilder
from lifecsp.core.grid_types import UNASSIGNED


logger = logging.getLogger(__name__)

# Solution states that carry a complete assignment
ACCEPTED_SOLUTIONS = (pulp.LpSolutionOptimal, pulp.LpSolutionIntegerFeasible)


class NoSolutionError(Exception):
    """Raised when a round's constraint system has no consistent assignment."""

    def __init__(self, message: str, solver_status: str = "Infeasible", round_number: Optional[int] = None):
        super().__init__(message)
        self.solver_status = solver_status
        self.round_number = round_number


def propagate_unary(builder: ConstraintBuilder) -> Tuple[np.ndarray, np.ndarray]:
    """
    Narrow every {0,1} domain using the builder's single-variable equalities.

    Returns:
        (lo, hi): integer bound arrays of length builder.num_variables

    Raises:
        NoSolutionError: If a variable is fixed to two different values, or
            to a value outside {0, 1}

    Example:
        >>> b = ConstraintBuilder(num_variables=2)
        >>> b.fix_value(0, 1)
        >>> lo, hi = propagate_unary(b)
        >>> lo.tolist(), hi.tolist()
        ([1, 0], [1, 1])
    """
    lo = np.zeros(builder.num_variables, dtype=int)
    hi = np.ones(builder.num_variables, dtype=int)

    for lc in builder.constraints:
        if not lc.is_unary_equality():
            continue

        idx = lc.indices[0]
        coeff = lc.coeffs[0]
        if coeff == 0 or lc.rhs % coeff != 0:
            raise NoSolutionError(f"Propagation failed: x[{idx}] has no integer value for {lc}")

        value = lc.rhs // coeff
        if value < lo[idx] or value > hi[idx]:
            raise NoSolutionError(
                f"Propagation failed: x[{idx}] cannot be {value} "
                f"(domain narrowed to [{lo[idx]}, {hi[idx]}])"
            )
        lo[idx] = hi[idx] = value

    return lo, hi


def solve_constraints(
    builder: ConstraintBuilder,
    lo: np.ndarray,
    hi: np.ndarray,
    order: List[int],
    objective_vars: List[int],
    value_selection: str = "max",
    time_limit: Optional[float] = None,
    msg: bool = False,
) -> Tuple[np.ndarray, str]:
    """
    Build and solve the ILP of one round.

    Args:
        builder: ConstraintBuilder with every posted constraint
        lo, hi: Propagated domain bounds per variable
        order: Branch order; variable names follow it so CBC sees the
            columns in that order
        objective_vars: Variables whose sum carries the value preference
        value_selection: "max" (prefer 1), "min" (prefer 0) or "none"
        time_limit: Optional CBC time limit in seconds
        msg: Show CBC output

    Returns:
        (x, status): x has one entry per variable (0, 1, or UNASSIGNED if the
        solver left it unbound); status is pulp's solution status string

    Raises:
        NoSolutionError: If CBC finds no complete assignment
        ValueError: If value_selection is unknown
    """
    # 1. Create model
    if value_selection == "max":
        prob = pulp.LpProblem("game_of_life_round", pulp.LpMaximize)
    elif value_selection in ("min", "none"):
        prob = pulp.LpProblem("game_of_life_round", pulp.LpMinimize)
    else:
        raise ValueError(f"Unknown value selection: {value_selection}")

    # 2. Create integer variables with propagated bounds (LpBinary would reset them)
    x: List[Optional[pulp.LpVariable]] = [None] * builder.num_variables
    for rank, idx in enumerate(order):
        x[idx] = pulp.LpVariable(
            f"x{rank:07d}_{idx}",
            lowBound=int(lo[idx]),
            upBound=int(hi[idx]),
            cat=pulp.LpInteger,
        )

    # 3. Add constraints from builder.constraints
    for lc in builder.constraints:
        expr = pulp.lpSum(coeff * x[idx] for idx, coeff in zip(lc.indices, lc.coeffs))
        if lc.sense == "==":
            prob += (expr == lc.rhs)
        elif lc.sense == "<=":
            prob += (expr <= lc.rhs)
        else:
            prob += (expr >= lc.rhs)

    # 4. Set objective
    if value_selection == "none":
        prob += pulp.lpSum([])
    else:
        prob += pulp.lpSum(x[i] for i in objective_vars)

    # 5. Solve using pulp's CBC solver
    prob.solve(pulp.PULP_CBC_CMD(msg=msg, timeLimit=time_limit))
    status = pulp.LpSolution[prob.sol_status]
    logger.debug(
        "CBC finished: %s (%d variables, %d constraints)",
        status, builder.num_variables, len(builder.constraints),
    )

    if prob.sol_status not in ACCEPTED_SOLUTIONS:
        raise NoSolutionError(f"Solver status: {status}", solver_status=status)

    # 6. Extract solution (fixed variables keep their propagated value)
    values = np.full(builder.num_variables, UNASSIGNED, dtype=int)
    for idx, var in enumerate(x):
        if lo[idx] == hi[idx]:
            values[idx] = lo[idx]
            continue
        val = var.varValue
        if val is not None:
            # Guard against float noise (use > 0.5 threshold)
            values[idx] = 1 if val > 0.5 else 0

    return values, status
