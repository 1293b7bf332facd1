"""
Result and diagnostics structures for multi-round runs.

Key components:
  - RoundResult: one solved generation (boards, constraint counts, status)
  - RunResult: every produced round plus the run outcome
  - compute_grid_mismatches: per-cell diff between two boards
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

import numpy as np

from lifecsp.core.grid_types import Board


# Status type for a run
RunStatus = Literal["ok", "no_solution", "mismatch"]


@dataclass
class RoundResult:
    """
    One solved round.

    Attributes:
        round_number: 1-based generation number
        current: Solved current grid (the generation the round started from)
        next: Solved next grid (the generation produced)
        solver_status: Solution status string from pulp
        num_constraints: Constraints in the round model
        num_variables: Variables in the round model (cells + indicators)
        constraint_counts: Constraints per category (activation, previous,
            border, closure, transition)
        mismatches: Cells where next differs from the reference simulation
            (only filled when verification is on)
    """
    round_number: int
    current: Board
    next: Board
    solver_status: str
    num_constraints: int
    num_variables: int
    constraint_counts: Dict[str, int] = field(default_factory=dict)
    mismatches: List[Dict[str, int]] = field(default_factory=list)


@dataclass
class RunResult:
    """
    Outcome of a multi-round run.

    Attributes:
        length: Board side length
        rounds_requested: Number of rounds asked for
        rounds: Rounds produced, in order (all valid, even on failure)
        status:
            - "ok": every requested round was solved
            - "no_solution": round failed_round had no consistent assignment
            - "mismatch": every round solved but some disagree with the
              reference simulation
        failed_round: Round number that had no solution
        error_message: Solver message for status="no_solution"
    """
    length: int
    rounds_requested: int
    rounds: List[RoundResult] = field(default_factory=list)
    status: RunStatus = "ok"
    failed_round: Optional[int] = None
    error_message: Optional[str] = None

    def boards(self) -> List[Board]:
        """Produced generations, in order."""
        return [rr.next for rr in self.rounds]


def compute_grid_mismatches(true_grid: Board, pred_grid: Board) -> List[Dict[str, int]]:
    """
    Compute per-cell mismatches between an expected and a produced board.

    Returns:
        [] if identical, else one {"r", "c", "true", "pred"} record per
        differing cell (row-major), or a single shape-mismatch record

    Example:
        >>> compute_grid_mismatches(np.array([[0, 1]]), np.array([[0, 0]]))
        [{'r': 0, 'c': 1, 'true': 1, 'pred': 0}]
    """
    if true_grid.shape != pred_grid.shape:
        return [{
            "shape_mismatch": True,
            "true_shape": tuple(true_grid.shape),
            "pred_shape": tuple(pred_grid.shape),
        }]

    return [
        {
            "r": int(r),
            "c": int(c),
            "true": int(true_grid[r, c]),
            "pred": int(pred_grid[r, c]),
        }
        for r, c in np.argwhere(true_grid != pred_grid)
    ]
