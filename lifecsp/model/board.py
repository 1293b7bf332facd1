"""
Board model for one Game of Life round.

A BoardModel owns two L x L grids of binary cell variables, the current
generation ("local board") and the next generation, together with the
constraints posted on them and the activation set. Cell variables live in
the x vector laid out by lifecsp.constraints.indexing; their bound values
are kept in two (L, L) arrays holding UNASSIGNED until a solver binds them.

Activation:
  - activate(row, col): cell forced alive by external input
  - activate_from_previous(prior): interior cells tied to the values of a
    solved prior round's next grid
"""

from __future__ import annotations

import logging
from typing import IO, Optional

import numpy as np

from lifecsp.constraints.builder import ConstraintBuilder
from lifecsp.constraints.indexing import current_index, num_grid_variables
from lifecsp.core.grid_types import (
    UNASSIGNED,
    Board,
    check_cell,
    empty_board,
    format_board,
    interior_cells,
    is_border,
    print_board,
)
from lifecsp.model.activation import ActivationSet
from lifecsp.runners.config import InvalidConfigurationError


logger = logging.getLogger(__name__)


class BoardModel:
    """
    Constraint model of one round.

    Attributes:
        length: Board side length L (>= 1)
        builder: Constraints posted so far over the x vector
        activations: Activated current-grid cells
        current: (L, L) bound values of the current grid
        next: (L, L) bound values of the next grid
        constraints_posted: True once the Game of Life rules were posted
        solver_status: Solution status of the search that bound the cells
    """

    def __init__(self, length: int):
        if length < 1:
            raise InvalidConfigurationError(
                f"Board length must be a positive integer, got {length}"
            )

        self.length = length
        self.builder = ConstraintBuilder(num_variables=num_grid_variables(length))
        self.activations = ActivationSet(length)
        self.current: Board = empty_board(length)
        self.next: Board = empty_board(length)
        self.constraints_posted = False
        self.solver_status: Optional[str] = None

    @classmethod
    def derive(cls, source: BoardModel, length: Optional[int] = None) -> BoardModel:
        """
        Build a new model carrying over the variable state of `source`.

        Bound values are copied for the overlapping top-left window. When
        the lengths match, posted constraints and activations are copied
        too, so the derived model is an independent clone of `source`.
        """
        length = source.length if length is None else length
        model = cls(length)

        k = min(length, source.length)
        model.current[:k, :k] = source.current[:k, :k]
        model.next[:k, :k] = source.next[:k, :k]

        if length == source.length:
            model.builder = source.builder.copy()
            model.activations = source.activations.copy()
            model.constraints_posted = source.constraints_posted
            model.solver_status = source.solver_status

        return model

    @classmethod
    def from_previous_round(cls, prior: BoardModel) -> BoardModel:
        """New model of the same length whose current grid is prior's next grid."""
        model = cls(prior.length)
        model.activate_from_previous(prior)
        return model

    def activate(self, row: int, col: int) -> None:
        """
        Turn on current-grid cell (row, col).

        Records the cell in the activation set and posts current == 1.
        Border cells are recorded but stay dead.

        Raises:
            CoordinateOutOfRangeError: If (row, col) is not on the board
        """
        check_cell(row, col, self.length)
        self.activations.record(row, col)

        if is_border(row, col, self.length):
            logger.warning(
                "Ignoring activation of border cell (%d, %d): the border stays at 0",
                row, col,
            )
            return

        self.builder.fix_value(current_index(row, col, self.length), 1, tag="activation")

    def activate_from_previous(self, prior: BoardModel) -> None:
        """
        Tie every interior current cell to prior's solved next grid.

        Posts current[r][c] == prior_next[r][c] for interior cells (so both
        0s and 1s carry over) and records (r, c) as activated iff the prior
        value is 1.

        Raises:
            InvalidConfigurationError: If prior has a different length or
                its next grid is not fully assigned
        """
        if prior.length != self.length:
            raise InvalidConfigurationError(
                f"Cannot chain a {prior.length}x{prior.length} round into a "
                f"{self.length}x{self.length} round"
            )
        if not prior.is_solved():
            raise InvalidConfigurationError(
                "Cannot chain from a round whose next grid has unassigned cells"
            )

        for r, c in interior_cells(self.length):
            value = int(prior.next[r, c])
            self.builder.fix_value(current_index(r, c, self.length), value, tag="previous")
            if value != 0:
                self.activations.record(r, c)

    def current_value(self, row: int, col: int) -> int:
        check_cell(row, col, self.length)
        return int(self.current[row, col])

    def next_value(self, row: int, col: int) -> int:
        check_cell(row, col, self.length)
        return int(self.next[row, col])

    def current_grid(self) -> Board:
        return self.current.copy()

    def next_grid(self) -> Board:
        return self.next.copy()

    def activation_board(self) -> Board:
        """0/1 board of the activated interior cells (the intended current grid)."""
        board = empty_board(self.length, fill=0)
        for r, c in self.activations.cells():
            if not is_border(r, c, self.length):
                board[r, c] = 1
        return board

    def is_solved(self) -> bool:
        """True when every cell of both grids is bound."""
        return bool(np.all(self.current != UNASSIGNED) and np.all(self.next != UNASSIGNED))

    def format_local_board(self) -> str:
        return format_board(self.current)

    def format_board(self) -> str:
        return format_board(self.next)

    def print_local_board(self, out: Optional[IO[str]] = None) -> None:
        """Print the current ("local") grid."""
        print_board(self.current, out)

    def print_board(self, out: Optional[IO[str]] = None) -> None:
        """Print the next (produced) grid."""
        print_board(self.next, out)

    def __repr__(self) -> str:
        return (
            f"BoardModel(length={self.length}, activations={len(self.activations)}, "
            f"constraints={len(self.builder.constraints)}, solved={self.is_solved()})"
        )
