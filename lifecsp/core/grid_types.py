"""
Core grid types and utilities for the Game of Life constraint model.

Board: always shape (L, L), dtype=int, values in {0, 1} (or UNASSIGNED
before the solver has bound a cell).
Cells: indexed as (row, col) tuples or as flat indices in [0, L*L-1],
row-major.
"""

from typing import IO, Optional, Tuple, TypeAlias
import sys

import numpy as np


Board: TypeAlias = np.ndarray  # shape: (L, L), dtype: int
Cell: TypeAlias = Tuple[int, int]  # (row, col) in {0, ..., L-1}^2

# Value held by a cell whose variable has not been bound by the solver
UNASSIGNED = -1

BOARD_HEADER = ">> [BOARD] <------"


class CoordinateOutOfRangeError(IndexError):
    """Raised when a (row, col) pair falls outside an L x L board."""

    def __init__(self, row: int, col: int, length: int):
        self.row = row
        self.col = col
        self.length = length
        super().__init__(
            f"Cell ({row}, {col}) is outside the {length}x{length} board"
        )


def check_cell(row: int, col: int, length: int) -> None:
    """
    Fail fast on coordinates outside [0, length) x [0, length).

    Raises:
        CoordinateOutOfRangeError: If row or col is out of range
    """
    if not (0 <= row < length and 0 <= col < length):
        raise CoordinateOutOfRangeError(row, col, length)


def cell_index(row: int, col: int, length: int) -> int:
    """
    Map (row, col) to a flat index in [0, L*L-1], row-major.

    Formula: idx = row * length + col

    Args:
        row: Row index (0-based)
        col: Column index (0-based)
        length: Board side length L

    Returns:
        Flat cell index

    Raises:
        CoordinateOutOfRangeError: If the cell is not on the board

    Example:
        >>> cell_index(1, 2, 5)
        7
    """
    check_cell(row, col, length)
    return row * length + col


def index_to_cell(idx: int, length: int) -> Cell:
    """
    Inverse of cell_index: given flat idx and length, return (row, col).

    Raises:
        CoordinateOutOfRangeError: If idx is outside [0, L*L-1]
    """
    if not (0 <= idx < length * length):
        raise CoordinateOutOfRangeError(idx // max(length, 1), idx % max(length, 1), length)

    return (idx // length, idx % length)


def is_border(row: int, col: int, length: int) -> bool:
    """True if the cell lies on the outer ring of the board."""
    return row == 0 or col == 0 or row == length - 1 or col == length - 1


def interior_cells(length: int):
    """Yield every (row, col) with 1 <= row, col <= L-2, row-major."""
    for r in range(1, length - 1):
        for c in range(1, length - 1):
            yield (r, c)


def empty_board(length: int, fill: int = UNASSIGNED) -> Board:
    """Allocate an L x L int board filled with `fill`."""
    return np.full((length, length), fill, dtype=int)


def border_mask(length: int) -> np.ndarray:
    """Boolean (L, L) mask that is True on border cells."""
    mask = np.zeros((length, length), dtype=bool)
    mask[0, :] = True
    mask[-1, :] = True
    mask[:, 0] = True
    mask[:, -1] = True
    return mask


def format_board(board: Board) -> str:
    """
    Render a board as the header line followed by one line per row.

    Unassigned cells are rendered as "E".

    Example:
        >>> print(format_board(np.array([[0, 1], [UNASSIGNED, 0]])))
        >> [BOARD] <------
        0 1
        E 0
    """
    assert board.ndim == 2, f"Board must be 2D, got {board.ndim}D"

    lines = [BOARD_HEADER]
    for row in board:
        lines.append(' '.join("E" if val == UNASSIGNED else str(int(val)) for val in row))
    return "\n".join(lines)


def print_board(board: Board, out: Optional[IO[str]] = None) -> None:
    """Print format_board(board) to `out` (stdout by default)."""
    out = out if out is not None else sys.stdout
    out.write(format_board(board) + "\n")


if __name__ == "__main__":
    # Self-test: verify index mapping roundtrip
    length = 4
    for r in range(length):
        for c in range(length):
            idx = cell_index(r, c, length)
            assert index_to_cell(idx, length) == (r, c), f"Roundtrip failed at {(r, c)}"

    print_board(empty_board(3, fill=0))
    print("Index roundtrip test passed.")
