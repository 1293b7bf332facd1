"""
Board text IO.

Input format: L*L whitespace-separated integer tokens, row-major, one token
per cell. Any nonzero token activates the cell. Line breaks are irrelevant,
so a board may be given on one line or as L rows.

    0 0 0 0 0
    0 0 0 0 0
    0 1 1 1 0
    0 0 0 0 0
    0 0 0 0 0
"""

from typing import IO, List

import numpy as np

from lifecsp.core.grid_types import Board, Cell


class BoardFormatError(ValueError):
    """Raised when the board text cannot be read as L*L integer tokens."""
    pass


def parse_tokens(text: str, length: int) -> List[int]:
    """
    Read the first length*length integer tokens from text.

    Extra tokens after the board are ignored.

    Raises:
        BoardFormatError: If a token is not an integer or too few are present
    """
    needed = length * length
    values: List[int] = []

    for token in text.split():
        if len(values) == needed:
            break
        try:
            values.append(int(token))
        except ValueError:
            raise BoardFormatError(
                f"Token {len(values)} is not an integer: {token!r}"
            ) from None

    if len(values) < needed:
        raise BoardFormatError(
            f"Expected {needed} cell values for a {length}x{length} board, got {len(values)}"
        )

    return values


def read_board(stream: IO[str], length: int) -> Board:
    """
    Read an L x L 0/1 board from a text stream (nonzero tokens -> 1).

    Raises:
        BoardFormatError: If the stream does not hold L*L integer tokens
    """
    values = parse_tokens(stream.read(), length)
    return (np.array(values, dtype=int).reshape(length, length) != 0).astype(int)


def activations_of(board: Board) -> List[Cell]:
    """Return (row, col) of every nonzero cell, row-major."""
    return [(int(r), int(c)) for r, c in np.argwhere(board != 0)]


def read_activations(stream: IO[str], length: int) -> List[Cell]:
    """
    Read a board from a text stream and return the activated cells.

    Args:
        stream: Text stream (e.g. sys.stdin)
        length: Board side length L

    Returns:
        (row, col) of every nonzero token, in row-major order
    """
    return activations_of(read_board(stream, length))
