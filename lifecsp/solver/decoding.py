"""
Solution decoding from the x vector to boards.

The first L*L entries of x are the current grid and the next L*L entries the
next grid, both row-major. Indicator entries after them are dropped.
"""

from typing import Tuple

import numpy as np

from lifecsp.core.grid_types import Board


def x_to_boards(x: np.ndarray, length: int) -> Tuple[Board, Board]:
    """
    Decode a solved x vector into (current, next) boards.

    Raises:
        ValueError: If x is shorter than the two grids

    Example:
        >>> cur, nxt = x_to_boards(np.array([0, 1, 0, 0, 1, 0, 0, 0]), 2)
        >>> nxt.tolist()
        [[1, 0], [0, 0]]
    """
    n = length * length
    if x.ndim != 1 or x.size < 2 * n:
        raise ValueError(
            f"x must be a flat vector of at least 2*L*L = {2 * n} entries, got shape {x.shape}"
        )

    current = x[:n].reshape(length, length).astype(int)
    nxt = x[n:2 * n].reshape(length, length).astype(int)
    return current, nxt
