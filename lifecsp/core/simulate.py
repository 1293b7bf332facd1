"""
Reference direct simulation of the bounded Game of Life.

Computes the next generation by plain neighbor counting, with the same
bounded universe as the constraint model: cells beyond the edge count as
dead and the border ring is held at 0. Used to verify solved rounds.
"""

import numpy as np
from scipy.ndimage import convolve

from lifecsp.core.grid_types import Board, border_mask


# 3x3 Moore neighborhood without the center
NEIGHBOR_KERNEL = np.array([
    [1, 1, 1],
    [1, 0, 1],
    [1, 1, 1],
], dtype=int)


def neighbor_counts(board: Board) -> np.ndarray:
    """
    Number of live Moore neighbors of every cell (0..8).

    Example:
        >>> b = np.zeros((3, 3), dtype=int); b[0, 0] = 1
        >>> int(neighbor_counts(b)[1, 1])
        1
    """
    assert board.ndim == 2, f"Board must be 2D, got {board.ndim}D"
    return convolve(board.astype(int), NEIGHBOR_KERNEL, mode="constant", cval=0)


def life_step(board: Board) -> Board:
    """
    One B3/S23 generation on a bounded board.

    N < 2 -> 0, N == 2 -> unchanged, N == 3 -> 1, N > 3 -> 0; border -> 0.
    The input's own border is treated as dead before counting.
    """
    current = (board != 0).astype(int)
    current[border_mask(current.shape[0])] = 0

    n = neighbor_counts(current)
    nxt = np.where(n == 3, 1, np.where(n == 2, current, 0))
    nxt[border_mask(current.shape[0])] = 0
    return nxt.astype(int)

