"""
Game of Life constraint poster.

Posts the complete constraint system of one round on a BoardModel:

  1. Border rule:   current[i][j] == 0 and next[i][j] == 0 on the outer ring
  2. Closure rule:  interior current cells not in the activation set are 0
  3. Transition:    for every interior cell, with N the sum of its 8 Moore
                    neighbors on the current grid, exactly one of

                        N <  2  and  next == 0
                        N == 2  and  next == current
                        N == 3  and  next == 1
                        N >  3  and  next == 0

                    holds.

The exclusive choice is encoded with four binary case indicators summing
to 1; each indicator bounds N (0 <= N <= 8) and fixes next through linear
implications. The antecedents partition 0..8, so the solver derives the
active case from the current grid rather than choosing it.
"""

import logging
from typing import Dict, List

from lifecsp.constraints.builder import ConstraintBuilder
from lifecsp.constraints.indexing import RULE_CASES, current_index, next_index
from lifecsp.core.grid_types import cell_index, is_border
from lifecsp.model.board import BoardModel


logger = logging.getLogger(__name__)

# Upper bound of a Moore neighbor sum
MAX_NEIGHBORS = 8


def moore_neighbors(r: int, c: int, length: int) -> List[int]:
    """
    Current-grid variable indices of the 8 cells around interior cell (r, c).

    Example:
        >>> moore_neighbors(1, 1, 3)
        [0, 1, 2, 3, 5, 6, 7, 8]
    """
    return [
        current_index(r + dr, c + dc, length)
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if (dr, dc) != (0, 0)
    ]


def post_transition_rule(builder: ConstraintBuilder, r: int, c: int, length: int) -> None:
    """
    Post the four-case transition rule for interior cell (r, c).

    Allocates 4 indicator variables (lt2, eq2, eq3, gt3) and posts:

        b_lt2 + b_eq2 + b_eq3 + b_gt3 == 1
        b_lt2 -> N <= 1,           next == 0
        b_eq2 -> 2 <= N <= 2,      next == current
        b_eq3 -> 3 <= N <= 3,      next == 1
        b_gt3 -> N >= 4,           next == 0
    """
    n_idx = moore_neighbors(r, c, length)
    ones = [1] * len(n_idx)
    cur = current_index(r, c, length)
    nxt = next_index(r, c, length)

    b_lt2, b_eq2, b_eq3, b_gt3 = builder.new_variables(len(RULE_CASES))
    tag = "transition"

    builder.add_eq([b_lt2, b_eq2, b_eq3, b_gt3], [1, 1, 1, 1], 1, tag)

    # N < 2: N + 7*b <= 8, next + b <= 1
    builder.add_le(n_idx + [b_lt2], ones + [MAX_NEIGHBORS - 1], MAX_NEIGHBORS, tag)
    builder.add_le([nxt, b_lt2], [1, 1], 1, tag)

    # N == 2: N >= 2*b, N + 6*b <= 8, |next - current| <= 1 - b
    builder.add_ge(n_idx + [b_eq2], ones + [-2], 0, tag)
    builder.add_le(n_idx + [b_eq2], ones + [MAX_NEIGHBORS - 2], MAX_NEIGHBORS, tag)
    builder.add_le([nxt, cur, b_eq2], [1, -1, 1], 1, tag)
    builder.add_le([cur, nxt, b_eq2], [1, -1, 1], 1, tag)

    # N == 3: N >= 3*b, N + 5*b <= 8, next >= b
    builder.add_ge(n_idx + [b_eq3], ones + [-3], 0, tag)
    builder.add_le(n_idx + [b_eq3], ones + [MAX_NEIGHBORS - 3], MAX_NEIGHBORS, tag)
    builder.add_ge([nxt, b_eq3], [1, -1], 0, tag)

    # N > 3: N >= 4*b, next + b <= 1
    builder.add_ge(n_idx + [b_gt3], ones + [-4], 0, tag)
    builder.add_le([nxt, b_gt3], [1, 1], 1, tag)


def post_game_of_life_constraints(model: BoardModel) -> Dict[str, int]:
    """
    Post border, closure and transition constraints on every cell of model.

    Must be called once, after all activations were recorded.

    Returns:
        Number of constraints posted per category
        ({"border": ..., "closure": ..., "transition": ...})

    Raises:
        RuntimeError: If the model already has its rules posted
    """
    if model.constraints_posted:
        raise RuntimeError(f"Game of Life constraints already posted on {model!r}")

    length = model.length
    builder = model.builder
    before = len(builder.constraints)

    for i in range(length):
        for j in range(length):
            if is_border(i, j, length):
                builder.fix_value(current_index(i, j, length), 0, tag="border")
                builder.fix_value(next_index(i, j, length), 0, tag="border")
                continue

            if cell_index(i, j, length) not in model.activations:
                builder.fix_value(current_index(i, j, length), 0, tag="closure")

            post_transition_rule(builder, i, j, length)

    model.constraints_posted = True

    counts = {"border": 0, "closure": 0, "transition": 0}
    for lc in builder.constraints[before:]:
        counts[lc.tag] += 1

    logger.debug(
        "Posted %d constraints on %dx%d board (border=%d, closure=%d, transition=%d)",
        len(builder.constraints) - before, length, length,
        counts["border"], counts["closure"], counts["transition"],
    )
    return counts
