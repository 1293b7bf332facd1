"""
Variable-vector indexing helpers for the constraint system.

One round's model is a single vector x of binary variables:

  - x[0 .. L*L-1]          : current grid, x[p] with p = r * L + c
  - x[L*L .. 2*L*L-1]      : next grid,    x[L*L + p]
  - x[2*L*L .. ]           : rule-case indicators, RULE_CASES per interior
                             cell, allocated by the rule poster

All indices are 0-based and row-major.
"""

from lifecsp.core.grid_types import cell_index


# Exclusive cases of the transition rule, in posting order
RULE_CASES = ("lt2", "eq2", "eq3", "gt3")


def num_grid_variables(length: int) -> int:
    """Number of cell variables in both grids: 2 * L * L."""
    return 2 * length * length


def current_index(r: int, c: int, length: int) -> int:
    """
    Variable index of current-grid cell (r, c).

    Example:
        >>> current_index(1, 2, 5)
        7
    """
    return cell_index(r, c, length)


def next_index(r: int, c: int, length: int) -> int:
    """
    Variable index of next-grid cell (r, c).

    Example:
        >>> next_index(1, 2, 5)
        32
    """
    return length * length + cell_index(r, c, length)

