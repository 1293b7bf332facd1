"""
Branching configuration for the round search.

Variable selection orders the variables the solver branches on; value
selection decides which value is tried (preferred) first:

  - "max_range_max_value": unassigned variable with the largest remaining
    domain range first, ties broken by the largest permissible value, then
    by index. The current grid is ordered before the next grid, which is
    ordered before the rule-case indicators.
  - "input_order": plain index order inside each group.

  - "max": prefer 1 (maximize the cell sum)
  - "min": prefer 0 (minimize the cell sum)
  - "none": feasibility only
"""

from dataclasses import dataclass
from typing import List

import numpy as np


VARIABLE_SELECTIONS = ("max_range_max_value", "input_order")
VALUE_SELECTIONS = ("max", "min", "none")


@dataclass(frozen=True)
class BranchingStrategy:
    variable_selection: str = "max_range_max_value"
    value_selection: str = "max"


def branch_order(lo: np.ndarray, hi: np.ndarray, length: int, strategy: BranchingStrategy) -> List[int]:
    """
    Order all variables of x for branching.

    Args:
        lo: Lower bound of every variable after propagation
        hi: Upper bound of every variable after propagation
        length: Board side length L (grids occupy x[0 .. 2*L*L-1])
        strategy: Branching configuration

    Returns:
        Permutation of range(len(lo)): current grid, next grid, indicators

    Raises:
        ValueError: If the variable selection is unknown
    """
    n_cells = length * length
    groups = [
        range(0, n_cells),
        range(n_cells, 2 * n_cells),
        range(2 * n_cells, len(lo)),
    ]

    if strategy.variable_selection == "input_order":
        return [i for group in groups for i in group]

    if strategy.variable_selection != "max_range_max_value":
        raise ValueError(f"Unknown variable selection: {strategy.variable_selection}")

    order: List[int] = []
    for group in groups:
        order.extend(sorted(group, key=lambda i: (-(hi[i] - lo[i]), -hi[i], i)))
    return order
