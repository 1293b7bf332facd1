"""
Activation set: the cells of the current grid forced alive at the start of
a round, by external input (round 1) or by the previous round's solution.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List

from lifecsp.core.grid_types import Cell, cell_index, index_to_cell


@dataclass
class ActivationSet:
    """
    Flattened indices (row * L + col) of activated current-grid cells.

    Insertion order is kept; recording a cell twice is a no-op.
    """
    length: int
    _indices: Dict[int, None] = field(default_factory=dict)

    def record(self, row: int, col: int) -> int:
        """Record (row, col) and return its flattened index."""
        idx = cell_index(row, col, self.length)
        self._indices[idx] = None
        return idx

    def __contains__(self, idx: int) -> bool:
        return idx in self._indices

    def __iter__(self) -> Iterator[int]:
        return iter(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def cells(self) -> List[Cell]:
        return [index_to_cell(idx, self.length) for idx in self._indices]

    def copy(self) -> "ActivationSet":
        return ActivationSet(self.length, dict(self._indices))
