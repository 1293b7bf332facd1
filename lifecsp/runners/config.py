"""
Run configuration for a multi-round Game of Life solve.

RunConfig gathers every caller-supplied parameter. validate() must pass
before any round model is built.
"""

from dataclasses import dataclass
from typing import Optional

from lifecsp.solver.branching import VALUE_SELECTIONS, VARIABLE_SELECTIONS, BranchingStrategy


class InvalidConfigurationError(ValueError):
    """Raised for parameters that make a run impossible (e.g. length 0)."""
    pass


@dataclass
class RunConfig:
    """
    Parameters of one run.

    Attributes:
        length: Board side length L (>= 1)
        rounds: Number of generations to compute (>= 0)
        time_limit: Optional CBC time limit per round, in seconds
        solver_msg: Show CBC output
        variable_selection: Branching variable order (see solver.branching)
        value_selection: Branching value preference (see solver.branching)
        verify: Compare every round with the reference simulation
    """
    length: int
    rounds: int
    time_limit: Optional[float] = None
    solver_msg: bool = False
    variable_selection: str = "max_range_max_value"
    value_selection: str = "max"
    verify: bool = False

    def validate(self) -> "RunConfig":
        """
        Check every parameter and return self.

        Raises:
            InvalidConfigurationError: On the first invalid parameter
        """
        if self.length < 1:
            raise InvalidConfigurationError(
                f"Board length must be a positive integer, got {self.length}"
            )
        if self.rounds < 0:
            raise InvalidConfigurationError(
                f"Number of rounds must be non-negative, got {self.rounds}"
            )
        if self.time_limit is not None and self.time_limit <= 0:
            raise InvalidConfigurationError(
                f"Time limit must be positive, got {self.time_limit}"
            )
        if self.variable_selection not in VARIABLE_SELECTIONS:
            raise InvalidConfigurationError(
                f"Unknown variable selection {self.variable_selection!r}, "
                f"expected one of {VARIABLE_SELECTIONS}"
            )
        if self.value_selection not in VALUE_SELECTIONS:
            raise InvalidConfigurationError(
                f"Unknown value selection {self.value_selection!r}, "
                f"expected one of {VALUE_SELECTIONS}"
            )
        return self

    @property
    def strategy(self) -> BranchingStrategy:
        return BranchingStrategy(self.variable_selection, self.value_selection)
