"""
Linear constraint builder for the constraint system.

This module collects linear relational constraints over the binary variable
vector x (both grids plus auxiliary indicators):

    sum_i coeffs[i] * x[indices[i]]  (==, <=, >=)  rhs

It is the generic constraint plumbing used by the board model and the rule
poster. No solver logic or Game of Life rules here.
"""

from dataclasses import dataclass, field
from typing import List, Literal


Sense = Literal["==", "<=", ">="]
SENSES = ("==", "<=", ">=")


@dataclass
class LinearConstraint:
    """
    A single linear constraint over the x vector:

        sum_i coeffs[i] * x[indices[i]]  sense  rhs

    Attributes:
        indices: Indices into x
        coeffs: Coefficients (same length as indices)
        sense: One of "==", "<=", ">="
        rhs: Right-hand side value
        tag: Category used for diagnostics ("border", "closure", ...)

    Example:
        # x[5] - x[30] = 0 (cell 5 of current equals cell 5 of next)
        LinearConstraint(indices=[5, 30], coeffs=[1, -1], sense="==", rhs=0)
    """
    indices: List[int]
    coeffs: List[int]
    sense: Sense
    rhs: int
    tag: str = ""

    def is_unary_equality(self) -> bool:
        """True for `a * x[i] == rhs`, the constraints unary propagation fixes."""
        return self.sense == "==" and len(self.indices) == 1


@dataclass
class ConstraintBuilder:
    """
    Collects linear constraints and allocates auxiliary variables.

    Attributes:
        num_variables: Size of the x vector so far (grid cells + auxiliaries)
        constraints: Posted constraints, in posting order
    """
    num_variables: int
    constraints: List[LinearConstraint] = field(default_factory=list)

    def add(self, indices: List[int], coeffs: List[int], sense: Sense, rhs: int, tag: str = "") -> None:
        """
        Add a generic linear constraint.

        Raises:
            AssertionError: If indices and coeffs differ in length, the sense
                is unknown, or an index is outside the x vector
        """
        assert len(indices) == len(coeffs), \
            f"indices and coeffs must have same length, got {len(indices)} != {len(coeffs)}"
        assert sense in SENSES, f"Unknown sense {sense!r}"
        assert all(0 <= i < self.num_variables for i in indices), \
            f"Constraint references a variable outside 0..{self.num_variables - 1}: {indices}"

        self.constraints.append(
            LinearConstraint(indices=list(indices), coeffs=list(coeffs), sense=sense, rhs=rhs, tag=tag)
        )

    def add_eq(self, indices: List[int], coeffs: List[int], rhs: int, tag: str = "") -> None:
        self.add(indices, coeffs, "==", rhs, tag)

    def add_le(self, indices: List[int], coeffs: List[int], rhs: int, tag: str = "") -> None:
        self.add(indices, coeffs, "<=", rhs, tag)

    def add_ge(self, indices: List[int], coeffs: List[int], rhs: int, tag: str = "") -> None:
        self.add(indices, coeffs, ">=", rhs, tag)

    def fix_value(self, x_idx: int, value: int, tag: str = "") -> None:
        """
        Enforce x[x_idx] == value.

        Example:
            # Current cell 7 is alive
            builder.fix_value(7, 1)
        """
        self.add_eq([x_idx], [1], value, tag)

    def new_variables(self, count: int) -> List[int]:
        """Allocate `count` auxiliary binary variables at the end of x."""
        start = self.num_variables
        self.num_variables += count
        return list(range(start, start + count))

    def counts_by_tag(self):
        """Number of posted constraints per tag."""
        counts = {}
        for lc in self.constraints:
            counts[lc.tag] = counts.get(lc.tag, 0) + 1
        return counts

    def copy(self) -> "ConstraintBuilder":
        """Independent copy (constraints are copied, not shared)."""
        return ConstraintBuilder(
            num_variables=self.num_variables,
            constraints=[
                LinearConstraint(list(lc.indices), list(lc.coeffs), lc.sense, lc.rhs, lc.tag)
                for lc in self.constraints
            ],
        )
