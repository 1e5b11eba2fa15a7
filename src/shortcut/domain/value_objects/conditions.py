"""Value expressions, comparisons and conditions.

A query against the store is a list of ``Condition`` objects that are
implicitly AND-ed together. Each condition picks one column of a row and
compares it against a value expression, which is either a constant or
another column of the same row.

Only conditions of the form ``column == Const(...)`` can be answered by an
index: a ``Column`` operand is not known until the row has been fetched.

Example:
    >>> cond = Condition.equal(0, "a")
    >>> cond.matches(["a", "x1"])
    True
    >>> Condition.same_as(1, 0).matches(["a", "b"])
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class Const:
    """A constant literal operand."""

    literal: Any

    def evaluate(self, row: Sequence[Any]) -> Any:
        return self.literal

    def __repr__(self) -> str:
        return f"Const({self.literal!r})"


@dataclass(frozen=True, slots=True)
class Column:
    """A reference to another column of the row being evaluated.

    Comparisons against a ``Column`` can be evaluated for any row, but can
    never be served by an index.
    """

    index: int

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"column must be non-negative, got {self.index}")

    def evaluate(self, row: Sequence[Any]) -> Any:
        return row[self.index]

    def __repr__(self) -> str:
        return f"Column({self.index})"


Value = Const | Column


class ComparisonOp(Enum):
    """Comparison operators understood by conditions."""

    EQUAL = "="


@dataclass(frozen=True, slots=True)
class Comparison:
    """A comparison of a row value against a value expression.

    Attributes:
        op: The comparison operator.
        operand: The right-hand side, evaluated against the same row.
    """

    op: ComparisonOp
    operand: Value

    @classmethod
    def equal(cls, operand: Value) -> Comparison:
        return cls(op=ComparisonOp.EQUAL, operand=operand)

    @property
    def is_index_eligible(self) -> bool:
        """True if an equality index can produce candidates for this comparison."""
        return self.op is ComparisonOp.EQUAL and isinstance(self.operand, Const)

    @property
    def constant(self) -> Any:
        """The literal this comparison looks up in an index.

        Raises:
            ValueError: If the comparison is not equality against a constant.
        """
        if not self.is_index_eligible:
            raise ValueError(f"{self!r} cannot be answered by an index")
        assert isinstance(self.operand, Const)
        return self.operand.literal

    def matches(self, value: Any, row: Sequence[Any]) -> bool:
        """Return True if ``value`` compares successfully against the operand.

        Args:
            value: The left-hand value, usually a column of ``row``.
            row: The row the operand is evaluated against.
        """
        if self.op is ComparisonOp.EQUAL:
            return bool(value == self.operand.evaluate(row))
        raise ValueError(f"Unsupported comparison operator: {self.op}")

    def __repr__(self) -> str:
        return f"{self.op.value} {self.operand!r}"


@dataclass(frozen=True, slots=True)
class Condition:
    """A single column-scoped comparison.

    Attributes:
        column: The column of the row used as the left-hand value.
        cmp: The comparison applied to that value.
    """

    column: int
    cmp: Comparison

    def __post_init__(self) -> None:
        if self.column < 0:
            raise ValueError(f"column must be non-negative, got {self.column}")

    @classmethod
    def equal(cls, column: int, value: Any) -> Condition:
        """Build ``row[column] == value``.

        ``value`` may already be a ``Const`` or ``Column``; any other object is
        wrapped in a ``Const``.
        """
        operand = value if isinstance(value, (Const, Column)) else Const(value)
        return cls(column=column, cmp=Comparison.equal(operand))

    @classmethod
    def same_as(cls, column: int, other_column: int) -> Condition:
        """Build ``row[column] == row[other_column]``."""
        return cls(column=column, cmp=Comparison.equal(Column(other_column)))

    def matches(self, row: Sequence[Any]) -> bool:
        """Return True if this condition holds for ``row``."""
        return self.cmp.matches(row[self.column], row)

    def __repr__(self) -> str:
        return f"Condition(col{self.column} {self.cmp!r})"
