"""Value objects for the row store domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Identifiers:
        - RowId: Type-safe row identifier
        - FIRST_ROW_ID: Identifier of the first inserted row
        - next_row_id: Successor of a row identifier

    Conditions:
        - Const, Column, Value: Value expressions
        - ComparisonOp, Comparison: Comparisons against a value expression
        - Condition: A column-scoped comparison
"""

from shortcut.domain.value_objects.conditions import (
    Column,
    Comparison,
    ComparisonOp,
    Condition,
    Const,
    Value,
)
from shortcut.domain.value_objects.identifiers import FIRST_ROW_ID, RowId, next_row_id

__all__ = [
    # Identifiers
    "RowId",
    "FIRST_ROW_ID",
    "next_row_id",
    # Conditions
    "Const",
    "Column",
    "Value",
    "ComparisonOp",
    "Comparison",
    "Condition",
]
