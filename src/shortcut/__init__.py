"""
Shortcut - embeddable in-memory row store

Rows of a fixed column count, stable row identifiers, pluggable secondary
indices (hash and B+Tree) and a cost-based planner that picks which index
answers a conjunctive equality query.
"""

__version__ = "0.1.0"

from shortcut.application import QueryPlan, ScanStrategy, Store
from shortcut.domain.entities import FixedRow, OwnedRow, SharedRow
from shortcut.domain.services import BTreeIndex, HashIndex, Index
from shortcut.domain.value_objects import Column, Comparison, Condition, Const, RowId
from shortcut.ports import (
    Bound,
    IndexCapabilityError,
    IndexKind,
    MissingIndexEntryError,
    RowShapeError,
)

__all__ = [
    "Store",
    "QueryPlan",
    "ScanStrategy",
    "FixedRow",
    "OwnedRow",
    "SharedRow",
    "BTreeIndex",
    "HashIndex",
    "Index",
    "Bound",
    "IndexKind",
    "Column",
    "Comparison",
    "Condition",
    "Const",
    "RowId",
    "IndexCapabilityError",
    "MissingIndexEntryError",
    "RowShapeError",
]
