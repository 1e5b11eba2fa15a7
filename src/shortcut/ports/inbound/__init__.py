"""Inbound ports - API contracts for the row store.

Inbound ports define the interfaces that the embedding program and the
store itself use: the index capability tiers and the store contract.
"""

from shortcut.ports.inbound.index import (
    Bound,
    BoundKind,
    EqualityIndex,
    IndexCapabilityError,
    IndexKind,
    IndexStats,
    MissingIndexEntryError,
    RangeIndex,
    expected_rows_per_key,
)
from shortcut.ports.inbound.store import Row, RowPredicate, RowShapeError, RowStore

__all__ = [
    # Index
    "Bound",
    "BoundKind",
    "EqualityIndex",
    "IndexCapabilityError",
    "IndexKind",
    "IndexStats",
    "MissingIndexEntryError",
    "RangeIndex",
    "expected_rows_per_key",
    # Store
    "Row",
    "RowPredicate",
    "RowShapeError",
    "RowStore",
]
