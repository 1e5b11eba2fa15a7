"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to embedding programs (RowStore, indices)

Adapters and domain services implement these ports with concrete functionality.
"""

from shortcut.ports.inbound import (
    Bound,
    BoundKind,
    EqualityIndex,
    IndexCapabilityError,
    IndexKind,
    IndexStats,
    MissingIndexEntryError,
    RangeIndex,
    Row,
    RowPredicate,
    RowShapeError,
    RowStore,
)

__all__ = [
    "Bound",
    "BoundKind",
    "EqualityIndex",
    "IndexCapabilityError",
    "IndexKind",
    "IndexStats",
    "MissingIndexEntryError",
    "RangeIndex",
    "Row",
    "RowPredicate",
    "RowShapeError",
    "RowStore",
]
