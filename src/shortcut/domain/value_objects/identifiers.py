"""Core identifiers for the row store.

Row identifiers are the join key between the row table and every attached
index. They are assigned by the store at insert time, strictly increase,
and are never handed out twice, even after the row they named is deleted.
"""

from __future__ import annotations

from typing import NewType


RowId = NewType("RowId", int)
"""Identifier of a stored row. Monotonically increasing, never reused."""

FIRST_ROW_ID = RowId(0)
"""The identifier handed to the first row inserted into an empty store."""


def next_row_id(row_id: RowId) -> RowId:
    """Return the identifier that follows ``row_id``."""
    return RowId(row_id + 1)
