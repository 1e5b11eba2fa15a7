"""Unit tests for domain value objects - identifiers."""

from __future__ import annotations

from shortcut.domain.value_objects import FIRST_ROW_ID, RowId, next_row_id


class TestRowId:
    """Tests for RowId type."""

    def test_creation(self) -> None:
        """RowId can be created from an integer."""
        row_id = RowId(42)
        assert row_id == 42

    def test_type_safety(self) -> None:
        """RowId is distinct from plain int for type checking."""
        row_id = RowId(1)
        # At runtime, RowId is just an int
        assert isinstance(row_id, int)

    def test_first_row_id(self) -> None:
        """The first identifier handed out is 0."""
        assert FIRST_ROW_ID == RowId(0)

    def test_next_row_id(self) -> None:
        """next_row_id strictly increases."""
        assert next_row_id(RowId(0)) == 1
        assert next_row_id(RowId(41)) == 42
