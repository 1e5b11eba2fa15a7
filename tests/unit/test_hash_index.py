"""Unit tests for HashIndex."""

from __future__ import annotations

import pytest

from shortcut.domain.services import HashIndex
from shortcut.domain.value_objects import RowId
from shortcut.ports.inbound.index import EqualityIndex, MissingIndexEntryError, RangeIndex


class TestHashIndex:
    """Tests for HashIndex."""

    @pytest.fixture
    def index(self) -> HashIndex:
        return HashIndex()

    def test_lookup_missing_key_is_empty(self, index: HashIndex) -> None:
        assert list(index.lookup("a")) == []

    def test_lookup_unhashable_value_is_empty(self, index: HashIndex) -> None:
        index.insert_entry("a", RowId(0))
        assert list(index.lookup(["a"])) == []
        assert list(index.lookup({"a": 1})) == []

    def test_insert_and_remove(self, index: HashIndex) -> None:
        """Entries accumulate under a key and are removed one at a time."""
        index.insert_entry("a", RowId(0))
        assert list(index.lookup("a")) == [0]

        index.insert_entry("a", RowId(1))
        assert sorted(index.lookup("a")) == [0, 1]

        index.remove_entry("a", RowId(0))
        assert list(index.lookup("a")) == [1]

    def test_duplicates_are_kept(self, index: HashIndex) -> None:
        index.insert_entry("a", RowId(3))
        index.insert_entry("a", RowId(3))
        assert list(index.lookup("a")) == [3, 3]

        index.remove_entry("a", RowId(3))
        assert list(index.lookup("a")) == [3]

    def test_empty_bucket_drops_key(self, index: HashIndex) -> None:
        index.insert_entry("a", RowId(0))
        index.insert_entry("b", RowId(1))
        index.remove_entry("a", RowId(0))

        stats = index.stats()
        assert stats.distinct_keys == 1
        assert stats.entries == 1

    def test_estimate(self, index: HashIndex) -> None:
        """Estimate is entries divided by distinct keys."""
        assert index.estimate() == 0

        for row_id in range(4):
            index.insert_entry("a", RowId(row_id))
        index.insert_entry("b", RowId(4))
        index.insert_entry("c", RowId(5))
        assert index.estimate() == 2  # 6 entries / 3 keys

        index.remove_entry("b", RowId(4))
        index.remove_entry("c", RowId(5))
        assert index.estimate() == 4

    def test_remove_missing_key_raises(self, index: HashIndex) -> None:
        with pytest.raises(MissingIndexEntryError):
            index.remove_entry("a", RowId(0))

    def test_remove_missing_row_raises(self, index: HashIndex) -> None:
        index.insert_entry("a", RowId(0))
        with pytest.raises(MissingIndexEntryError):
            index.remove_entry("a", RowId(1))
        assert list(index.lookup("a")) == [0]

    def test_len(self, index: HashIndex) -> None:
        index.insert_entry("a", RowId(0))
        index.insert_entry("b", RowId(1))
        assert len(index) == 2

    def test_capabilities(self, index: HashIndex) -> None:
        """HashIndex is equality-capable only."""
        assert isinstance(index, EqualityIndex)
        assert not isinstance(index, RangeIndex)
