"""Unit tests for the B+Tree ordered index."""

from __future__ import annotations

import pytest

from shortcut.domain.services import BTreeIndex
from shortcut.domain.value_objects import RowId
from shortcut.ports.inbound.index import (
    Bound,
    EqualityIndex,
    MissingIndexEntryError,
    RangeIndex,
)


class TestBTreeIndex:
    """Tests for BTreeIndex equality operations."""

    @pytest.fixture
    def index(self) -> BTreeIndex:
        """Create a small-fanout B+Tree so splits happen early."""
        return BTreeIndex(max_keys=4)

    def test_index_creation(self, index: BTreeIndex) -> None:
        assert index.height == 1
        assert len(index) == 0
        assert index.estimate() == 0

    def test_insert_and_remove(self, index: BTreeIndex) -> None:
        assert list(index.lookup("a")) == []
        index.insert_entry("a", RowId(0))
        assert list(index.lookup("a")) == [0]
        index.insert_entry("a", RowId(1))
        assert sorted(index.lookup("a")) == [0, 1]
        index.remove_entry("a", RowId(0))
        assert list(index.lookup("a")) == [1]

    def test_lookup_unorderable_value_is_empty(self, index: BTreeIndex) -> None:
        """Values that cannot be compared with the stored keys are absent."""
        assert list(index.lookup(["a"])) == []

        for i, value in enumerate(["a", "b", "c", "d", "e", "f"]):
            index.insert_entry(value, RowId(i))
        assert index.height > 1

        assert list(index.lookup(["a"])) == []
        assert list(index.lookup(5)) == []
        assert list(index.lookup(None)) == []

    def test_empty_bucket_drops_key(self, index: BTreeIndex) -> None:
        index.insert_entry("a", RowId(0))
        index.insert_entry("b", RowId(1))
        index.remove_entry("a", RowId(0))

        assert list(index.keys()) == ["b"]
        assert index.stats().distinct_keys == 1
        assert index.estimate() == 1

    def test_estimate(self, index: BTreeIndex) -> None:
        for row_id in range(6):
            index.insert_entry(row_id % 2, RowId(row_id))
        assert index.estimate() == 3  # 6 entries / 2 keys

    def test_remove_missing_raises(self, index: BTreeIndex) -> None:
        index.insert_entry("a", RowId(0))
        with pytest.raises(MissingIndexEntryError):
            index.remove_entry("a", RowId(1))
        with pytest.raises(MissingIndexEntryError):
            index.remove_entry("z", RowId(0))
        assert len(index) == 1

    def test_invalid_max_keys(self) -> None:
        with pytest.raises(ValueError):
            BTreeIndex(max_keys=2)

    def test_many_insertions_split(self, index: BTreeIndex) -> None:
        """Index handles many insertions with multiple splits."""
        n = 200
        for i in range(n):
            index.insert_entry(i, RowId(i))

        assert index.height > 1
        for i in range(n):
            assert list(index.lookup(i)) == [i]
        assert list(index.keys()) == list(range(n))

    def test_reverse_order_insertions(self, index: BTreeIndex) -> None:
        n = 50
        for i in range(n - 1, -1, -1):
            index.insert_entry(i, RowId(i))

        assert list(index.keys()) == list(range(n))
        assert len(index) == n

    def test_remove_everything_after_splits(self, index: BTreeIndex) -> None:
        n = 40
        for i in range(n):
            index.insert_entry(i, RowId(i))
        for i in range(n):
            index.remove_entry(i, RowId(i))

        assert len(index) == 0
        assert index.estimate() == 0
        assert list(index.keys()) == []
        assert list(index.between(Bound.unbounded(), Bound.unbounded())) == []

        # Still usable after being emptied
        index.insert_entry(7, RowId(100))
        assert list(index.lookup(7)) == [100]

    def test_capabilities(self, index: BTreeIndex) -> None:
        assert isinstance(index, EqualityIndex)
        assert isinstance(index, RangeIndex)


class TestBTreeIndexRange:
    """Tests for BTreeIndex.between."""

    @pytest.fixture
    def index(self) -> BTreeIndex:
        index = BTreeIndex(max_keys=3)
        for i in range(10):
            index.insert_entry(i * 10, RowId(i))
        return index

    def test_range_follows_inserts_and_removes(self) -> None:
        index = BTreeIndex()
        inclusive = (Bound.included("a"), Bound.included("b"))

        assert list(index.between(*inclusive)) == []
        index.insert_entry("a", RowId(0))
        assert list(index.between(*inclusive)) == [0]
        index.insert_entry("b", RowId(1))
        assert list(index.between(*inclusive)) == [0, 1]
        index.remove_entry("b", RowId(1))
        assert list(index.between(*inclusive)) == [0]

    def test_inclusive_bounds(self, index: BTreeIndex) -> None:
        rows = list(index.between(Bound.included(20), Bound.included(60)))
        assert rows == [2, 3, 4, 5, 6]

    def test_exclusive_bounds(self, index: BTreeIndex) -> None:
        rows = list(index.between(Bound.excluded(10), Bound.excluded(30)))
        assert rows == [2]

    def test_unbounded(self, index: BTreeIndex) -> None:
        assert list(index.between(Bound.unbounded(), Bound.unbounded())) == list(range(10))
        assert list(index.between(Bound.unbounded(), Bound.excluded(30))) == [0, 1, 2]
        assert list(index.between(Bound.included(75), Bound.unbounded())) == [8, 9]

    def test_bounds_between_keys(self, index: BTreeIndex) -> None:
        rows = list(index.between(Bound.included(15), Bound.included(45)))
        assert rows == [2, 3, 4]

    def test_empty_range(self, index: BTreeIndex) -> None:
        assert list(index.between(Bound.included(60), Bound.included(20))) == []
        assert list(index.between(Bound.excluded(20), Bound.excluded(30))) == []

    def test_flattens_buckets_in_key_order(self) -> None:
        index = BTreeIndex(max_keys=3)
        index.insert_entry("b", RowId(0))
        index.insert_entry("a", RowId(1))
        index.insert_entry("b", RowId(2))
        index.insert_entry("c", RowId(3))

        rows = list(index.between(Bound.included("a"), Bound.included("b")))
        assert rows == [1, 0, 2]

    def test_varchar_range(self) -> None:
        index = BTreeIndex(max_keys=3)
        names = ["Alice", "Bob", "Charlie", "David", "Eve"]
        for i, name in enumerate(names):
            index.insert_entry(name, RowId(i))

        rows = list(index.between(Bound.included("Bob"), Bound.included("David")))
        assert rows == [1, 2, 3]


class TestBound:
    """Tests for Bound."""

    def test_lower_bound(self) -> None:
        assert Bound.included(5).admits_from_below(5)
        assert not Bound.excluded(5).admits_from_below(5)
        assert Bound.excluded(5).admits_from_below(6)
        assert Bound.unbounded().admits_from_below(-(10**9))

    def test_upper_bound(self) -> None:
        assert Bound.included(5).admits_from_above(5)
        assert not Bound.excluded(5).admits_from_above(5)
        assert Bound.excluded(5).admits_from_above(4)
        assert Bound.unbounded().admits_from_above(10**9)
