"""Hash index implementation.

A dict from column value to the list of row identifiers holding it. Offers
O(1) amortized lookup, insert and remove, but no ordering, so it only
satisfies the ``EqualityIndex`` port.
"""

from __future__ import annotations

from typing import Any, Iterator

from shortcut.domain.value_objects import RowId
from shortcut.ports.inbound.index import (
    IndexStats,
    MissingIndexEntryError,
    expected_rows_per_key,
)


class HashIndex:
    """An equality index backed by a dict of buckets."""

    def __init__(self) -> None:
        self._map: dict[Any, list[RowId]] = {}
        self._num_entries = 0

    def lookup(self, value: Any) -> Iterator[RowId]:
        """Yield the row identifiers indexed under ``value``.

        An unhashable ``value`` cannot be a key, so nothing is yielded.
        """
        try:
            bucket = self._map.get(value)
        except TypeError:
            return iter(())
        if bucket is None:
            return iter(())
        return iter(bucket)

    def insert_entry(self, value: Any, row_id: RowId) -> None:
        self._map.setdefault(value, []).append(row_id)
        self._num_entries += 1

    def remove_entry(self, value: Any, row_id: RowId) -> None:
        """Swap-remove one occurrence of ``row_id`` under ``value``.

        Raises:
            MissingIndexEntryError: If the pair is not in the index.
        """
        bucket = self._map.get(value)
        if bucket is None:
            raise MissingIndexEntryError(f"no entry for row {row_id} under {value!r}")
        try:
            i = bucket.index(row_id)
        except ValueError:
            raise MissingIndexEntryError(
                f"no entry for row {row_id} under {value!r}"
            ) from None

        bucket[i] = bucket[-1]
        bucket.pop()
        self._num_entries -= 1
        if not bucket:
            del self._map[value]

    def estimate(self) -> int:
        return expected_rows_per_key(self._num_entries, len(self._map))

    def stats(self) -> IndexStats:
        return IndexStats(
            entries=self._num_entries,
            distinct_keys=len(self._map),
            estimate=self.estimate(),
        )

    def __len__(self) -> int:
        return self._num_entries

    def __repr__(self) -> str:
        return f"HashIndex(entries={self._num_entries}, keys={len(self._map)})"
