"""Tagged union over the index capability tiers.

The store keeps one ``Index`` per indexed column regardless of which
concrete implementation backs it. The capability tier is decided once, when
the index is wrapped; equality operations are forwarded to the wrapped
implementation and range scans are gated on the tag.
"""

from __future__ import annotations

from collections.abc import Sized
from typing import Any, Iterator

from shortcut.domain.services.btree_index import BTreeIndex
from shortcut.domain.services.hash_index import HashIndex
from shortcut.domain.value_objects import RowId
from shortcut.ports.inbound.index import (
    Bound,
    EqualityIndex,
    IndexCapabilityError,
    IndexKind,
    IndexStats,
    RangeIndex,
)


class Index:
    """An attached index of either capability tier.

    Example:
        >>> idx = Index.of(HashIndex())
        >>> idx.kind
        <IndexKind.EQUALITY: 'equality'>
    """

    __slots__ = ("_kind", "_impl")

    def __init__(self, kind: IndexKind, impl: EqualityIndex) -> None:
        if kind is IndexKind.RANGE and not isinstance(impl, RangeIndex):
            raise IndexCapabilityError(f"{type(impl).__name__} cannot perform range scans")
        self._kind = kind
        self._impl = impl

    @classmethod
    def equality(cls, impl: EqualityIndex) -> Index:
        return cls(IndexKind.EQUALITY, impl)

    @classmethod
    def range(cls, impl: RangeIndex) -> Index:
        return cls(IndexKind.RANGE, impl)

    @classmethod
    def of(cls, indexer: Any) -> Index:
        """Wrap a concrete index, classifying its capability tier.

        Raises:
            TypeError: If ``indexer`` does not implement the equality contract.
        """
        if isinstance(indexer, Index):
            return indexer
        if isinstance(indexer, HashIndex):
            return cls.equality(indexer)
        if isinstance(indexer, (BTreeIndex, RangeIndex)):
            return cls.range(indexer)
        if isinstance(indexer, EqualityIndex):
            return cls.equality(indexer)
        raise TypeError(f"{type(indexer).__name__} is not an index")

    @property
    def kind(self) -> IndexKind:
        return self._kind

    @property
    def implementation(self) -> EqualityIndex:
        return self._impl

    @property
    def supports_range(self) -> bool:
        return self._kind is IndexKind.RANGE

    def lookup(self, value: Any) -> Iterator[RowId]:
        return self._impl.lookup(value)

    def insert_entry(self, value: Any, row_id: RowId) -> None:
        self._impl.insert_entry(value, row_id)

    def remove_entry(self, value: Any, row_id: RowId) -> None:
        self._impl.remove_entry(value, row_id)

    def estimate(self) -> int:
        return self._impl.estimate()

    def between(self, lower: Bound, upper: Bound) -> Iterator[RowId]:
        """Range scan, available only on the RANGE variant.

        Raises:
            IndexCapabilityError: If the wrapped index is equality-only.
        """
        if self._kind is not IndexKind.RANGE:
            raise IndexCapabilityError(
                f"{type(self._impl).__name__} does not support range scans"
            )
        return self._impl.between(lower, upper)  # type: ignore[attr-defined]

    def stats(self) -> IndexStats:
        """Return the wrapped index's statistics.

        Implementations that do not report statistics get ``distinct_keys=0``.
        """
        if hasattr(self._impl, "stats"):
            return self._impl.stats()  # type: ignore[attr-defined]
        entries = len(self._impl) if isinstance(self._impl, Sized) else 0
        return IndexStats(entries=entries, distinct_keys=0, estimate=self._impl.estimate())

    def __len__(self) -> int:
        return self.stats().entries

    def __repr__(self) -> str:
        return f"Index.{self._kind.name}({self._impl!r})"
