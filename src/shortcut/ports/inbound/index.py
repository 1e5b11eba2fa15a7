"""Index port for secondary indices on a single column.

This inbound port defines the two capability tiers an index can offer and
the value objects shared by every implementation.

Key responsibilities:
- Map a column value to the identifiers of the rows holding it
- Keep several row identifiers under one key (values are not unique)
- Report a cheap selectivity estimate used by the query planner
- Optionally scan keys in order between two bounds

An index stores the indexed value and the row identifier only,
never the row itself. Removing a row from the store does not remove its
index entries; the store must call ``remove_entry`` for that.

References:
    - Bayer & McCreight, "B+Trees" (1972)
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Protocol, runtime_checkable

from shortcut.domain.value_objects import RowId


class MissingIndexEntryError(LookupError):
    """Raised when removing a (value, row id) pair the index does not hold.

    Callers may only remove entries they previously inserted, so this
    always indicates a bug in the caller.
    """


class IndexCapabilityError(TypeError):
    """Raised when a range operation is requested from an equality-only index."""


class IndexKind(Enum):
    """Capability tier of an attached index."""

    EQUALITY = "equality"
    RANGE = "range"


class BoundKind(Enum):
    """How a range endpoint treats its value."""

    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True, slots=True)
class Bound:
    """One endpoint of a range scan.

    Example:
        >>> list(index.between(Bound.included("a"), Bound.excluded("c")))
    """

    kind: BoundKind
    value: Any = None

    @classmethod
    def included(cls, value: Any) -> Bound:
        return cls(BoundKind.INCLUDED, value)

    @classmethod
    def excluded(cls, value: Any) -> Bound:
        return cls(BoundKind.EXCLUDED, value)

    @classmethod
    def unbounded(cls) -> Bound:
        return cls(BoundKind.UNBOUNDED)

    @property
    def is_unbounded(self) -> bool:
        return self.kind is BoundKind.UNBOUNDED

    def admits_from_below(self, key: Any) -> bool:
        """True if ``key`` is not below this bound used as a lower endpoint."""
        if self.kind is BoundKind.UNBOUNDED:
            return True
        if self.kind is BoundKind.INCLUDED:
            return key >= self.value
        return key > self.value

    def admits_from_above(self, key: Any) -> bool:
        """True if ``key`` is not above this bound used as an upper endpoint."""
        if self.kind is BoundKind.UNBOUNDED:
            return True
        if self.kind is BoundKind.INCLUDED:
            return key <= self.value
        return key < self.value


@dataclass(frozen=True)
class IndexStats:
    """Statistics for index monitoring."""

    entries: int  # Total (value, row id) pairs
    distinct_keys: int
    estimate: int  # Expected rows per key


def expected_rows_per_key(entries: int, distinct_keys: int) -> int:
    """Entries divided by distinct keys, or 0 for an empty index."""
    if distinct_keys == 0:
        return 0
    return entries // distinct_keys


@runtime_checkable
class EqualityIndex(Protocol):
    """Protocol for an index that performs efficient equality lookups."""

    @abstractmethod
    def lookup(self, value: Any) -> Iterator[RowId]:
        """Yield the identifiers of all rows indexed under ``value``.

        Yields nothing if the value is absent, including a value the index
        cannot hash or order against its keys.
        """
        ...

    @abstractmethod
    def insert_entry(self, value: Any, row_id: RowId) -> None:
        """Add one occurrence of ``row_id`` under ``value``.

        Entries are never deduplicated.
        """
        ...

    @abstractmethod
    def remove_entry(self, value: Any, row_id: RowId) -> None:
        """Remove exactly one occurrence of ``row_id`` under ``value``.

        The key is dropped once no row identifiers remain under it.

        Raises:
            MissingIndexEntryError: If the pair is not present.
        """
        ...

    @abstractmethod
    def estimate(self) -> int:
        """Return the expected number of rows per distinct key.

        Called once per candidate index per query, so it must not scan.
        """
        ...


@runtime_checkable
class RangeIndex(EqualityIndex, Protocol):
    """Protocol for an index that also performs ordered range scans."""

    @abstractmethod
    def between(self, lower: Bound, upper: Bound) -> Iterator[RowId]:
        """Yield row identifiers whose key lies between the bounds, ordered by key."""
        ...
