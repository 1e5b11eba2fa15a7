"""Row store port.

This inbound port defines the contract the embedding program uses to hold
rows and query them, plus the minimal capability a row representation must
offer to be stored.

Key responsibilities:
- Assign monotonically increasing row identifiers on insert
- Keep every attached index consistent with the rows present
- Answer conjunctive equality queries, using an index when one helps

Caller contract:
    The store is not internally synchronized. A ``find`` iterator borrows the
    store's current state and must not be consulted after the store has been
    mutated; mutation from several threads at once must be prevented by the
    caller.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Iterable, Iterator, Protocol, runtime_checkable

from shortcut.domain.value_objects import Condition, RowId


class RowShapeError(AssertionError):
    """A row does not have the column count the store was created with.

    This is a programmer error protecting the table shape, not a data error.
    It derives from ``AssertionError`` and must not be caught and retried.
    """


@runtime_checkable
class Row(Protocol):
    """Minimal capability of a stored row.

    Column access is bounds-checked: out-of-range columns raise IndexError.
    """

    def __getitem__(self, column: int) -> Any:
        ...

    def columns(self) -> int:
        """Return the number of columns in this row."""
        ...


RowPredicate = Callable[[Row], bool]


class RowStore(Protocol):
    """Protocol for an embeddable row store with secondary indices."""

    @property
    @abstractmethod
    def columns(self) -> int:
        """Return the fixed column count of every row."""
        ...

    @abstractmethod
    def insert(self, row: Row | list[Any] | tuple[Any, ...]) -> RowId:
        """Store a row and index it in every attached index.

        Args:
            row: The row to store; must have exactly ``columns`` values.

        Returns:
            The identifier assigned to the row.

        Raises:
            RowShapeError: If the row has the wrong number of columns.
        """
        ...

    @abstractmethod
    def index(self, column: int, indexer: Any) -> None:
        """Attach an index to ``column``, backfilling it from stored rows.

        Any index previously attached to the column is discarded.
        """
        ...

    @abstractmethod
    def find(self, conditions: Iterable[Condition] = ()) -> Iterator[Row]:
        """Lazily yield every row matching all ``conditions``."""
        ...

    @abstractmethod
    def delete(self, conditions: Iterable[Condition]) -> int:
        """Delete every row matching all ``conditions``.

        Returns:
            The number of rows removed.
        """
        ...

    @abstractmethod
    def delete_filter(
        self,
        conditions: Iterable[Condition],
        predicate: RowPredicate,
    ) -> int:
        """Delete every row matching all ``conditions`` and ``predicate``.

        Returns:
            The number of rows removed.
        """
        ...
