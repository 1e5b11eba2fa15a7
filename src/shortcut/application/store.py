"""In-memory row store with secondary indices.

The store owns every row, keyed by a row identifier that strictly increases
and is never reused, and at most one index per column. Queries are
conjunctions of ``Condition`` objects answered in two phases:

    1. Planning: ``plan_query`` picks the attached index with the lowest
       estimate among equality-against-constant conditions, or a full scan.
    2. Verification: every candidate row is re-checked against *all*
       conditions, so indices only ever narrow the search.

Index invariant:
    For every stored row and every indexed column, the column's index holds
    the pair (row[column], row_id) exactly once. Insert, delete and index
    attachment all preserve it before returning.

Usage:
    from shortcut import Condition, HashIndex, Store

    store = Store(columns=2)
    store.index(0, HashIndex())
    store.insert(["a", "x1"])
    rows = list(store.find([Condition.equal(0, "a")]))

Thread Safety:
    None. The store assumes a single owner. Iterators returned by ``find``
    read the live store and must not be used after it is mutated.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Sequence

from shortcut.application.planner import QueryPlan, plan_query
from shortcut.domain.entities import as_row
from shortcut.domain.services import Index
from shortcut.domain.value_objects import FIRST_ROW_ID, Condition, RowId, next_row_id
from shortcut.infrastructure.metrics import MetricsRegistry
from shortcut.ports.inbound.store import Row, RowPredicate, RowShapeError

logger = logging.getLogger(__name__)


def _always(row: Row) -> bool:
    return True


class Store:
    """An embeddable, column-typed row store.

    Implements the ``RowStore`` port.

    Attributes:
        columns: Number of values in every row.
    """

    def __init__(self, columns: int, metrics: MetricsRegistry | None = None) -> None:
        """Create an empty store.

        Args:
            columns: Fixed column count of every row.
            metrics: Optional Prometheus metrics to update.
        """
        if columns < 0:
            raise ValueError(f"columns must be non-negative, got {columns}")
        self._columns = columns
        self._rows: dict[RowId, Row] = {}
        self._indices: dict[int, Index] = {}
        self._next_id = FIRST_ROW_ID
        self._metrics = metrics

    @property
    def columns(self) -> int:
        return self._columns

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def get(self, row_id: RowId) -> Row | None:
        """Return the row stored under ``row_id``, or None if absent."""
        return self._rows.get(row_id)

    def row_ids(self) -> Iterator[RowId]:
        """Yield the identifiers of stored rows in ascending order."""
        return iter(self._rows)

    def indexed_columns(self) -> list[int]:
        return sorted(self._indices)

    def index_on(self, column: int) -> Index | None:
        """Return the index attached to ``column``, if any."""
        return self._indices.get(column)

    # --- mutation ---------------------------------------------------------

    def insert(self, row: Row | list[Any] | tuple[Any, ...]) -> RowId:
        """Store a row and add it to every attached index.

        Args:
            row: A row adapter, list or tuple with exactly ``columns`` values.

        Returns:
            The identifier assigned to the row.

        Raises:
            RowShapeError: If the row has the wrong number of columns.
        """
        stored = as_row(row)
        if stored.columns() != self._columns:
            raise RowShapeError(
                f"row has {stored.columns()} columns, store expects {self._columns}"
            )

        row_id = self._next_id
        indexed: list[tuple[Index, Any]] = []
        try:
            for column, index in self._indices.items():
                value = stored[column]
                index.insert_entry(value, row_id)
                indexed.append((index, value))
        except Exception:
            # Leave no entry behind for a row that is not stored.
            for index, value in indexed:
                index.remove_entry(value, row_id)
            raise

        self._rows[row_id] = stored
        self._next_id = next_row_id(row_id)

        if self._metrics is not None:
            self._metrics.rows_inserted_total.inc()
            self._metrics.rows_stored.set(len(self._rows))
        return row_id

    def index(self, column: int, indexer: Any) -> None:
        """Attach an index to ``column`` and backfill it from stored rows.

        Rows are indexed in ascending row identifier order. An index already
        attached to the column is discarded. Cost is proportional to the
        number of stored rows.

        Args:
            column: The column to index.
            indexer: A ``HashIndex``, ``BTreeIndex``, ``Index``, or any
                object implementing the equality index contract.

        Raises:
            RowShapeError: If ``column`` is outside the row shape.
            TypeError: If ``indexer`` is not an index.
            ValueError: If ``indexer`` already holds entries or is already
                attached to this store.
        """
        if not 0 <= column < self._columns:
            raise RowShapeError(f"column {column} out of range for {self._columns} columns")

        index = Index.of(indexer)
        for attached_column, attached in self._indices.items():
            if attached.implementation is index.implementation:
                raise ValueError(f"index is already attached to column {attached_column}")
        if len(index) > 0:
            raise ValueError(f"index must be empty to be attached, holds {len(index)} entries")

        for row_id, row in self._rows.items():
            index.insert_entry(row[column], row_id)

        replaced = self._indices.get(column)
        self._indices[column] = index
        logger.info(
            f"Attached {index.kind.value} index on column {column} "
            f"(backfilled {len(self._rows)} rows, replaced={replaced is not None})"
        )

        if self._metrics is not None:
            self._metrics.indexes_attached_total.labels(kind=index.kind.value).inc()
            self._metrics.index_backfill_entries_total.inc(len(self._rows))

    def delete(self, conditions: Iterable[Condition]) -> int:
        """Delete every row matching all ``conditions``.

        Returns:
            The number of rows removed.
        """
        return self.delete_filter(conditions, _always)

    def delete_filter(self, conditions: Iterable[Condition], predicate: RowPredicate) -> int:
        """Delete every row matching all ``conditions`` and ``predicate``.

        Matching rows are collected before anything is mutated. Each removed
        row is then taken out of every attached index using the values of
        the removed row itself.

        Returns:
            The number of rows removed.
        """
        conditions = tuple(conditions)
        plan = plan_query(conditions, self._indices)
        doomed = [
            (row_id, row)
            for row_id, row in self._matching(plan, conditions)
            if predicate(row)
        ]

        for row_id, row in doomed:
            del self._rows[row_id]
            for column, index in self._indices.items():
                index.remove_entry(row[column], row_id)

        if doomed:
            logger.debug(f"Deleted {len(doomed)} rows via {plan.strategy.value}")
        if self._metrics is not None:
            self._metrics.rows_deleted_total.inc(len(doomed))
            self._metrics.rows_stored.set(len(self._rows))
        return len(doomed)

    # --- queries ----------------------------------------------------------

    def explain(self, conditions: Iterable[Condition] = ()) -> QueryPlan:
        """Return the plan ``find`` would use for ``conditions``."""
        return plan_query(tuple(conditions), self._indices)

    def find(self, conditions: Iterable[Condition] = ()) -> Iterator[Row]:
        """Lazily yield every row matching all ``conditions``.

        With no conditions every stored row is yielded. The iterator is
        single-pass and reads the live store.
        """
        return (row for _, row in self.find_with_ids(conditions))

    def find_with_ids(self, conditions: Iterable[Condition] = ()) -> Iterator[tuple[RowId, Row]]:
        """Like ``find``, but yields ``(row_id, row)`` pairs."""
        conditions = tuple(conditions)
        plan = plan_query(conditions, self._indices)
        return self._matching(plan, conditions)

    def _candidates(self, plan: QueryPlan) -> Iterator[RowId]:
        if plan.uses_index:
            assert plan.index is not None
            return plan.index.lookup(plan.key)
        return iter(self._rows)

    def _matching(
        self,
        plan: QueryPlan,
        conditions: Sequence[Condition],
    ) -> Iterator[tuple[RowId, Row]]:
        if self._metrics is not None:
            self._metrics.queries_total.labels(strategy=plan.strategy.value).inc()

        examined = 0
        try:
            for row_id in self._candidates(plan):
                row = self._rows[row_id]
                examined += 1
                if all(condition.matches(row) for condition in conditions):
                    yield row_id, row
        finally:
            if self._metrics is not None:
                self._metrics.candidate_rows_total.inc(examined)

    def __repr__(self) -> str:
        return (
            f"Store(columns={self._columns}, rows={len(self._rows)}, "
            f"indexed={self.indexed_columns()})"
        )
