"""Cost-based index selection for store queries.

The planner looks at the conditions of a query and the indices attached to
the store and decides where candidate row identifiers come from:

    - INDEX_LOOKUP: an equality lookup on the attached index with the lowest
      estimate, among conditions of the form ``column == Const(...)``
    - FULL_SCAN: every row identifier in ascending order

Whatever the source, candidates are a superset of the answer: the store
re-checks every condition against every candidate row.

Only equality-against-constant conditions are index-eligible, even when a
range-capable index is attached.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

from shortcut.domain.services import Index
from shortcut.domain.value_objects import Condition


class ScanStrategy(Enum):
    """Source of candidate row identifiers."""

    INDEX_LOOKUP = "index_lookup"
    FULL_SCAN = "full_scan"


@dataclass(frozen=True)
class QueryPlan:
    """The planner's decision for one query.

    Attributes:
        strategy: Where candidate row identifiers come from.
        condition: The condition that drives the index lookup, if any.
        index: The index used for the lookup, if any.
        estimate: The chosen index's expected rows per key (None for a scan).
    """

    strategy: ScanStrategy
    condition: Condition | None = None
    index: Index | None = None
    estimate: int | None = None

    @property
    def column(self) -> int | None:
        return self.condition.column if self.condition is not None else None

    @property
    def key(self) -> Any:
        """The constant looked up in the index, or None for a full scan."""
        return self.condition.cmp.constant if self.condition is not None else None

    @property
    def uses_index(self) -> bool:
        return self.strategy is ScanStrategy.INDEX_LOOKUP


FULL_SCAN_PLAN = QueryPlan(strategy=ScanStrategy.FULL_SCAN)


def plan_query(conditions: Sequence[Condition], indices: Mapping[int, Index]) -> QueryPlan:
    """Pick the cheapest usable index for ``conditions``.

    Ties on estimate go to the first eligible condition.

    Args:
        conditions: The conjunctive conditions of the query.
        indices: Attached indices keyed by column.

    Returns:
        An INDEX_LOOKUP plan, or FULL_SCAN if no condition can use an index.
    """
    best: QueryPlan | None = None
    best_estimate = 0
    for condition in conditions:
        if not condition.cmp.is_index_eligible:
            continue
        index = indices.get(condition.column)
        if index is None:
            continue

        estimate = index.estimate()
        if best is None or estimate < best_estimate:
            best_estimate = estimate
            best = QueryPlan(
                strategy=ScanStrategy.INDEX_LOOKUP,
                condition=condition,
                index=index,
                estimate=estimate,
            )

    return best or FULL_SCAN_PLAN
