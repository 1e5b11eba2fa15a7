"""Application layer for the row store.

The application layer orchestrates domain logic to fulfill use cases:
storing rows, maintaining indices, and answering queries.

Exports:
    Store:
        - Store: The embeddable row store
    Planner:
        - plan_query: Picks the cheapest usable index for a query
        - QueryPlan: The planner's decision
        - ScanStrategy: Index lookup or full scan
"""

from shortcut.application.planner import FULL_SCAN_PLAN, QueryPlan, ScanStrategy, plan_query
from shortcut.application.store import Store

__all__ = [
    "Store",
    "plan_query",
    "QueryPlan",
    "ScanStrategy",
    "FULL_SCAN_PLAN",
]
