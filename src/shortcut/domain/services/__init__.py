"""Domain services for index maintenance.

Services implement domain logic that doesn't naturally fit within a
single entity: the two reference index implementations and the tagged
union the store uses to hold either of them.
"""

from shortcut.domain.services.btree_index import DEFAULT_MAX_KEYS, BTreeIndex
from shortcut.domain.services.hash_index import HashIndex
from shortcut.domain.services.index import Index

__all__ = [
    "BTreeIndex",
    "DEFAULT_MAX_KEYS",
    "HashIndex",
    "Index",
]
