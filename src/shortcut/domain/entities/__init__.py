"""Domain entities for the row store.

Exports:
    Rows:
        - FixedRow: Immutable tuple-backed row
        - OwnedRow: Growable list-backed row
        - SharedRow: Handle onto shared row storage
        - as_row: Coerce lists, tuples and sequences into rows

    B+Tree Nodes:
        - BTreeNodeHeader: Node header with parent and sibling links
        - BTreeLeafNode: Leaf node storing key -> row id buckets
        - BTreeInternalNode: Internal node with separator keys
        - NodeType: Enum for node types
"""

from shortcut.domain.entities.btree_node import (
    INVALID_NODE_ID,
    BTreeInternalNode,
    BTreeLeafNode,
    BTreeNodeHeader,
    NodeId,
    NodeType,
)
from shortcut.domain.entities.row import FixedRow, OwnedRow, SharedRow, as_row

__all__ = [
    # Rows
    "FixedRow",
    "OwnedRow",
    "SharedRow",
    "as_row",
    # B+Tree Nodes
    "BTreeNodeHeader",
    "BTreeLeafNode",
    "BTreeInternalNode",
    "NodeId",
    "NodeType",
    "INVALID_NODE_ID",
]
