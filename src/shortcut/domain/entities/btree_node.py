"""B+Tree node structures for the ordered index.

Key properties:
    - Every key lives in exactly one leaf, together with its bucket of
      row identifiers (a key may name many rows)
    - Internal nodes only contain separator keys and child pointers
    - Leaf nodes are linked for in-order range scans

Keys are the indexed column values themselves and must be totally ordered.

References:
    - Bayer & McCreight, "B+Trees" (1972)
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, NewType

from shortcut.domain.value_objects import RowId


NodeId = NewType("NodeId", int)
"""Identifier of a node inside one B+Tree."""

INVALID_NODE_ID = NodeId(-1)


class NodeType(IntEnum):
    """Type of B+Tree node."""

    INTERNAL = 0
    LEAF = 1


@dataclass
class BTreeNodeHeader:
    """Header for a B+Tree node.

    Attributes:
        node_type: Whether this is an internal or leaf node.
        parent_id: Parent node (INVALID_NODE_ID for the root).
        next_id: For leaf nodes, the next sibling (INVALID_NODE_ID if last).
        prev_id: For leaf nodes, the previous sibling (INVALID_NODE_ID if first).
    """

    node_type: NodeType
    parent_id: NodeId = INVALID_NODE_ID
    next_id: NodeId = INVALID_NODE_ID
    prev_id: NodeId = INVALID_NODE_ID


@dataclass
class BTreeLeafNode:
    """A leaf node in a B+Tree.

    ``keys`` is sorted and holds no duplicates; ``buckets[i]`` is the list of
    row identifiers indexed under ``keys[i]`` and is never empty.

    Attributes:
        node_id: The identifier of this node.
        header: Node header with metadata.
        keys: Sorted distinct keys stored in this node.
        buckets: Row identifiers for each key, in insertion order.
    """

    node_id: NodeId
    header: BTreeNodeHeader
    keys: list[Any] = field(default_factory=list)
    buckets: list[list[RowId]] = field(default_factory=list)

    @classmethod
    def new(cls, node_id: NodeId) -> BTreeLeafNode:
        """Create a new empty leaf node."""
        return cls(node_id=node_id, header=BTreeNodeHeader(node_type=NodeType.LEAF))

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def num_keys(self) -> int:
        return len(self.keys)

    def _position(self, key: Any) -> int | None:
        pos = bisect_left(self.keys, key)
        if pos < len(self.keys) and self.keys[pos] == key:
            return pos
        return None

    def search(self, key: Any) -> list[RowId] | None:
        """Return the bucket stored under ``key``, or None if absent."""
        pos = self._position(key)
        if pos is None:
            return None
        return self.buckets[pos]

    def insert(self, key: Any, row_id: RowId) -> bool:
        """Append ``row_id`` to the bucket of ``key``.

        Returns:
            True if ``key`` was new to this leaf, False if it was appended
            to an existing bucket.
        """
        pos = bisect_left(self.keys, key)
        if pos < len(self.keys) and self.keys[pos] == key:
            self.buckets[pos].append(row_id)
            return False

        self.keys.insert(pos, key)
        self.buckets.insert(pos, [row_id])
        return True

    def remove(self, key: Any, row_id: RowId) -> bool | None:
        """Remove one occurrence of ``row_id`` from the bucket of ``key``.

        Returns:
            None if the pair is not present, True if the key was dropped
            because its bucket became empty, False otherwise.
        """
        pos = self._position(key)
        if pos is None:
            return None

        bucket = self.buckets[pos]
        try:
            i = bucket.index(row_id)
        except ValueError:
            return None

        # Order inside a bucket is irrelevant, so swap-remove.
        bucket[i] = bucket[-1]
        bucket.pop()
        if bucket:
            return False

        self.keys.pop(pos)
        self.buckets.pop(pos)
        return True

    def get_min_key(self) -> Any | None:
        if self.keys:
            return self.keys[0]
        return None


@dataclass
class BTreeInternalNode:
    """An internal node in a B+Tree.

    A node with N keys has N+1 children. All keys in ``children[i]`` are
    less than ``keys[i]``, and all keys in ``children[i+1]`` are >= ``keys[i]``.

    Attributes:
        node_id: The identifier of this node.
        header: Node header with metadata.
        keys: List of separator keys (N keys).
        children: List of child node ids (N+1 children).
    """

    node_id: NodeId
    header: BTreeNodeHeader
    keys: list[Any] = field(default_factory=list)
    children: list[NodeId] = field(default_factory=list)

    @classmethod
    def new(cls, node_id: NodeId) -> BTreeInternalNode:
        """Create a new empty internal node."""
        return cls(node_id=node_id, header=BTreeNodeHeader(node_type=NodeType.INTERNAL))

    @property
    def is_leaf(self) -> bool:
        return False

    @property
    def num_keys(self) -> int:
        return len(self.keys)

    def find_child(self, key: Any) -> NodeId:
        """Return the child that should contain ``key``."""
        return self.children[bisect_right(self.keys, key)]

    def insert_child(self, key: Any, left_child: NodeId, right_child: NodeId) -> None:
        """Insert a new separator key with its right child.

        Called when ``left_child`` splits. ``left_child`` is already a child
        of this node unless the node is a brand-new root.

        Args:
            key: The separator key (minimum key in right_child).
            left_child: The existing child node.
            right_child: The new child node (from split).
        """
        if not self.children:
            self.children = [left_child, right_child]
            self.keys = [key]
            return

        pos = bisect_right(self.keys, key)
        self.keys.insert(pos, key)
        self.children.insert(pos + 1, right_child)


# Union type for B+Tree nodes
BTreeNode = BTreeLeafNode | BTreeInternalNode
