"""B+Tree ordered index implementation.

This module implements an in-memory B+Tree that maps a column value to the
bucket of row identifiers holding that value. It supports both equality
lookups and ordered range scans, so it satisfies the ``RangeIndex`` port.

Key features:
    - O(log n) lookup, insert_entry, remove_entry
    - Ordered range scans via linked leaf nodes
    - Many row identifiers per key (non-unique)
    - O(1) estimate from running entry and key counters

Deletion does not rebalance: emptied keys are dropped from their leaf, and
a leaf may end up empty without being merged into a sibling.

References:
    - Bayer & McCreight, "B+Trees" (1972)
"""

from __future__ import annotations

from typing import Any, Iterator

from shortcut.domain.entities.btree_node import (
    INVALID_NODE_ID,
    BTreeInternalNode,
    BTreeLeafNode,
    BTreeNode,
    NodeId,
)
from shortcut.domain.value_objects import RowId
from shortcut.ports.inbound.index import (
    Bound,
    IndexStats,
    MissingIndexEntryError,
    expected_rows_per_key,
)


# Maximum keys per node (fanout - 1)
DEFAULT_MAX_KEYS = 64
MIN_MAX_KEYS = 3


class BTreeIndex:
    """An ordered index backed by a B+Tree.

    Attributes:
        max_keys: Maximum keys per node before it splits.
    """

    def __init__(self, max_keys: int = DEFAULT_MAX_KEYS) -> None:
        if max_keys < MIN_MAX_KEYS:
            raise ValueError(f"max_keys must be at least {MIN_MAX_KEYS}, got {max_keys}")
        self.max_keys = max_keys
        self._next_node_id = 1  # Root gets node 0

        self._nodes: dict[NodeId, BTreeNode] = {}
        self.root_id = NodeId(0)
        self._nodes[self.root_id] = BTreeLeafNode.new(self.root_id)

        self._height = 1
        self._num_entries = 0
        self._num_keys = 0

    # --- EqualityIndex ---------------------------------------------------

    def lookup(self, value: Any) -> Iterator[RowId]:
        """Yield the row identifiers indexed under ``value``.

        A ``value`` that cannot be ordered against the stored keys cannot be
        one of them, so nothing is yielded.
        """
        try:
            bucket = self._find_leaf(value).search(value)
        except TypeError:
            return iter(())
        if bucket is None:
            return iter(())
        return iter(bucket)

    def insert_entry(self, value: Any, row_id: RowId) -> None:
        """Add ``row_id`` under ``value``, splitting nodes as needed."""
        leaf = self._find_leaf(value)
        if leaf.insert(value, row_id):
            self._num_keys += 1
        self._num_entries += 1

        if leaf.num_keys > self.max_keys:
            self._split_leaf(leaf)

    def remove_entry(self, value: Any, row_id: RowId) -> None:
        """Remove one occurrence of ``row_id`` under ``value``.

        Raises:
            MissingIndexEntryError: If the pair is not in the index.
        """
        removed = self._find_leaf(value).remove(value, row_id)
        if removed is None:
            raise MissingIndexEntryError(f"no entry for row {row_id} under {value!r}")

        self._num_entries -= 1
        if removed:
            self._num_keys -= 1

    def estimate(self) -> int:
        return expected_rows_per_key(self._num_entries, self._num_keys)

    # --- RangeIndex ------------------------------------------------------

    def between(self, lower: Bound, upper: Bound) -> Iterator[RowId]:
        """Yield row identifiers with keys between the bounds, ordered by key.

        Uses the linked leaf nodes for sequential access. An empty range
        (lower above upper) yields nothing.

        Args:
            lower: Lower endpoint.
            upper: Upper endpoint.
        """
        if lower.is_unbounded:
            leaf: BTreeLeafNode | None = self._get_leftmost_leaf()
        else:
            leaf = self._find_leaf(lower.value)

        while leaf is not None:
            for key, bucket in zip(leaf.keys, leaf.buckets):
                if not lower.admits_from_below(key):
                    continue
                if not upper.admits_from_above(key):
                    return
                yield from bucket

            leaf = self._next_leaf(leaf)

    # --- introspection ---------------------------------------------------

    @property
    def height(self) -> int:
        return self._height

    def keys(self) -> Iterator[Any]:
        """Yield the distinct keys in ascending order."""
        leaf: BTreeLeafNode | None = self._get_leftmost_leaf()
        while leaf is not None:
            yield from leaf.keys
            leaf = self._next_leaf(leaf)

    def stats(self) -> IndexStats:
        return IndexStats(
            entries=self._num_entries,
            distinct_keys=self._num_keys,
            estimate=self.estimate(),
        )

    def __len__(self) -> int:
        return self._num_entries

    def __repr__(self) -> str:
        return (
            f"BTreeIndex(entries={self._num_entries}, keys={self._num_keys}, "
            f"height={self._height})"
        )

    # --- tree maintenance ------------------------------------------------

    def _get_node(self, node_id: NodeId) -> BTreeNode:
        node = self._nodes.get(node_id)
        if node is None:
            raise RuntimeError(f"Node {node_id} not found")
        return node

    def _allocate_node_id(self) -> NodeId:
        node_id = NodeId(self._next_node_id)
        self._next_node_id += 1
        return node_id

    def _find_leaf(self, key: Any) -> BTreeLeafNode:
        """Traverse from the root to the leaf that should contain ``key``."""
        node = self._get_node(self.root_id)
        while not node.is_leaf:
            assert isinstance(node, BTreeInternalNode)
            node = self._get_node(node.find_child(key))

        assert isinstance(node, BTreeLeafNode)
        return node

    def _get_leftmost_leaf(self) -> BTreeLeafNode:
        node = self._get_node(self.root_id)
        while not node.is_leaf:
            assert isinstance(node, BTreeInternalNode)
            node = self._get_node(node.children[0])

        assert isinstance(node, BTreeLeafNode)
        return node

    def _next_leaf(self, leaf: BTreeLeafNode) -> BTreeLeafNode | None:
        if leaf.header.next_id == INVALID_NODE_ID:
            return None
        node = self._get_node(leaf.header.next_id)
        assert isinstance(node, BTreeLeafNode)
        return node

    def _split_leaf(self, leaf: BTreeLeafNode) -> None:
        """Move the upper half of an overfull leaf into a new right sibling."""
        new_leaf = BTreeLeafNode.new(self._allocate_node_id())

        mid = len(leaf.keys) // 2
        new_leaf.keys = leaf.keys[mid:]
        new_leaf.buckets = leaf.buckets[mid:]
        leaf.keys = leaf.keys[:mid]
        leaf.buckets = leaf.buckets[:mid]

        new_leaf.header.next_id = leaf.header.next_id
        new_leaf.header.prev_id = leaf.node_id
        leaf.header.next_id = new_leaf.node_id
        if new_leaf.header.next_id != INVALID_NODE_ID:
            next_node = self._get_node(new_leaf.header.next_id)
            next_node.header.prev_id = new_leaf.node_id

        self._nodes[new_leaf.node_id] = new_leaf
        self._insert_into_parent(leaf, new_leaf.keys[0], new_leaf)

    def _insert_into_parent(
        self,
        left_child: BTreeNode,
        key: Any,
        right_child: BTreeNode,
    ) -> None:
        """Register ``right_child`` next to ``left_child`` after a split."""
        parent_id = left_child.header.parent_id

        if parent_id == INVALID_NODE_ID:
            new_root = BTreeInternalNode.new(self._allocate_node_id())
            new_root.insert_child(key, left_child.node_id, right_child.node_id)
            left_child.header.parent_id = new_root.node_id
            right_child.header.parent_id = new_root.node_id

            self._nodes[new_root.node_id] = new_root
            self.root_id = new_root.node_id
            self._height += 1
            return

        parent = self._get_node(parent_id)
        if not isinstance(parent, BTreeInternalNode):
            raise RuntimeError("Invalid parent node")

        parent.insert_child(key, left_child.node_id, right_child.node_id)
        right_child.header.parent_id = parent_id

        if parent.num_keys > self.max_keys:
            self._split_internal(parent)

    def _split_internal(self, node: BTreeInternalNode) -> None:
        """Split an overfull internal node; the middle key moves up."""
        new_node = BTreeInternalNode.new(self._allocate_node_id())

        mid = len(node.keys) // 2
        separator = node.keys[mid]

        new_node.keys = node.keys[mid + 1 :]
        new_node.children = node.children[mid + 1 :]
        node.keys = node.keys[:mid]
        node.children = node.children[: mid + 1]

        for child_id in new_node.children:
            self._get_node(child_id).header.parent_id = new_node.node_id

        self._nodes[new_node.node_id] = new_node
        self._insert_into_parent(node, separator, new_node)
