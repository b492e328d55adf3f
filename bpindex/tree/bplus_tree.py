"""
B+-tree implementation of SortedContainer.

All entries live in the leaves, which are chained in ascending key order.
Internal nodes only hold separator keys used to route searches.
"""

import logging
import math
from typing import Any

from bpindex.interfaces.sorted_container import SortedContainer
from bpindex.models.exceptions import EmptyTreeError, InvalidConfigurationError
from bpindex.models.node import InternalNode, LeafNode, Node
from bpindex.models.snapshot import NodeSnapshot, TreeSnapshot

logger = logging.getLogger(__name__)


class BPlusTree(SortedContainer):
    """
    In-memory B+-tree with a fixed fanout.

    Properties maintained between operations:
    1. All leaves are at the same depth
    2. Non-root internal nodes hold ceil(fanout/2)..fanout children
    3. Non-root leaves hold ceil((fanout-1)/2)..fanout-1 entries
    4. Keys inside a node are strictly increasing
    5. The leaf chain yields every entry in ascending key order

    Not thread-safe: callers sharing a tree must serialize access.
    """

    # Default number of child pointers per node
    DEFAULT_FANOUT = 4

    # Smallest fanout whose split leaves two non-empty halves
    MIN_FANOUT = 3

    def __init__(self, fanout: int = DEFAULT_FANOUT) -> None:
        """
        Initialize an empty tree.

        Args:
            fanout: Maximum number of child pointers per node (>= 3).
        """
        if isinstance(fanout, bool) or not isinstance(fanout, int) or fanout < self.MIN_FANOUT:
            raise InvalidConfigurationError(fanout, self.MIN_FANOUT)

        self._fanout = fanout
        self._root: Node | None = None
        self._size: int = 0

        # Split point for over-full nodes
        self._split_at = math.ceil(fanout / 2)

        # Occupancy floors for non-root nodes
        self._min_children = math.ceil(fanout / 2)
        self._min_entries = math.ceil((fanout - 1) / 2)

    @property
    def fanout(self) -> int:
        return self._fanout

    @property
    def root(self) -> Node | None:
        return self._root

    @property
    def height(self) -> int:
        """Number of levels, 0 for an empty tree."""
        levels = 0
        node = self._root
        while node is not None:
            levels += 1
            node = None if node.is_leaf else node.children[0]
        return levels

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"BPlusTree(fanout={self._fanout}, size={self._size}, height={self.height})"

    # Lookup

    def find(self, key: Any) -> LeafNode:
        """
        Return the leaf responsible for key.

        The leaf is returned whether or not it contains key. It belongs to
        the live tree and must be treated as read-only.

        Raises:
            EmptyTreeError: If the tree holds no entries.
            TypeMismatchError: If key cannot be compared with stored keys.
        """
        if self._root is None:
            raise EmptyTreeError("find")
        leaf, _ = self._descend(key)
        return leaf

    def find_parent(self, node: Node) -> InternalNode | None:
        """
        Return the internal node whose routing selects node, None for the root.

        The parent is re-derived by descending from the root with the
        node's first key.

        Raises:
            EmptyTreeError: If the tree holds no entries.
            ValueError: If node is not part of this tree.
        """
        if self._root is None:
            raise EmptyTreeError("find_parent")
        if node is self._root:
            return None
        if node.keys:
            parent = self._root
            while not parent.is_leaf:
                child = parent.children[parent.child_index(node.keys[0])]
                if child is node:
                    return parent
                parent = child
        raise ValueError("node does not belong to this tree")

    def get(self, key: Any, default: Any = None) -> Any:
        """Retrieve value by key. O(log N)"""
        if self._root is None:
            return default
        leaf, _ = self._descend(key)
        pos = leaf.lookup(key)
        return leaf.values[pos] if pos >= 0 else default

    def has(self, key: Any) -> bool:
        if self._root is None:
            return False
        leaf, _ = self._descend(key)
        return leaf.lookup(key) >= 0

    def first_leaf(self) -> LeafNode | None:
        """Return the leftmost leaf, None for an empty tree."""
        node = self._root
        if node is None:
            return None
        while not node.is_leaf:
            node = node.children[0]
        return node

    def min_key(self) -> Any:
        leaf = self.first_leaf()
        if leaf is None:
            raise EmptyTreeError("min_key")
        return leaf.keys[0]

    def max_key(self) -> Any:
        node = self._root
        if node is None:
            raise EmptyTreeError("max_key")
        while not node.is_leaf:
            node = node.children[-1]
        return node.keys[-1]

    def _descend(self, key: Any) -> tuple[LeafNode, list[InternalNode]]:
        """Walk from the root to the leaf for key, returning it with its ancestors."""
        path: list[InternalNode] = []
        node = self._root
        while not node.is_leaf:
            path.append(node)
            node = node.children[node.child_index(key)]
        return node, path

    # Insertion

    def insert(self, key: Any, value: Any) -> None:
        """Insert a key-value pair, replacing the value of an existing key. O(log N)"""
        if self._root is None:
            leaf = LeafNode()
            path: list[InternalNode] = []
        else:
            leaf, path = self._descend(key)

        # Comparisons happen here, before any mutation
        pos = leaf.position(key)
        if pos < leaf.count and leaf.keys[pos] == key:
            leaf.values[pos] = value
            return

        if self._root is None:
            self._root = leaf
            logger.debug(f"Created root leaf for key {key!r}")

        leaf.keys.insert(pos, key)
        leaf.values.insert(pos, value)
        self._size += 1

        if leaf.count <= self._fanout - 1:
            return

        # Leaf now holds fanout entries: keep the first m, move the rest right
        m = self._split_at
        right = LeafNode(keys=leaf.keys[m:], values=leaf.values[m:], next=leaf.next)
        del leaf.keys[m:]
        del leaf.values[m:]
        leaf.next = right
        logger.debug(f"Split leaf at {right.keys[0]!r}")

        self._insert_in_parent(leaf, right.keys[0], right, path)

    def _insert_in_parent(
        self, left: Node, separator: Any, right: Node, path: list[InternalNode]
    ) -> None:
        """Link right into the tree next to left, splitting ancestors as needed."""
        if not path:
            self._root = InternalNode(keys=[separator], children=[left, right])
            logger.debug(f"Root split, new root separator {separator!r}")
            return

        parent = path.pop()

        # Position by pointer identity keeps keys and children aligned
        slot = parent.index_of_child(left)
        parent.keys.insert(slot, separator)
        parent.children.insert(slot + 1, right)

        if len(parent.children) <= self._fanout:
            return

        # Parent holds fanout + 1 children: keep m, promote keys[m - 1]
        m = self._split_at
        promoted = parent.keys[m - 1]
        sibling = InternalNode(keys=parent.keys[m:], children=parent.children[m:])
        del parent.keys[m - 1:]
        del parent.children[m:]
        logger.debug(f"Split internal node, promoting {promoted!r}")

        self._insert_in_parent(parent, promoted, sibling, path)

    # Deletion

    def delete(self, key: Any, value: Any = None) -> bool:
        """
        Remove the entry for key. O(log N)

        Args:
            key: The key to remove.
            value: When not None, the entry is only removed if its value equals this.

        Returns:
            True if an entry was removed, False if nothing matched.
        """
        if self._root is None:
            return False

        leaf, path = self._descend(key)
        pos = leaf.lookup(key)
        if pos < 0:
            return False
        if value is not None and leaf.values[pos] != value:
            return False

        self._size -= 1
        self._delete_entry(leaf, pos, path)
        return True

    def _delete_entry(self, node: Node, index: int, path: list[InternalNode]) -> None:
        """
        Remove keys[index] and its pointer from node, then restore occupancy.

        For a leaf the pointer is values[index]; for an internal node it is
        children[index + 1], the subtree to the right of the separator.
        """
        del node.keys[index]
        if node.is_leaf:
            del node.values[index]
        else:
            del node.children[index + 1]

        if node is self._root:
            if not node.is_leaf and len(node.children) == 1:
                self._root = node.children[0]
                logger.debug(f"Root collapsed, height now {self.height}")
            elif node.is_leaf and node.count == 0:
                self._root = None
                logger.debug("Last entry removed, tree is empty")
            return

        if not self._is_underfull(node):
            return

        parent = path.pop()
        slot = parent.index_of_child(node)

        # Prefer the predecessor sibling, fall back to the successor
        if slot > 0:
            left, right, sep_index = parent.children[slot - 1], node, slot - 1
        else:
            left, right, sep_index = node, parent.children[1], 0

        if self._fits_in_one(left, right):
            self._merge(left, right, parent.keys[sep_index])
            self._delete_entry(parent, sep_index, path)
        elif left is node:
            self._borrow_from_right(node, right, parent, sep_index)
        else:
            self._borrow_from_left(node, left, parent, sep_index)

    def _is_underfull(self, node: Node) -> bool:
        if node.is_leaf:
            return node.count < self._min_entries
        return len(node.children) < self._min_children

    def _fits_in_one(self, left: Node, right: Node) -> bool:
        if left.is_leaf:
            return left.count + right.count <= self._fanout - 1
        return len(left.children) + len(right.children) <= self._fanout

    def _merge(self, left: Node, right: Node, separator: Any) -> None:
        """Move every entry of right into left; right is dropped by the caller."""
        if left.is_leaf:
            left.keys.extend(right.keys)
            left.values.extend(right.values)
            left.next = right.next
        else:
            left.keys.append(separator)
            left.keys.extend(right.keys)
            left.children.extend(right.children)
        logger.debug(f"Merged siblings across separator {separator!r}")

    def _borrow_from_left(
        self, node: Node, left: Node, parent: InternalNode, sep_index: int
    ) -> None:
        """Move the last entry of left to the front of node."""
        if node.is_leaf:
            node.keys.insert(0, left.keys.pop())
            node.values.insert(0, left.values.pop())
            parent.keys[sep_index] = node.keys[0]
        else:
            node.keys.insert(0, parent.keys[sep_index])
            node.children.insert(0, left.children.pop())
            parent.keys[sep_index] = left.keys.pop()
        logger.debug(f"Redistributed from left sibling, separator now {parent.keys[sep_index]!r}")

    def _borrow_from_right(
        self, node: Node, right: Node, parent: InternalNode, sep_index: int
    ) -> None:
        """Move the first entry of right to the end of node."""
        if node.is_leaf:
            node.keys.append(right.keys.pop(0))
            node.values.append(right.values.pop(0))
            parent.keys[sep_index] = right.keys[0]
        else:
            node.keys.append(parent.keys[sep_index])
            node.children.append(right.children.pop(0))
            parent.keys[sep_index] = right.keys.pop(0)
        logger.debug(f"Redistributed from right sibling, separator now {parent.keys[sep_index]!r}")

    # Copying and snapshots

    def clone(self) -> "BPlusTree":
        """
        Return a deep structural copy of this tree.

        Every node is copied and the copy's leaves are chained to each
        other. Stored keys and values are shared with the original.
        """
        duplicate = BPlusTree(self._fanout)
        duplicate._size = self._size
        if self._root is None:
            return duplicate

        copied_leaves: list[LeafNode] = []
        duplicate._root = self._copy_node(self._root, copied_leaves)
        for leaf, following in zip(copied_leaves, copied_leaves[1:]):
            leaf.next = following
        return duplicate

    def _copy_node(self, node: Node, copied_leaves: list[LeafNode]) -> Node:
        if node.is_leaf:
            leaf = LeafNode(keys=list(node.keys), values=list(node.values))
            copied_leaves.append(leaf)
            return leaf
        return InternalNode(
            keys=list(node.keys),
            children=[self._copy_node(child, copied_leaves) for child in node.children],
        )

    def __copy__(self) -> "BPlusTree":
        return self.clone()

    def __deepcopy__(self, memo: dict) -> "BPlusTree":
        return self.clone()

    def snapshot(self) -> TreeSnapshot:
        """Return an immutable level-by-level view of the current structure."""
        if self._root is None:
            return TreeSnapshot(fanout=self._fanout)

        # Number nodes breadth-first so ids read left to right, top to bottom
        levels: list[list[Node]] = [[self._root]]
        while not levels[-1][0].is_leaf:
            levels.append([child for node in levels[-1] for child in node.children])

        ids: dict[int, int] = {}
        for level in levels:
            for node in level:
                ids[id(node)] = len(ids)

        frozen_levels = []
        for level in levels:
            frozen = []
            for node in level:
                if node.is_leaf:
                    frozen.append(
                        NodeSnapshot(
                            node_id=ids[id(node)],
                            is_leaf=True,
                            keys=tuple(node.keys),
                            values=tuple(node.values),
                            next_id=ids[id(node.next)] if node.next is not None else None,
                        )
                    )
                else:
                    frozen.append(
                        NodeSnapshot(
                            node_id=ids[id(node)],
                            is_leaf=False,
                            keys=tuple(node.keys),
                            child_ids=tuple(ids[id(child)] for child in node.children),
                        )
                    )
            frozen_levels.append(tuple(frozen))
        return TreeSnapshot(fanout=self._fanout, levels=tuple(frozen_levels))

    # Iteration

    def seek(self, start: Any | None) -> tuple[LeafNode | None, int]:
        """Return the leaf and offset of the first entry >= start."""
        if self._root is None:
            return None, 0
        if start is None:
            return self.first_leaf(), 0
        leaf, _ = self._descend(start)
        return leaf, leaf.position(start)
