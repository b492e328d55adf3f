"""
Immutable structural snapshots of a tree, for renderers and other readers.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class NodeSnapshot:
    """
    Frozen view of a single node.

    Attributes:
        node_id: Position of the node in breadth-first order, unique per snapshot.
        is_leaf: Whether the node is a leaf.
        keys: The node's keys in order.
        values: Leaf values in key order (empty for internal nodes).
        child_ids: node_id of each child (empty for leaves).
        next_id: node_id of the next leaf, None for the last leaf and internal nodes.
    """

    node_id: int
    is_leaf: bool
    keys: tuple[Any, ...]
    values: tuple[Any, ...] = ()
    child_ids: tuple[int, ...] = ()
    next_id: int | None = None

    @property
    def arity(self) -> int:
        """Number of occupied pointer slots."""
        return len(self.values) if self.is_leaf else len(self.child_ids)


@dataclass(frozen=True)
class TreeSnapshot:
    """Frozen view of a whole tree, one tuple of nodes per level, root first."""

    fanout: int
    levels: tuple[tuple[NodeSnapshot, ...], ...] = ()

    @property
    def height(self) -> int:
        return len(self.levels)

    @property
    def leaves(self) -> tuple[NodeSnapshot, ...]:
        return self.levels[-1] if self.levels else ()

    def keys(self) -> list[Any]:
        """All keys in leaf order."""
        return [key for leaf in self.leaves for key in leaf.keys]
