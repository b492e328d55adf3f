"""
Leaf and internal node variants of the B+-tree.
"""

import bisect
from dataclasses import dataclass, field
from typing import Any, Union

from bpindex.models.exceptions import TypeMismatchError


def _mismatch(keys: list[Any], key: Any) -> TypeMismatchError:
    """Build the error naming the first stored key that refuses to compare with key."""
    for stored in keys:
        try:
            stored < key
            key < stored
        except TypeError:
            return TypeMismatchError(stored, key)
    return TypeMismatchError(keys[0] if keys else None, key)


@dataclass(eq=False)
class _NodeBase:
    """Keys shared by both node variants, kept strictly ascending."""

    keys: list[Any] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of occupied key slots."""
        return len(self.keys)

    def position(self, key: Any) -> int:
        """Return the first index i such that keys[i] >= key (count if none)."""
        try:
            return bisect.bisect_left(self.keys, key)
        except TypeError:
            raise _mismatch(self.keys, key) from None

    def child_index(self, key: Any) -> int:
        """
        Return the child slot a search for key descends into.

        Keys equal to a separator route to the right of it, so the slot is
        the number of keys <= key.
        """
        try:
            return bisect.bisect_right(self.keys, key)
        except TypeError:
            raise _mismatch(self.keys, key) from None


@dataclass(eq=False)
class LeafNode(_NodeBase):
    """
    Leaf node holding one value per key and a link to the next leaf.

    Attributes:
        keys: Sorted keys stored in this leaf.
        values: values[i] is associated with keys[i].
        next: The following leaf in key order, None for the last leaf.
    """

    values: list[Any] = field(default_factory=list)
    next: "LeafNode | None" = field(default=None, repr=False)

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def children(self) -> list[Any]:
        """Values followed by the next-leaf link, as one pointer sequence."""
        return [*self.values, self.next]

    def items(self) -> list[tuple[Any, Any]]:
        return list(zip(self.keys, self.values))

    def lookup(self, key: Any) -> int:
        """Return the index holding key, or -1 when the leaf does not contain it."""
        pos = self.position(key)
        if pos < len(self.keys) and self.keys[pos] == key:
            return pos
        return -1


@dataclass(eq=False)
class InternalNode(_NodeBase):
    """
    Internal node routing searches through separator keys.

    Invariant: len(children) == len(keys) + 1. Every key under children[i]
    is < keys[i], every key under children[i + 1] is >= keys[i].
    """

    children: list["Node"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return False

    def index_of_child(self, child: "Node") -> int:
        """Return the slot holding child, matched by identity."""
        for i, candidate in enumerate(self.children):
            if candidate is child:
                return i
        raise ValueError("node is not a child of this internal node")


Node = Union[LeafNode, InternalNode]
