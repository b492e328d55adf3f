"""
Structural invariant checks for a BPlusTree.
"""

import math
from typing import Any

from bpindex.models.exceptions import InvariantViolationError
from bpindex.models.node import LeafNode, Node
from bpindex.tree.bplus_tree import BPlusTree


def validate_tree(tree: BPlusTree) -> None:
    """
    Verify that the tree satisfies every B+-tree invariant.

    Checks:
      1) All leaves sit at the same depth.
      2) Non-root nodes respect the occupancy bounds for the fanout.
      3) Keys inside every node are strictly increasing.
      4) Separators partition child subtrees: keys under children[i] are
         < keys[i], keys under children[i + 1] are >= keys[i].
      5) The leaf chain visits the leaves in tree order, its keys are
         strictly ascending and their number equals tree.size().

    Raises:
        InvariantViolationError: naming the first violation found.
    """
    root = tree.root
    if root is None:
        if tree.size() != 0:
            raise InvariantViolationError(f"empty tree reports size {tree.size()}")
        return

    leaves: list[tuple[LeafNode, int]] = []
    _check_node(tree, root, None, None, 1, leaves)

    depths = {depth for _, depth in leaves}
    if len(depths) != 1:
        raise InvariantViolationError(f"leaves found at depths {sorted(depths)}")

    # Leaf chain must follow the in-order leaf sequence exactly
    in_order = [leaf for leaf, _ in leaves]
    chained = list(tree.leaves())
    if len(chained) != len(in_order) or any(a is not b for a, b in zip(chained, in_order)):
        raise InvariantViolationError("leaf chain does not match in-order leaf sequence")
    if in_order[-1].next is not None:
        raise InvariantViolationError("last leaf links to another node", in_order[-1])

    keys = [key for leaf in chained for key in leaf.keys]
    for previous, current in zip(keys, keys[1:]):
        if not previous < current:
            raise InvariantViolationError(f"leaf chain out of order: {previous!r} before {current!r}")
    if len(keys) != tree.size():
        raise InvariantViolationError(f"tree reports size {tree.size()} but holds {len(keys)} keys")


def _check_node(
    tree: BPlusTree,
    node: Node,
    low: Any,
    high: Any,
    depth: int,
    leaves: list[tuple[LeafNode, int]],
) -> None:
    """Recursively check node, whose keys must lie in [low, high)."""
    fanout = tree.fanout
    is_root = node is tree.root

    for previous, current in zip(node.keys, node.keys[1:]):
        if not previous < current:
            raise InvariantViolationError(
                f"keys not strictly increasing: {previous!r} then {current!r}", node
            )
    for key in node.keys:
        if (low is not None and key < low) or (high is not None and not key < high):
            raise InvariantViolationError(
                f"key {key!r} outside separator range [{low!r}, {high!r})", node
            )

    if node.is_leaf:
        if len(node.values) != node.count:
            raise InvariantViolationError("leaf has mismatched keys and values", node)
        if node.count > fanout - 1:
            raise InvariantViolationError(f"leaf holds {node.count} entries", node)
        if not is_root and node.count < math.ceil((fanout - 1) / 2):
            raise InvariantViolationError(f"leaf under-full with {node.count} entries", node)
        if is_root and node.count == 0:
            raise InvariantViolationError("root leaf is empty", node)
        leaves.append((node, depth))
        return

    children = len(node.children)
    if children != node.count + 1:
        raise InvariantViolationError(
            f"internal node has {node.count} keys but {children} children", node
        )
    if children > fanout:
        raise InvariantViolationError(f"internal node holds {children} children", node)
    minimum = 2 if is_root else math.ceil(fanout / 2)
    if children < minimum:
        raise InvariantViolationError(f"internal node under-full with {children} children", node)

    bounds = [low, *node.keys, high]
    for i, child in enumerate(node.children):
        if child is None:
            raise InvariantViolationError(f"dangling child pointer in slot {i}", node)
        _check_node(tree, child, bounds[i], bounds[i + 1], depth + 1, leaves)
