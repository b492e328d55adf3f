"""
Plain-text rendering of tree snapshots, one line per level.
"""

from bpindex.models.snapshot import NodeSnapshot, TreeSnapshot
from bpindex.tree.bplus_tree import BPlusTree


def render_node(node: NodeSnapshot) -> str:
    return "[" + "|".join(str(key) for key in node.keys) + "]"


def render_snapshot(snapshot: TreeSnapshot) -> str:
    """
    Render each level left to right, root first.

    Leaves are joined with '->' to show the leaf chain, internal nodes
    with spaces.
    """
    if not snapshot.levels:
        return "(empty)"

    lines = []
    for level in snapshot.levels:
        separator = "->" if level[0].is_leaf else " "
        lines.append(separator.join(render_node(node) for node in level))
    return "\n".join(lines)


def render_tree(tree: BPlusTree) -> str:
    return render_snapshot(tree.snapshot())
