"""
Tests for data models: nodes, snapshots, and exceptions.
"""

import pytest

from bpindex.models.exceptions import (
    BPlusTreeError,
    CommandParseError,
    EmptyTreeError,
    InvalidConfigurationError,
    TypeMismatchError,
)
from bpindex.models.node import InternalNode, LeafNode
from bpindex.models.snapshot import NodeSnapshot, TreeSnapshot


class TestLeafNode:
    """Tests for LeafNode."""

    def test_is_leaf(self):
        """Test variant tag."""
        leaf = LeafNode(keys=[1, 2], values=["a", "b"])
        assert leaf.is_leaf
        assert leaf.count == 2

    def test_children_layout(self):
        """Test values followed by the next-leaf link."""
        tail = LeafNode(keys=[9], values=["z"])
        leaf = LeafNode(keys=[1, 2], values=["a", "b"], next=tail)

        assert leaf.children == ["a", "b", tail]
        assert tail.children == ["z", None]

    def test_position(self):
        """Test first index with keys[i] >= key."""
        leaf = LeafNode(keys=[10, 20, 30], values=[None] * 3)

        assert leaf.position(5) == 0
        assert leaf.position(20) == 1
        assert leaf.position(25) == 2
        assert leaf.position(40) == 3

    def test_lookup(self):
        """Test exact key lookup."""
        leaf = LeafNode(keys=[10, 20], values=["a", "b"])

        assert leaf.lookup(20) == 1
        assert leaf.lookup(15) == -1
        assert leaf.lookup(99) == -1

    def test_items(self):
        """Test key-value pairs."""
        leaf = LeafNode(keys=[1, 2], values=["a", "b"])
        assert leaf.items() == [(1, "a"), (2, "b")]

    def test_incomparable_key(self):
        """Test that a mixed-type comparison raises TypeMismatchError."""
        leaf = LeafNode(keys=[1, 2], values=[None, None])

        with pytest.raises(TypeMismatchError) as exc_info:
            leaf.position("a")

        assert exc_info.value.right == "a"
        assert exc_info.value.left in (1, 2)
        assert isinstance(exc_info.value, TypeError)


class TestInternalNode:
    """Tests for InternalNode."""

    def test_is_not_leaf(self):
        """Test variant tag."""
        node = InternalNode(keys=[5], children=[LeafNode(), LeafNode()])
        assert not node.is_leaf
        assert node.count == 1

    def test_child_index_routes_equal_keys_right(self):
        """Test that a key equal to a separator follows the right child."""
        node = InternalNode(keys=[10, 20], children=[LeafNode(), LeafNode(), LeafNode()])

        assert node.child_index(5) == 0
        assert node.child_index(10) == 1
        assert node.child_index(15) == 1
        assert node.child_index(20) == 2
        assert node.child_index(99) == 2

    def test_index_of_child_uses_identity(self):
        """Test that children are matched by identity, not equality."""
        a = LeafNode(keys=[1], values=[None])
        b = LeafNode(keys=[1], values=[None])
        node = InternalNode(keys=[1], children=[a, b])

        assert node.index_of_child(a) == 0
        assert node.index_of_child(b) == 1

    def test_index_of_unknown_child(self):
        """Test that a foreign node is rejected."""
        node = InternalNode(keys=[1], children=[LeafNode(), LeafNode()])

        with pytest.raises(ValueError):
            node.index_of_child(LeafNode())


class TestSnapshot:
    """Tests for NodeSnapshot and TreeSnapshot."""

    def test_frozen(self):
        """Test that snapshots cannot be modified."""
        node = NodeSnapshot(node_id=0, is_leaf=True, keys=(1,), values=(None,))

        with pytest.raises(AttributeError):
            node.keys = (2,)

    def test_arity(self):
        """Test pointer counts for both variants."""
        leaf = NodeSnapshot(node_id=1, is_leaf=True, keys=(1, 2), values=("a", "b"))
        internal = NodeSnapshot(node_id=0, is_leaf=False, keys=(3,), child_ids=(1, 2))

        assert leaf.arity == 2
        assert internal.arity == 2

    def test_empty_tree_snapshot(self):
        """Test snapshot of an empty tree."""
        snapshot = TreeSnapshot(fanout=3)

        assert snapshot.height == 0
        assert snapshot.leaves == ()
        assert snapshot.keys() == []


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_invalid_configuration(self):
        """Test configuration error fields and bases."""
        error = InvalidConfigurationError(2, 3)

        assert error.fanout == 2
        assert error.minimum == 3
        assert isinstance(error, ValueError)
        assert isinstance(error, BPlusTreeError)
        assert ">= 3" in str(error)

    def test_empty_tree(self):
        """Test empty tree error."""
        error = EmptyTreeError("find")

        assert error.operation == "find"
        assert isinstance(error, LookupError)
        assert "find()" in str(error)

    def test_command_parse_error(self):
        """Test parse error message carries the line number."""
        error = CommandParseError("bogus 1\n", 7, "unknown operation")

        assert error.line_number == 7
        assert "line 7" in str(error)
        assert "'bogus 1'" in str(error)
