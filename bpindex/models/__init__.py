"""
Data models for the B+-tree index.
"""

from bpindex.models.exceptions import (
    BPlusTreeError,
    CommandParseError,
    EmptyTreeError,
    InvalidConfigurationError,
    InvariantViolationError,
    TypeMismatchError,
)
from bpindex.models.node import InternalNode, LeafNode, Node
from bpindex.models.snapshot import NodeSnapshot, TreeSnapshot

__all__ = [
    "BPlusTreeError",
    "CommandParseError",
    "EmptyTreeError",
    "InvalidConfigurationError",
    "InvariantViolationError",
    "TypeMismatchError",
    "InternalNode",
    "LeafNode",
    "Node",
    "NodeSnapshot",
    "TreeSnapshot",
]
