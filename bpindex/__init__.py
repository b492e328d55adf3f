"""
In-memory B+-tree index.

This package provides an ordered key-value index with:
- insert(key, value) - O(log N), splits cascade toward the root
- delete(key, value) - O(log N), merges and redistribution restore balance
- find(key) - the leaf responsible for a key
- clone() - an independent deep copy for point-in-time snapshots
- iterator(start, end) - ordered range scans along the leaf chain
"""

from bpindex.models.exceptions import (
    BPlusTreeError,
    CommandParseError,
    EmptyTreeError,
    InvalidConfigurationError,
    InvariantViolationError,
    TypeMismatchError,
)
from bpindex.tree import BPlusTree, validate_tree

__all__ = [
    "BPlusTree",
    "validate_tree",
    "BPlusTreeError",
    "CommandParseError",
    "EmptyTreeError",
    "InvalidConfigurationError",
    "InvariantViolationError",
    "TypeMismatchError",
]
