"""
The B+-tree index and its invariant checker.
"""

from bpindex.tree.bplus_tree import BPlusTree
from bpindex.tree.validator import validate_tree

__all__ = ["BPlusTree", "validate_tree"]
