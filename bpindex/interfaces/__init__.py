"""
Abstract base classes for the index.
"""

from bpindex.interfaces.leaf_chain import LeafChain
from bpindex.interfaces.sorted_container import SortedContainer

__all__ = ["LeafChain", "SortedContainer"]
