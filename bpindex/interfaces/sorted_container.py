"""
SortedContainer abstract base class for ordered key-value indexes.
"""

from abc import abstractmethod
from typing import Any

from bpindex.interfaces.leaf_chain import LeafChain
from bpindex.models.node import LeafNode


class SortedContainer(LeafChain):
    """
    Abstract base class for in-memory ordered indexes.

    Provides O(log N) operations for insert, get, and delete.
    Range scans come from LeafChain once first_leaf and seek are provided.

    Implementations:
    - BPlusTree: balanced multiway tree with a linked leaf level
    """

    @abstractmethod
    def find(self, key: Any) -> LeafNode:
        """
        Return the leaf responsible for key, whether or not it holds key.

        Raises:
            EmptyTreeError: If the container holds no entries.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def insert(self, key: Any, value: Any) -> None:
        """
        Insert a key-value pair, replacing the value of an existing key.

        Args:
            key: The key to insert.
            value: The value to associate with the key.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def get(self, key: Any, default: Any = None) -> Any:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up.
            default: Returned when the key is absent.

        Returns:
            The value if found, default otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, key: Any, value: Any = None) -> bool:
        """
        Remove a key-value pair.

        Args:
            key: The key to remove.
            value: When not None, the stored value must also match.

        Returns:
            True if an entry was removed, False otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, key: Any) -> bool:
        """
        Check if a key exists.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of key-value pairs.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def clone(self) -> "SortedContainer":
        """
        Return an independent copy sharing no structure with this container.

        Time complexity: O(N)
        """
        pass
