"""
LeafChain base for indexes whose entries live in a linked sequence of leaves.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator
from typing import Any

from bpindex.models.exceptions import TypeMismatchError
from bpindex.models.node import LeafNode


class LeafChain(ABC):
    """
    Ordered scans over a chain of leaves linked through LeafNode.next.

    Subclasses only locate leaves; walking the chain, range bounds and
    async iteration are provided here.
    """

    @abstractmethod
    def first_leaf(self) -> LeafNode | None:
        """Return the leftmost leaf, None when there are no entries."""
        pass

    @abstractmethod
    def seek(self, start: Any | None) -> tuple[LeafNode | None, int]:
        """
        Locate the first entry >= start.

        Args:
            start: Lower bound (inclusive). None means the first entry.

        Returns:
            The leaf holding the entry and its offset in that leaf. The
            offset may equal the leaf's count, in which case the scan
            continues with the next leaf.
        """
        pass

    def leaves(self) -> Iterator[LeafNode]:
        """Walk the leaf chain from the leftmost leaf."""
        leaf = self.first_leaf()
        while leaf is not None:
            yield leaf
            leaf = leaf.next

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self.iterator()

    def iterator(
        self, start: Any | None = None, end: Any | None = None
    ) -> Iterator[tuple[Any, Any]]:
        """Iterate (key, value) pairs in [start, end) along the leaf chain."""
        leaf, pos = self.seek(start)
        return _ChainIterator(leaf, pos, end)

    def __aiter__(self) -> AsyncIterator[tuple[Any, Any]]:
        return self.async_iterator()

    def async_iterator(
        self, start: Any | None = None, end: Any | None = None
    ) -> AsyncIterator[tuple[Any, Any]]:
        leaf, pos = self.seek(start)
        return _AsyncChainIterator(leaf, pos, end)


class _ChainIterator(Iterator[tuple[Any, Any]]):
    """Iterator following LeafNode.next links up to an exclusive end key."""

    def __init__(self, leaf: LeafNode | None, pos: int, end: Any | None) -> None:
        self._leaf = leaf
        self._pos = pos
        self._end = end

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self

    def __next__(self) -> tuple[Any, Any]:
        # Skip exhausted leaves
        while self._leaf is not None and self._pos >= self._leaf.count:
            self._leaf = self._leaf.next
            self._pos = 0

        if self._leaf is None:
            raise StopIteration

        key = self._leaf.keys[self._pos]

        if self._end is not None and self._reached_end(key):
            self._leaf = None
            raise StopIteration

        result = (key, self._leaf.values[self._pos])
        self._pos += 1
        return result

    def _reached_end(self, key: Any) -> bool:
        try:
            return key >= self._end
        except TypeError:
            raise TypeMismatchError(key, self._end) from None


class _AsyncChainIterator(AsyncIterator[tuple[Any, Any]]):
    """Async iterator over the leaf chain (in-memory, no I/O)."""

    def __init__(self, leaf: LeafNode | None, pos: int, end: Any | None) -> None:
        self._inner = _ChainIterator(leaf, pos, end)

    def __aiter__(self) -> "_AsyncChainIterator":
        return self

    async def __anext__(self) -> tuple[Any, Any]:
        try:
            return next(self._inner)
        except StopIteration:
            raise StopAsyncIteration from None
