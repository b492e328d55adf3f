"""
Custom exceptions for the B+-tree index.
"""

from typing import Any


class BPlusTreeError(Exception):
    """Base class for every error raised by the index."""


class InvalidConfigurationError(BPlusTreeError, ValueError):
    """
    Raised when a tree is constructed with an unusable fanout.

    A fanout below 3 leaves no room to split a node into two legal halves.
    """

    def __init__(self, fanout: Any, minimum: int):
        """
        Initialize configuration error.

        Args:
            fanout: The rejected fanout value.
            minimum: The smallest fanout accepted.
        """
        self.fanout = fanout
        self.minimum = minimum
        super().__init__(f"fanout must be an integer >= {minimum}, got {fanout!r}")


class TypeMismatchError(BPlusTreeError, TypeError):
    """
    Raised when two keys cannot be ordered against each other.

    Detected at the point of comparison, before the tree is modified.
    """

    def __init__(self, left: Any, right: Any):
        self.left = left
        self.right = right
        super().__init__(
            f"cannot compare keys {left!r} ({type(left).__name__}) and "
            f"{right!r} ({type(right).__name__})"
        )


class EmptyTreeError(BPlusTreeError, LookupError):
    """Raised when a lookup needs a root but the tree holds no entries."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}() called on an empty tree")


class InvariantViolationError(BPlusTreeError):
    """Raised by the validator when a structural invariant does not hold."""

    def __init__(self, message: str, node: Any = None):
        self.node = node
        super().__init__(message)


class CommandParseError(BPlusTreeError, ValueError):
    """Raised when a replay command line cannot be understood."""

    def __init__(self, line: str, line_number: int | None, reason: str):
        """
        Initialize parse error.

        Args:
            line: The offending input line.
            line_number: 1-based position of the line, None when unknown.
            reason: What is wrong with the line.
        """
        self.line = line
        self.line_number = line_number
        self.reason = reason
        where = f"line {line_number}" if line_number is not None else "command"
        super().__init__(f"{where}: {reason}: {line.strip()!r}")
