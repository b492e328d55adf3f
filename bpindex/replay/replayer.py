"""
Replayer - apply a command script to a tree, keeping one snapshot per step.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bpindex.replay.command import Command, CommandType, parse_commands
from bpindex.tree.bplus_tree import BPlusTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """
    The state of the tree right after one command.

    Attributes:
        index: 0-based position of the command in the script.
        command: The command that produced this state.
        tree: An independent clone of the tree; later commands never alter it.
        changed: False when the command was a delete that matched nothing.
    """

    index: int
    command: Command
    tree: BPlusTree
    changed: bool = True


class Replayer:
    """
    Drives a live tree through a sequence of commands.

    Each applied command yields a Frame holding a clone of the tree, so a
    viewer can step backwards and forwards through the history.
    """

    def __init__(
        self,
        fanout: int = BPlusTree.DEFAULT_FANOUT,
        key_parser: Callable[[str], Any] = int,
    ) -> None:
        """
        Initialize the replayer with an empty tree.

        Args:
            fanout: Fanout of the tree being driven.
            key_parser: Converts key tokens from script lines.
        """
        self._tree = BPlusTree(fanout)
        self._key_parser = key_parser
        self._frames: list[Frame] = []

    @property
    def tree(self) -> BPlusTree:
        return self._tree

    @property
    def frames(self) -> list[Frame]:
        return list(self._frames)

    def apply(self, command: Command) -> Frame:
        """Apply one command to the live tree and record the resulting frame."""
        if command.type is CommandType.INSERT:
            self._tree.insert(command.key, command.value)
            changed = True
        else:
            changed = self._tree.delete(command.key, command.value)
            if not changed:
                logger.debug(f"Delete of absent key {command.key!r} left the tree unchanged")

        frame = Frame(
            index=len(self._frames),
            command=command,
            tree=self._tree.clone(),
            changed=changed,
        )
        self._frames.append(frame)
        logger.debug(f"Applied {frame.index}: {command} (height {self._tree.height})")
        return frame

    def run(self, lines: Iterable[str]) -> list[Frame]:
        """Parse and apply every command in lines, returning the new frames."""
        start = len(self._frames)
        for command in parse_commands(lines, self._key_parser):
            self.apply(command)
        return self._frames[start:]

    def run_file(self, path: str | Path) -> list[Frame]:
        """Replay a command script from disk."""
        with open(path, "r", encoding="utf-8") as f:
            return self.run(f)
