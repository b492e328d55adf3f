"""
Command - one line of a replay script.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from bpindex.models.exceptions import CommandParseError


class CommandType(Enum):
    """Operation requested by a replay line."""

    INSERT = "insert"
    DELETE = "delete"


@dataclass(frozen=True)
class Command:
    """
    A parsed replay instruction.

    Attributes:
        type: The operation to apply.
        key: The parsed key.
        value: Optional value; None when the line carries none.
        line: The source text the command was parsed from.
    """

    type: CommandType
    key: Any
    value: Any = None
    line: str = ""

    def __str__(self) -> str:
        if self.line:
            return self.line
        parts = [self.type.value, str(self.key)]
        if self.value is not None:
            parts.append(str(self.value))
        return " ".join(parts)


def parse_command(
    line: str,
    key_parser: Callable[[str], Any] = int,
    line_number: int | None = None,
) -> Command | None:
    """
    Parse "insert <key> [value]" or "delete <key> [value]".

    Args:
        line: Raw input line.
        key_parser: Converts the key token, int by default.
        line_number: Reported in errors.

    Returns:
        The Command, or None for blank lines and '#' comments.

    Raises:
        CommandParseError: If the line is not a valid command.
    """
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    tokens = text.split()
    try:
        command_type = CommandType(tokens[0].lower())
    except ValueError:
        raise CommandParseError(line, line_number, f"unknown operation {tokens[0]!r}") from None

    if len(tokens) not in (2, 3):
        raise CommandParseError(line, line_number, "expected '<operation> <key> [value]'")

    try:
        key = key_parser(tokens[1])
    except ValueError as e:
        raise CommandParseError(line, line_number, f"bad key: {e}") from None

    value = tokens[2] if len(tokens) == 3 else None
    return Command(type=command_type, key=key, value=value, line=text)


def parse_commands(
    lines: Iterable[str], key_parser: Callable[[str], Any] = int
) -> Iterator[Command]:
    """Parse every command in lines, skipping blanks and comments."""
    for number, line in enumerate(lines, start=1):
        command = parse_command(line, key_parser, number)
        if command is not None:
            yield command
