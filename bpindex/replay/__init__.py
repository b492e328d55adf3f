"""
Command replay driver layered on top of the index.
"""

from bpindex.replay.command import Command, CommandType, parse_command, parse_commands
from bpindex.replay.renderer import render_snapshot, render_tree
from bpindex.replay.replayer import Frame, Replayer

__all__ = [
    "Command",
    "CommandType",
    "Frame",
    "Replayer",
    "parse_command",
    "parse_commands",
    "render_snapshot",
    "render_tree",
]
