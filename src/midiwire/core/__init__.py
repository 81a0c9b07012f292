"""Framing core: clock, status table, assembler, codec and dispatcher."""

from .assembler import AssemblyState, MessageAssembler, feed
from .clock import ClockSource
from .codec import decode, encode
from .dispatcher import Dispatcher

__all__ = [
    "AssemblyState",
    "ClockSource",
    "Dispatcher",
    "MessageAssembler",
    "decode",
    "encode",
    "feed",
]
