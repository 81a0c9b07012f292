"""Data models for MIDI framing and dispatch."""

from .commands import (
    AftertouchCommand,
    AnyCommand,
    ChannelCommand,
    ControlChangeCommand,
    NoteOffCommand,
    NoteOnCommand,
    OutgoingCommand,
    PitchBendCommand,
    PolyAftertouchCommand,
    ProgramChangeCommand,
    RawByteCommand,
)
from .config import AppConfig, FilterConfig
from .enums import MessageKind, SystemStatus
from .messages import (
    PITCH_BEND_CENTER,
    PITCH_BEND_MAX,
    Aftertouch,
    AnyMessage,
    ControlChange,
    LogicalMessage,
    NoteOff,
    NoteOn,
    PitchBend,
    PolyAftertouch,
    ProgramChange,
    RawByte,
    SysexByte,
)
from .packet import NO_TIMESTAMP, RawPacket

__all__ = [
    # Config
    "AppConfig",
    "FilterConfig",
    # Enums
    "MessageKind",
    "SystemStatus",
    # Packets
    "NO_TIMESTAMP",
    "RawPacket",
    # Messages
    "PITCH_BEND_CENTER",
    "PITCH_BEND_MAX",
    "Aftertouch",
    "AnyMessage",
    "ControlChange",
    "LogicalMessage",
    "NoteOff",
    "NoteOn",
    "PitchBend",
    "PolyAftertouch",
    "ProgramChange",
    "RawByte",
    "SysexByte",
    # Commands
    "AftertouchCommand",
    "AnyCommand",
    "ChannelCommand",
    "ControlChangeCommand",
    "NoteOffCommand",
    "NoteOnCommand",
    "OutgoingCommand",
    "PitchBendCommand",
    "PolyAftertouchCommand",
    "ProgramChangeCommand",
    "RawByteCommand",
]
