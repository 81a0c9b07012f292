"""
Byte <-> message mapping.

decode() turns one framed message (status byte + data bytes) into logical
messages; encode() turns an outgoing command into bytes. Both go through
the channel status table in `midiwire.core.status`.

SysEx convention: a frame `F0 d1 .. dn F7` decodes to one SysexByte per
byte after the 0xF0 start byte, so the payload is followed by the 0xF7
terminator. A consumer can rebuild frames by collecting bytes up to 0xF7.
"""

from collections.abc import Sequence

from midiwire.models.commands import (
    AftertouchCommand,
    ControlChangeCommand,
    NoteOffCommand,
    NoteOnCommand,
    OutgoingCommand,
    PitchBendCommand,
    PolyAftertouchCommand,
    ProgramChangeCommand,
    RawByteCommand,
)
from midiwire.models.enums import MessageKind, SystemStatus
from midiwire.models.messages import (
    Aftertouch,
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

from .status import channel_entry, status_byte

SYSTEM_CHANNEL = 1


def _raw_bytes(data: Sequence[int], delta_ms: float) -> list[LogicalMessage]:
    return [
        RawByte(channel=SYSTEM_CHANNEL, byte=b, delta_ms=delta_ms if i == 0 else 0.0)
        for i, b in enumerate(data)
    ]


def _sysex_bytes(data: Sequence[int], delta_ms: float) -> list[LogicalMessage]:
    return [
        SysexByte(channel=SYSTEM_CHANNEL, byte=b, delta_ms=delta_ms if i == 0 else 0.0)
        for i, b in enumerate(data[1:])
    ]


def decode(data: Sequence[int], delta_ms: float = 0.0) -> list[LogicalMessage]:
    """
    Decode one framed MIDI message.

    Args:
        data: Status byte followed by its data bytes (non-empty)
        delta_ms: Delta time carried by the first returned message

    Returns:
        One message for channel voice data, one SysexByte per payload byte
        for SysEx, one RawByte per byte for anything else
    """
    status = data[0]

    if status == SystemStatus.SYSEX:
        return _sysex_bytes(data, delta_ms)

    entry = channel_entry(status)
    if entry is None or len(data) != 1 + entry.data_length or any(b & 0x80 for b in data[1:]):
        return _raw_bytes(data, delta_ms)

    channel = (status & 0x0F) + 1

    match entry.kind:
        case MessageKind.NOTE_OFF:
            return [NoteOff(channel=channel, pitch=data[1], velocity=data[2], delta_ms=delta_ms)]
        case MessageKind.NOTE_ON:
            return [NoteOn(channel=channel, pitch=data[1], velocity=data[2], delta_ms=delta_ms)]
        case MessageKind.POLY_AFTERTOUCH:
            return [PolyAftertouch(channel=channel, pitch=data[1], value=data[2], delta_ms=delta_ms)]
        case MessageKind.CONTROL_CHANGE:
            return [ControlChange(channel=channel, controller=data[1], value=data[2], delta_ms=delta_ms)]
        case MessageKind.PROGRAM_CHANGE:
            return [ProgramChange(channel=channel, value=data[1], delta_ms=delta_ms)]
        case MessageKind.AFTERTOUCH:
            return [Aftertouch(channel=channel, value=data[1], delta_ms=delta_ms)]
        case MessageKind.PITCH_BEND:
            # lsb first, then msb
            return [PitchBend(channel=channel, value=data[1] | (data[2] << 7), delta_ms=delta_ms)]

    return _raw_bytes(data, delta_ms)


def encode(command: OutgoingCommand) -> bytes:
    """
    Encode an outgoing command into MIDI bytes (1-3 bytes).

    Args:
        command: A validated outgoing command

    Returns:
        The framed message
    """
    match command:
        case RawByteCommand(byte=byte):
            return bytes([byte])
        case PitchBendCommand(channel=channel, value=value):
            # lsb first, then msb
            return bytes([status_byte(command.kind, channel), value & 0x7F, (value >> 7) & 0x7F])
        case NoteOnCommand() | NoteOffCommand():
            return bytes([status_byte(command.kind, command.channel), command.pitch, command.velocity])
        case ControlChangeCommand():
            return bytes([status_byte(command.kind, command.channel), command.controller, command.value])
        case PolyAftertouchCommand():
            return bytes([status_byte(command.kind, command.channel), command.pitch, command.value])
        case ProgramChangeCommand() | AftertouchCommand():
            return bytes([status_byte(command.kind, command.channel), command.value])

    raise TypeError(f"Cannot encode {type(command).__name__}")
