"""Outgoing MIDI commands.

Commands mirror the decoded messages. Field constraints make an out-of-range
channel or data value impossible to construct, so encoding never fails.
`destination` selects one output by index; None sends to every output.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import MessageKind
from .messages import PITCH_BEND_MAX, Byte, Channel, DataByte


class OutgoingCommand(BaseModel):
    """Base for outgoing commands."""

    model_config = ConfigDict(frozen=True)

    kind: MessageKind
    destination: int | None = Field(
        default=None, description="Output index, or None for all outputs"
    )


class ChannelCommand(OutgoingCommand):
    """Command addressed to a MIDI channel."""

    channel: Channel = 1


class NoteOnCommand(ChannelCommand):
    kind: Literal[MessageKind.NOTE_ON] = MessageKind.NOTE_ON
    pitch: DataByte
    velocity: DataByte


class NoteOffCommand(ChannelCommand):
    kind: Literal[MessageKind.NOTE_OFF] = MessageKind.NOTE_OFF
    pitch: DataByte
    velocity: DataByte = 0


class ControlChangeCommand(ChannelCommand):
    kind: Literal[MessageKind.CONTROL_CHANGE] = MessageKind.CONTROL_CHANGE
    controller: DataByte
    value: DataByte


class ProgramChangeCommand(ChannelCommand):
    kind: Literal[MessageKind.PROGRAM_CHANGE] = MessageKind.PROGRAM_CHANGE
    value: DataByte


class PitchBendCommand(ChannelCommand):
    kind: Literal[MessageKind.PITCH_BEND] = MessageKind.PITCH_BEND
    value: int = Field(ge=0, le=PITCH_BEND_MAX)


class AftertouchCommand(ChannelCommand):
    kind: Literal[MessageKind.AFTERTOUCH] = MessageKind.AFTERTOUCH
    value: DataByte


class PolyAftertouchCommand(ChannelCommand):
    kind: Literal[MessageKind.POLY_AFTERTOUCH] = MessageKind.POLY_AFTERTOUCH
    pitch: DataByte
    value: DataByte


class RawByteCommand(OutgoingCommand):
    """A single byte written as-is, e.g. one byte of a SysEx being streamed out."""

    kind: Literal[MessageKind.RAW_BYTE] = MessageKind.RAW_BYTE
    byte: Byte


AnyCommand = Union[
    NoteOnCommand,
    NoteOffCommand,
    ControlChangeCommand,
    ProgramChangeCommand,
    PitchBendCommand,
    AftertouchCommand,
    PolyAftertouchCommand,
    RawByteCommand,
]
