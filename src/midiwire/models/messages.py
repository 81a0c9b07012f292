"""Decoded (incoming) MIDI messages.

Every variant is a frozen Pydantic model with a `kind` discriminator, a
1-based `channel` and the `delta_ms` elapsed since the previous message
from the same source. Each variant also names the sink callback it is
routed to and the positional payload that callback receives.
"""

from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import MessageKind

Channel = Annotated[int, Field(ge=1, le=16, description="MIDI channel (1-16)")]
DataByte = Annotated[int, Field(ge=0, le=127)]
Byte = Annotated[int, Field(ge=0, le=255)]

PITCH_BEND_MAX = 16383
PITCH_BEND_CENTER = 8192


class LogicalMessage(BaseModel):
    """Base for decoded messages; without a `callback` it reaches monitors only."""

    model_config = ConfigDict(frozen=True)

    callback: ClassVar[str] = ""

    channel: Channel = 1
    delta_ms: float = Field(default=0.0, ge=0.0, description="Milliseconds since previous message")

    def payload(self) -> tuple[int, ...]:
        """Positional arguments passed to the sink callback."""
        return (self.channel,)


class NoteOn(LogicalMessage):
    kind: Literal[MessageKind.NOTE_ON] = MessageKind.NOTE_ON
    callback: ClassVar[str] = "on_note_on"

    pitch: DataByte
    velocity: DataByte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.pitch, self.velocity)


class NoteOff(LogicalMessage):
    kind: Literal[MessageKind.NOTE_OFF] = MessageKind.NOTE_OFF
    callback: ClassVar[str] = "on_note_off"

    pitch: DataByte
    velocity: DataByte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.pitch, self.velocity)


class ControlChange(LogicalMessage):
    kind: Literal[MessageKind.CONTROL_CHANGE] = MessageKind.CONTROL_CHANGE
    callback: ClassVar[str] = "on_control_change"

    controller: DataByte
    value: DataByte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.controller, self.value)


class ProgramChange(LogicalMessage):
    kind: Literal[MessageKind.PROGRAM_CHANGE] = MessageKind.PROGRAM_CHANGE
    callback: ClassVar[str] = "on_program_change"

    value: DataByte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.value)


class PitchBend(LogicalMessage):
    """Pitch bend, 14-bit unsigned (0-16383, center 8192)."""

    kind: Literal[MessageKind.PITCH_BEND] = MessageKind.PITCH_BEND
    callback: ClassVar[str] = "on_pitch_bend"

    value: int = Field(ge=0, le=PITCH_BEND_MAX)

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.value)


class Aftertouch(LogicalMessage):
    kind: Literal[MessageKind.AFTERTOUCH] = MessageKind.AFTERTOUCH
    callback: ClassVar[str] = "on_aftertouch"

    value: DataByte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.value)


class PolyAftertouch(LogicalMessage):
    kind: Literal[MessageKind.POLY_AFTERTOUCH] = MessageKind.POLY_AFTERTOUCH
    callback: ClassVar[str] = "on_poly_aftertouch"

    pitch: DataByte
    value: DataByte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.pitch, self.value)


class SysexByte(LogicalMessage):
    """One byte of a SysEx frame. The 0xF7 terminator is the last byte of each frame."""

    kind: Literal[MessageKind.SYSEX_BYTE] = MessageKind.SYSEX_BYTE
    callback: ClassVar[str] = "on_sysex_byte"

    byte: Byte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.byte)


class RawByte(LogicalMessage):
    """A system real-time/common byte, or any byte of an unrecognized shape."""

    kind: Literal[MessageKind.RAW_BYTE] = MessageKind.RAW_BYTE
    callback: ClassVar[str] = "on_raw_byte"

    byte: Byte

    def payload(self) -> tuple[int, ...]:
        return (self.channel, self.byte)


AnyMessage = Annotated[
    Union[
        NoteOn,
        NoteOff,
        ControlChange,
        ProgramChange,
        PitchBend,
        Aftertouch,
        PolyAftertouch,
        SysexByte,
        RawByte,
    ],
    Field(discriminator="kind"),
]
