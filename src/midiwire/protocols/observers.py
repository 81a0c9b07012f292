"""Observer protocols for decoded MIDI traffic.

- MessageSink: the execution engine's intake, one callback per message kind
- MessageMonitor: sees every message whole, with its source and delta time

Callbacks run on the thread that delivered the packet (for the mido
transport, mido's I/O thread), so implementations should be fast and
thread-safe.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from midiwire.models import LogicalMessage


@runtime_checkable
class MessageSink(Protocol):
    """
    Intake surface of the execution engine.

    The dispatcher skips callbacks a sink does not define, so a partial
    implementation is fine at runtime; the protocol lists the full surface.
    """

    def on_note_on(self, channel: int, pitch: int, velocity: int) -> None:
        ...

    def on_note_off(self, channel: int, pitch: int, velocity: int) -> None:
        ...

    def on_control_change(self, channel: int, controller: int, value: int) -> None:
        ...

    def on_program_change(self, channel: int, value: int) -> None:
        ...

    def on_pitch_bend(self, channel: int, value: int) -> None:
        """Value is 0-16383, center 8192."""
        ...

    def on_aftertouch(self, channel: int, value: int) -> None:
        ...

    def on_poly_aftertouch(self, channel: int, pitch: int, value: int) -> None:
        ...

    def on_sysex_byte(self, channel: int, byte: int) -> None:
        """One SysEx byte; each frame ends with 0xF7."""
        ...

    def on_raw_byte(self, channel: int, byte: int) -> None:
        """System or unrecognized byte."""
        ...


@runtime_checkable
class MessageMonitor(Protocol):
    """Observer that receives every decoded message unchanged."""

    def on_midi_message(self, source: str, message: "LogicalMessage") -> None:
        """
        Handle a decoded message.

        Args:
            source: Identifier of the input the message arrived on
            message: The decoded message, including its delta time
        """
        ...
