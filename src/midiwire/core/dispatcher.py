"""
Routing between the transport and the execution engine.

Incoming::

    transport → handle_packets(source, packets)
                    ↓ one MessageAssembler per source
                LogicalMessage
                    ↓
                sinks:    on_note_on(channel, pitch, velocity), ...
                monitors: on_midi_message(source, message)

Outgoing::

    engine → send_note_on(...) / send(command)
                    ↓ encode()
                bytes → transport.destinations[index].send(...)
                        (every destination when index is None)
"""

import logging
from collections.abc import Iterable
from threading import Lock
from typing import Optional

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
from midiwire.models.config import FilterConfig
from midiwire.models.messages import LogicalMessage
from midiwire.models.packet import RawPacket
from midiwire.protocols import Destination, MessageMonitor, MessageSink, Transport
from midiwire.utils.observer import ObserverManager

from .assembler import MessageAssembler
from .clock import ClockSource
from .codec import encode

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Connects a transport to message sinks and routes commands back out.

    Thread Safety:
        Packets from one source must arrive serially; different sources may
        be handled concurrently. Sends may come from any thread.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        filters: Optional[FilterConfig] = None,
        clock: Optional[ClockSource] = None,
        default_destination: Optional[int] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            transport: Owner of the output destinations (None = receive only)
            filters: Initial filter flags (defaults to FilterConfig())
            clock: Clock shared by all assemblers
            default_destination: Index used for commands that name no destination
        """
        self._transport = transport
        self._filters = filters or FilterConfig()
        self._clock = clock or ClockSource()
        self._default_destination = default_destination

        self._assemblers: dict[str, MessageAssembler] = {}
        self._assemblers_lock = Lock()

        self._sinks = ObserverManager[MessageSink](observer_type_name="sink")
        self._monitors = ObserverManager[MessageMonitor](observer_type_name="monitor")

    # =================================================================
    # Configuration
    # =================================================================

    @property
    def filters(self) -> FilterConfig:
        """Filter flags applied to the next packet."""
        return self._filters

    @filters.setter
    def filters(self, filters: FilterConfig) -> None:
        self._filters = filters
        logger.info(f"Input filters changed: {filters}")

    @property
    def clock(self) -> ClockSource:
        return self._clock

    def enable_network(self, enabled: bool) -> None:
        """Forward a network session toggle to the transport."""
        if self._transport is None:
            logger.warning("Cannot toggle network session: no transport attached")
            return
        self._transport.enable_network(enabled)

    # =================================================================
    # Observers
    # =================================================================

    def register_sink(self, sink: MessageSink) -> None:
        self._sinks.register(sink)

    def unregister_sink(self, sink: MessageSink) -> None:
        self._sinks.unregister(sink)

    def register_monitor(self, monitor: MessageMonitor) -> None:
        self._monitors.register(monitor)

    def unregister_monitor(self, monitor: MessageMonitor) -> None:
        self._monitors.unregister(monitor)

    # =================================================================
    # Incoming
    # =================================================================

    def assembler_for(self, source: str) -> MessageAssembler:
        """Get (or create) the assembler of a source."""
        with self._assemblers_lock:
            assembler = self._assemblers.get(source)
            if assembler is None:
                assembler = MessageAssembler(source=source, clock=self._clock)
                self._assemblers[source] = assembler
                logger.debug(f"Created assembler for source: {source}")
            return assembler

    def remove_source(self, source: str) -> None:
        """Discard a source's state, abandoning any incomplete SysEx."""
        with self._assemblers_lock:
            assembler = self._assemblers.pop(source, None)
        if assembler is not None:
            assembler.reset()
            logger.debug(f"Removed source: {source}")

    @property
    def sources(self) -> list[str]:
        with self._assemblers_lock:
            return list(self._assemblers)

    def handle_packets(self, source: str, packets: Iterable[RawPacket]) -> list[LogicalMessage]:
        """
        Process one delivery of packets from a source.

        Filters are snapshotted once for the whole delivery. Every resulting
        message is routed before this returns.

        Args:
            source: Identifier of the input the packets arrived on
            packets: Packets in arrival order

        Returns:
            The routed messages, in order
        """
        assembler = self.assembler_for(source)
        messages = assembler.feed_all(packets, self._filters)
        for message in messages:
            self.dispatch(source, message)
        return messages

    def handle_packet(self, packet: RawPacket) -> list[LogicalMessage]:
        """Process a single packet from `packet.source`."""
        return self.handle_packets(packet.source, [packet])

    def dispatch(self, source: str, message: LogicalMessage) -> None:
        """Route one decoded message to monitors and sinks."""
        self._monitors.notify("on_midi_message", source, message)
        if message.callback:
            self._sinks.notify(message.callback, *message.payload())

    # =================================================================
    # Outgoing
    # =================================================================

    def send(self, command: OutgoingCommand) -> bool:
        """
        Encode a command and hand it to the transport.

        Args:
            command: Command to send; `destination` picks one output by index,
                     None uses the default destination or every output

        Returns:
            True if handed to at least one destination, False if dropped
        """
        if self._transport is None:
            logger.warning(f"Cannot send {command.kind.value}: no transport attached")
            return False

        data = encode(command)
        destinations = self._transport.destinations
        index = command.destination if command.destination is not None else self._default_destination

        if index is None:
            if not destinations:
                logger.debug(f"Dropped {command.kind.value}: no destinations")
                return False
            for destination in destinations:
                self._deliver(destination, data)
            return True

        if not 0 <= index < len(destinations):
            logger.warning(
                f"Cannot send {command.kind.value}: destination {index} not found "
                f"({len(destinations)} available)"
            )
            return False

        self._deliver(destinations[index], data)
        return True

    def _deliver(self, destination: Destination, data: bytes) -> None:
        try:
            destination.send(data, 1, 0)
        except Exception as e:
            logger.error(f"Error sending to {destination.name}: {e}")

    def send_note_on(self, channel: int, pitch: int, velocity: int, destination: Optional[int] = None) -> bool:
        return self.send(NoteOnCommand(channel=channel, pitch=pitch, velocity=velocity, destination=destination))

    def send_note_off(self, channel: int, pitch: int, velocity: int = 0, destination: Optional[int] = None) -> bool:
        return self.send(NoteOffCommand(channel=channel, pitch=pitch, velocity=velocity, destination=destination))

    def send_control_change(
        self, channel: int, controller: int, value: int, destination: Optional[int] = None
    ) -> bool:
        return self.send(
            ControlChangeCommand(channel=channel, controller=controller, value=value, destination=destination)
        )

    def send_program_change(self, channel: int, value: int, destination: Optional[int] = None) -> bool:
        return self.send(ProgramChangeCommand(channel=channel, value=value, destination=destination))

    def send_pitch_bend(self, channel: int, value: int, destination: Optional[int] = None) -> bool:
        return self.send(PitchBendCommand(channel=channel, value=value, destination=destination))

    def send_aftertouch(self, channel: int, value: int, destination: Optional[int] = None) -> bool:
        return self.send(AftertouchCommand(channel=channel, value=value, destination=destination))

    def send_poly_aftertouch(
        self, channel: int, pitch: int, value: int, destination: Optional[int] = None
    ) -> bool:
        return self.send(
            PolyAftertouchCommand(channel=channel, pitch=pitch, value=value, destination=destination)
        )

    def send_raw_byte(self, byte: int, destination: Optional[int] = None) -> bool:
        return self.send(RawByteCommand(byte=byte, destination=destination))
