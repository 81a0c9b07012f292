"""
Packet reassembly: raw packets in, logical messages out.

Packet Walk
-----------

::

    RawPacket(data, timestamp)
          ↓
    advance clock → delta for this packet
          ↓
    SysEx still open from an earlier packet?
      yes → whole packet is SysEx payload; frame ends when the packet's
            last byte is 0xF7
      no  → scan status bytes from offset 0:

            0x80-0xBF  3 bytes      0xF0  SysEx, rest of packet
            0xC0-0xDF  2 bytes      0xF1  time code, 2 bytes (filterable)
            0xE0-0xEF  3 bytes      0xF2  song position, 3 bytes
                                    0xF3  song select, 2 bytes
                                    0xF8  timing clock, 1 byte (filterable)
                                    0xFE  active sensing, 1 byte (filterable)
                                    other 1 byte

Running status is not supported: every message starts with its own status
byte. A data byte where a status byte is expected, a message cut short by
the end of the packet, or a status byte inside a message's data ends the
scan of that packet. Messages completed before that point are kept.

Delta Times
-----------

The first packet from a source has delta 0. After that the delta is the
time since the previous packet; a zero timestamp is replaced by a clock
reading. The delta goes to the first message completed from the packet,
later messages in the same packet get 0, and SysEx continuation packets
contribute none. A SysEx spanning packets carries the delta of the packet
that opened it.
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional

from midiwire.models.config import FilterConfig
from midiwire.models.enums import SystemStatus
from midiwire.models.messages import LogicalMessage
from midiwire.models.packet import NO_TIMESTAMP, RawPacket

from .clock import ClockSource
from .codec import decode
from .status import SYSTEM_COMMON_DATA_LENGTH, channel_message_length, is_channel_status, is_status

logger = logging.getLogger(__name__)


@dataclass
class AssemblyState:
    """
    Per-source reassembly state.

    Attributes:
        last_timestamp: Ticks of the previous packet
        first_packet_seen: False until the first non-empty packet
        sysex_continuation: True while a SysEx frame is open across packets
        accumulator: Bytes of the single message being assembled
        sysex_delta_ms: Delta of the packet that opened the current SysEx
    """

    last_timestamp: int = 0
    first_packet_seen: bool = False
    sysex_continuation: bool = False
    accumulator: bytearray = field(default_factory=bytearray)
    sysex_delta_ms: float = 0.0

    def reset(self) -> None:
        """Forget everything, as if the source had just connected."""
        self.last_timestamp = 0
        self.first_packet_seen = False
        self.sysex_continuation = False
        self.accumulator.clear()
        self.sysex_delta_ms = 0.0


def _advance_clock(state: AssemblyState, timestamp: int, clock: ClockSource) -> float:
    """Record the packet time and return the elapsed milliseconds."""
    now = timestamp if timestamp != NO_TIMESTAMP else clock.now()

    delta_ms = 0.0
    if not state.first_packet_seen:
        state.first_packet_seen = True
    elif not state.sysex_continuation:
        delta_ms = clock.to_millis(max(0, now - state.last_timestamp))

    state.last_timestamp = now
    return delta_ms


def _continue_sysex(state: AssemblyState, data: bytes, filters: FilterConfig) -> list[LogicalMessage]:
    # An empty accumulator means the frame start was filtered; drop the rest too
    if not filters.ignore_sysex and state.accumulator:
        state.accumulator.extend(data)

    if data[-1] != SystemStatus.SYSEX_END:
        return []

    state.sysex_continuation = False
    messages: list[LogicalMessage] = []
    if state.accumulator and not filters.ignore_sysex:
        messages = decode(state.accumulator, state.sysex_delta_ms)
    state.accumulator.clear()
    state.sysex_delta_ms = 0.0
    return messages


def _scan(
    state: AssemblyState, data: bytes, filters: FilterConfig, delta_ms: float, source: str
) -> list[LogicalMessage]:
    messages: list[LogicalMessage] = []
    size = len(data)
    offset = 0

    while offset < size:
        status = data[offset]

        if not is_status(status):
            logger.debug(
                f"Malformed packet from {source}: data byte 0x{status:02X} at offset {offset}, "
                f"dropping {size - offset} byte(s)"
            )
            break

        if is_channel_status(status):
            length = channel_message_length(status)
        elif status == SystemStatus.SYSEX:
            state.sysex_continuation = data[-1] != SystemStatus.SYSEX_END
            if filters.ignore_sysex:
                break
            length = size - offset
        elif status == SystemStatus.TIME_CODE and filters.ignore_realtime_clock:
            offset += 2
            continue
        elif status in SYSTEM_COMMON_DATA_LENGTH:
            length = 1 + SYSTEM_COMMON_DATA_LENGTH[status]
        elif status == SystemStatus.TIMING_CLOCK and filters.ignore_realtime_clock:
            offset += 1
            continue
        elif status == SystemStatus.ACTIVE_SENSING and filters.ignore_active_sensing:
            offset += 1
            continue
        else:
            length = 1

        end = offset + length
        if status != SystemStatus.SYSEX and (
            end > size or any(is_status(b) for b in data[offset + 1:end])
        ):
            logger.debug(
                f"Malformed packet from {source}: incomplete 0x{status:02X} message at offset {offset}, "
                f"dropping {size - offset} byte(s)"
            )
            break

        state.accumulator.extend(data[offset:end])
        offset = end

        if state.sysex_continuation:
            # SysEx runs to the end of the packet and stays open
            state.sysex_delta_ms = delta_ms
            return messages

        messages.extend(decode(state.accumulator, delta_ms))
        state.accumulator.clear()
        delta_ms = 0.0

    state.accumulator.clear()
    return messages


def feed(
    state: AssemblyState,
    packet: RawPacket,
    filters: FilterConfig,
    clock: ClockSource,
) -> list[LogicalMessage]:
    """
    Reassemble one packet.

    The packet is processed completely before returning, so `state` is
    consistent afterwards: the accumulator is empty unless a SysEx frame is
    still open.

    Args:
        state: Reassembly state of the packet's source
        packet: The packet to process
        filters: Filter flags for this packet
        clock: Clock used for zero timestamps and tick conversion

    Returns:
        Messages completed by this packet, in byte order
    """
    if not packet.data:
        return []

    delta_ms = _advance_clock(state, packet.timestamp, clock)

    if state.sysex_continuation:
        return _continue_sysex(state, packet.data, filters)

    return _scan(state, packet.data, filters, delta_ms, packet.source)


class MessageAssembler:
    """
    Owns the reassembly state of one input source.

    Not thread-safe: packets of one source must be fed from one thread at a
    time. Separate sources use separate assemblers.

    Example:
        ```python
        assembler = MessageAssembler(source="keys")
        for message in assembler.feed(RawPacket(data=bytes([0x90, 60, 100]), timestamp=42)):
            print(message)
        ```
    """

    def __init__(
        self,
        source: str = "default",
        clock: Optional[ClockSource] = None,
        filters: Optional[FilterConfig] = None,
    ):
        """
        Initialize assembler.

        Args:
            source: Identifier of the input this assembler serves
            clock: Clock for timestamps (defaults to a perf_counter clock)
            filters: Default filter flags (defaults to FilterConfig())
        """
        self.source = source
        self.clock = clock or ClockSource()
        self.filters = filters or FilterConfig()
        self.state = AssemblyState()

    def feed(self, packet: RawPacket, filters: Optional[FilterConfig] = None) -> list[LogicalMessage]:
        """
        Reassemble one packet.

        Args:
            packet: Packet from this assembler's source
            filters: Overrides the assembler's filters for this packet

        Returns:
            Completed messages in byte order
        """
        return feed(self.state, packet, filters or self.filters, self.clock)

    def feed_all(
        self, packets: Iterable[RawPacket], filters: Optional[FilterConfig] = None
    ) -> list[LogicalMessage]:
        """Reassemble one delivery of several packets, in order."""
        snapshot = filters or self.filters
        messages: list[LogicalMessage] = []
        for packet in packets:
            messages.extend(feed(self.state, packet, snapshot, self.clock))
        return messages

    def stream(
        self, packets: Iterable[RawPacket], filters: Optional[FilterConfig] = None
    ) -> Iterator[LogicalMessage]:
        """
        Lazily reassemble a stream of packets.

        Each packet is pulled and processed only when the previous packet's
        messages have been consumed. Filters are read per packet unless given.
        """
        for packet in packets:
            yield from feed(self.state, packet, filters or self.filters, self.clock)

    def reset(self) -> None:
        """Drop all state, abandoning any open SysEx."""
        if self.state.sysex_continuation:
            logger.debug(f"Abandoning incomplete SysEx from {self.source}")
        self.state.reset()
