"""MIDI input manager producing raw packets."""

import logging
from collections.abc import Callable
from typing import Optional

import mido

from midiwire.core.clock import ClockSource
from midiwire.models.packet import RawPacket

from .base_manager import BaseMidiManager

logger = logging.getLogger(__name__)


class MidiInputManager(BaseMidiManager[mido.ports.BaseInput]):
    """
    Opens MIDI inputs and turns each received message into a RawPacket.

    mido delivers whole messages; their bytes become one packet stamped
    with the clock at arrival, with the port name as source.
    """

    def __init__(self, port_pattern: Optional[str] = None, clock: Optional[ClockSource] = None):
        """
        Initialize MIDI input manager.

        Args:
            port_pattern: Only open inputs whose name contains this text
            clock: Clock used to stamp packets
        """
        super().__init__(port_pattern)
        self._clock = clock or ClockSource()
        self._packet_callback: Optional[Callable[[RawPacket], None]] = None
        self._closed_callback: Optional[Callable[[str], None]] = None

    def on_packet(self, callback: Callable[[RawPacket], None]) -> None:
        """
        Register callback for incoming packets.

        Callback is executed in mido's internal I/O thread - keep it fast!
        """
        self._packet_callback = callback

    def on_port_closed(self, callback: Callable[[str], None]) -> None:
        """Register callback receiving the name of each closed input."""
        self._closed_callback = callback

    def _get_available_ports(self) -> list[str]:
        return mido.get_input_names()

    def _open_port(self, port_name: str) -> mido.ports.BaseInput:
        port = mido.open_input(port_name, callback=self._make_callback(port_name))
        self._accept_all_types(port)
        return port

    @staticmethod
    def _accept_all_types(port: mido.ports.BaseInput) -> None:
        """
        Let every message type through the backend.

        mido's rtmidi backend opens inputs with active sensing ignored, so
        0xFE would never reach the dispatcher. Filtering is done there from
        FilterConfig instead.
        """
        rt = getattr(port, "_rt", None)
        if rt is None:
            return
        rt.ignore_types(sysex=False, timing=False, active_sense=False)
        logger.debug(f"Backend type filtering disabled for {port.name}")

    def _get_port_type_name(self) -> str:
        return "input"

    def _on_port_closed(self, port_name: str) -> None:
        if self._closed_callback:
            self._closed_callback(port_name)

    def _make_callback(self, port_name: str) -> Callable[[mido.Message], None]:
        def callback(msg: mido.Message) -> None:
            self._handle_message(port_name, msg)
        return callback

    def _handle_message(self, port_name: str, msg: mido.Message) -> None:
        """
        MIDI message callback - called from mido's internal I/O thread.

        Converts the message to a packet and passes it on.
        """
        try:
            packet = RawPacket(data=bytes(msg.bytes()), timestamp=self._clock.now(), source=port_name)
            logger.debug(f"Packet from {port_name}: {packet.hex()}")
            if self._packet_callback:
                self._packet_callback(packet)
        except Exception as e:
            logger.error(f"Error in MIDI input callback for {port_name}: {e}")
