"""MIDI output manager exposing indexed destinations."""

import logging
import threading
from typing import Optional

import mido

from .base_manager import BaseMidiManager

logger = logging.getLogger(__name__)


class MidoDestination:
    """
    A mido output port accepting encoded bytes.

    Bytes go through a mido.Parser, so a message written one byte at a time
    (e.g. a SysEx streamed as raw bytes) is sent once it is complete.
    """

    def __init__(self, port: mido.ports.BaseOutput):
        self._port = port
        self._parser = mido.Parser()
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._port.name

    def send(self, data: bytes, message_count: int = 1, first_offset: int = 0) -> None:
        """
        Send encoded bytes.

        Args:
            data: Encoded MIDI bytes
            message_count: Number of logical messages in `data` (for logging)
            first_offset: Offset of the first message within `data`
        """
        with self._lock:
            self._parser.feed(data[first_offset:])
            sent = 0
            while (message := self._parser.get_message()) is not None:
                self._port.send(message)
                sent += 1

        if sent:
            logger.debug(f"Sent {sent} message(s) to {self.name} ({message_count} requested)")

    def __repr__(self) -> str:
        return f"MidoDestination({self.name!r})"


class MidiOutputManager(BaseMidiManager[mido.ports.BaseOutput]):
    """Opens MIDI outputs and exposes them as destinations in open order."""

    def __init__(self, port_pattern: Optional[str] = None):
        """
        Initialize MIDI output manager.

        Args:
            port_pattern: Only open outputs whose name contains this text
        """
        super().__init__(port_pattern)
        self._destinations: dict[str, MidoDestination] = {}

    def _get_available_ports(self) -> list[str]:
        return mido.get_output_names()

    def _open_port(self, port_name: str) -> mido.ports.BaseOutput:
        port = mido.open_output(port_name)
        self._destinations[port_name] = MidoDestination(port)
        return port

    def _get_port_type_name(self) -> str:
        return "output"

    def _on_port_closed(self, port_name: str) -> None:
        self._destinations.pop(port_name, None)

    @property
    def destinations(self) -> list[MidoDestination]:
        """Open outputs, addressed by index."""
        with self._port_lock:
            return [self._destinations[name] for name in self._ports if name in self._destinations]
