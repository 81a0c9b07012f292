"""Base MIDI port manager."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

import mido

from midiwire.exceptions import MidiPortNotFoundError, wrap_port_error

logger = logging.getLogger(__name__)

# Type variable for port types (BaseInput or BaseOutput)
PortType = TypeVar('PortType', bound=mido.ports.BasePort)


class BaseMidiManager(ABC, Generic[PortType]):
    """
    Opens every MIDI port matching a name pattern and keeps them in open order.

    Subclasses implement the port-specific operations. Device discovery and
    hot-plug handling are left to the backend; call `open()` again to pick
    up ports added since.
    """

    def __init__(self, port_pattern: Optional[str] = None):
        """
        Initialize manager.

        Args:
            port_pattern: Only open ports whose name contains this text.
                          None opens all ports.
        """
        self._port_pattern = port_pattern
        self._ports: dict[str, PortType] = {}
        self._port_lock = threading.Lock()

    @abstractmethod
    def _get_available_ports(self) -> list[str]:
        """List port names offered by the backend."""
        pass

    @abstractmethod
    def _open_port(self, port_name: str) -> PortType:
        """
        Open a MIDI port.

        Raises:
            Exception: If port cannot be opened
        """
        pass

    @abstractmethod
    def _get_port_type_name(self) -> str:
        """Return "input" or "output" for logging."""
        pass

    def _on_port_closed(self, port_name: str) -> None:
        """Hook called after a port is closed."""
        pass

    def matching_ports(self) -> list[str]:
        """Available port names containing the port pattern."""
        available_ports = self._get_available_ports()
        if not self._port_pattern:
            return available_ports
        return [p for p in available_ports if self._port_pattern in p]

    def open(self, require: bool = False) -> list[str]:
        """
        Open all matching ports that are not open yet.

        Args:
            require: Raise if no port matches

        Returns:
            Names of all open ports

        Raises:
            MidiPortNotFoundError: If `require` and nothing matched
            MidiPortError: If a matching port fails to open
        """
        port_type = self._get_port_type_name()
        matching = self.matching_ports()

        if not matching:
            if require:
                raise MidiPortNotFoundError(self._port_pattern or "*", direction=port_type)
            logger.warning(f"No matching MIDI {port_type} port found")

        with self._port_lock:
            for port_name in matching:
                if port_name in self._ports:
                    continue
                try:
                    self._ports[port_name] = self._open_port(port_name)
                except Exception as e:
                    raise wrap_port_error(e, port_name, port_type) from e
                logger.info(f"Connected to MIDI {port_type}: {port_name}")
            return list(self._ports)

    def close(self) -> None:
        """Close all open ports."""
        with self._port_lock:
            ports = list(self._ports.items())
            self._ports.clear()

        for port_name, port in ports:
            try:
                port.close()
            except Exception as e:
                logger.error(f"Error closing MIDI {self._get_port_type_name()} port {port_name}: {e}")
            self._on_port_closed(port_name)

        logger.debug(f"Midi{self._get_port_type_name().capitalize()}Manager closed")

    @property
    def open_ports(self) -> list[str]:
        """Names of open ports, in open order."""
        with self._port_lock:
            return list(self._ports)

    @property
    def is_connected(self) -> bool:
        """True if at least one port is open."""
        with self._port_lock:
            return bool(self._ports)

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
