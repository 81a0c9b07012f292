"""mido-backed transport combining inputs and outputs."""

import logging
from typing import Optional

import mido

from midiwire.core.clock import ClockSource
from midiwire.core.dispatcher import Dispatcher
from midiwire.exceptions import ErrorContext

from .input_manager import MidiInputManager
from .output_manager import MidiOutputManager, MidoDestination

logger = logging.getLogger(__name__)


class MidiManager:
    """
    Transport backed by mido ports.

    Inputs push packets into an attached Dispatcher; outputs are the
    dispatcher's destinations.

    Example:
        ```python
        with MidiManager() as midi:
            dispatcher = Dispatcher(transport=midi, clock=midi.clock)
            midi.attach(dispatcher)
            dispatcher.send_note_on(1, 60, 100)
        ```
    """

    def __init__(
        self,
        input_pattern: Optional[str] = None,
        output_pattern: Optional[str] = None,
        clock: Optional[ClockSource] = None,
    ):
        """
        Initialize MIDI manager.

        Args:
            input_pattern: Only open inputs whose name contains this text
            output_pattern: Only open outputs whose name contains this text
            clock: Clock used to stamp incoming packets
        """
        self.clock = clock or ClockSource()
        self._input_manager = MidiInputManager(input_pattern, clock=self.clock)
        self._output_manager = MidiOutputManager(output_pattern)

    def attach(self, dispatcher: Dispatcher) -> None:
        """Deliver incoming packets to a dispatcher and drop sources it no longer sees."""
        self._input_manager.on_packet(dispatcher.handle_packet)
        self._input_manager.on_port_closed(dispatcher.remove_source)

    @property
    def destinations(self) -> list[MidoDestination]:
        return self._output_manager.destinations

    def enable_network(self, enabled: bool) -> None:
        """mido has no network session; the request is logged only."""
        logger.info(
            f"Network MIDI session {'enable' if enabled else 'disable'} requested; "
            f"not supported by mido backend {mido.backend.name}"
        )

    def open(self, inputs: bool = True, outputs: bool = True, require: bool = False) -> None:
        """
        Open matching ports.

        Raises:
            MidiPortNotFoundError: If `require` and a requested direction has no match
        """
        with ErrorContext("open MIDI ports", logger_instance=logger):
            if inputs:
                self._input_manager.open(require=require)
            if outputs:
                self._output_manager.open(require=require)
        logger.debug("MidiManager opened")

    def close(self) -> None:
        """Close all ports."""
        self._input_manager.close()
        self._output_manager.close()
        logger.debug("MidiManager closed")

    @property
    def input_ports(self) -> list[str]:
        return self._input_manager.open_ports

    @property
    def output_ports(self) -> list[str]:
        return self._output_manager.open_ports

    def matching_ports(self) -> dict:
        """
        Available port names that pass the input and output patterns.

        Output names are in destination order, so position `i` is what
        `destinations[i]` will be once the ports are opened.
        """
        return {
            'input': self._input_manager.matching_ports(),
            'output': self._output_manager.matching_ports(),
        }

    @staticmethod
    def list_ports() -> dict:
        """
        List all available MIDI ports.

        Returns:
            Dictionary with 'input' and 'output' lists of port names
        """
        return {
            'input': mido.get_input_names(),
            'output': mido.get_output_names()
        }

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
