"""mido transport: input packets and output destinations."""

from .base_manager import BaseMidiManager
from .input_manager import MidiInputManager
from .manager import MidiManager
from .output_manager import MidiOutputManager, MidoDestination

__all__ = ["BaseMidiManager", "MidiInputManager", "MidiManager", "MidiOutputManager", "MidoDestination"]
