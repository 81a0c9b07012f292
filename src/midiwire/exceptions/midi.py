"""MIDI port exceptions.

Raised by the mido transport when a port cannot be opened. The framing
core never raises these: malformed input and unknown destinations are
dropped and logged instead.
"""

from .base import MidiWireError


class MidiPortError(MidiWireError):
    """A MIDI port could not be opened or used."""

    def __init__(self, user_message: str, port_name: str | None = None, **kwargs):
        """
        Initialize MIDI port error.

        Args:
            user_message: User-friendly error message
            port_name: Name of the port involved (if known)
        """
        super().__init__(user_message, **kwargs)
        self.port_name = port_name


class MidiPortNotFoundError(MidiPortError):
    """No MIDI port matched the requested name."""

    def __init__(self, port_name: str, direction: str = "input"):
        """
        Initialize port-not-found error.

        Args:
            port_name: The port name (or name fragment) that was requested
            direction: "input" or "output"
        """
        super().__init__(
            user_message=f"No MIDI {direction} port matches '{port_name}'.",
            port_name=port_name,
            recoverable=True,
            recovery_hint="Run 'midiwire midi list' to see available ports.",
        )
        self.direction = direction


def wrap_port_error(error: Exception, port_name: str, direction: str = "input") -> MidiPortError:
    """
    Convert a backend error raised while opening a port.

    Args:
        error: The original exception from mido or its backend
        port_name: Port that failed to open
        direction: "input" or "output"

    Returns:
        A MidiPortError with a user-facing message
    """
    error_msg = str(error)

    if "unknown port" in error_msg.lower():
        return MidiPortNotFoundError(port_name, direction)

    return MidiPortError(
        user_message=f"Could not open MIDI {direction} port '{port_name}'.",
        port_name=port_name,
        technical_message=f"Opening MIDI {direction} '{port_name}' failed: {error_msg}",
        recoverable=True,
        recovery_hint="Check that no other application holds the port exclusively.",
    )
