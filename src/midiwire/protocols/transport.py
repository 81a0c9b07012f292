"""Protocols for the transport collaborator.

The transport delivers raw packets (pushing them into
`Dispatcher.handle_packets`) and exposes an indexed list of output
destinations. Connection lifecycle (discovery, pairing, network sessions)
belongs to the transport, not to the framing core.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Destination(Protocol):
    """An output that accepts encoded MIDI bytes."""

    @property
    def name(self) -> str:
        """Human-readable destination name."""
        ...

    def send(self, data: bytes, message_count: int = 1, first_offset: int = 0) -> None:
        """
        Deliver encoded bytes.

        Args:
            data: Encoded MIDI bytes
            message_count: Number of logical messages in `data`
            first_offset: Offset of the first message within `data`
        """
        ...


@runtime_checkable
class Transport(Protocol):
    """Source of packets and owner of output destinations."""

    @property
    def destinations(self) -> Sequence[Destination]:
        """Current output destinations, addressed by index."""
        ...

    def enable_network(self, enabled: bool) -> None:
        """Enable or disable the transport's network session (if it has one)."""
        ...
