"""Protocols for the collaborators around the framing core.

- Transport / Destination: packet delivery and output ports
- MessageSink / MessageMonitor: receivers of decoded messages
"""

from .observers import MessageMonitor, MessageSink
from .transport import Destination, Transport

__all__ = [
    "Destination",
    "MessageMonitor",
    "MessageSink",
    "Transport",
]
