"""midiwire: MIDI packet framing, filtering and dispatch."""

__version__ = "0.1.0"

# Framing and routing
from .core import ClockSource, Dispatcher, MessageAssembler

# Configuration
from .models import FilterConfig, RawPacket

__all__ = [
    "ClockSource",
    "Dispatcher",
    "FilterConfig",
    "MessageAssembler",
    "RawPacket",
]
