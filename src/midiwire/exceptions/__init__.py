"""
Custom exception hierarchy for midiwire.

## Exception Hierarchy

```
MidiWireError (base)
├── ConfigurationError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
└── MidiPortError
    └── MidiPortNotFoundError
```

All custom exceptions carry a `user_message`, a `technical_message` for logs,
a `recoverable` flag and an optional `recovery_hint`.

### Example: Port not found

```python
from midiwire.exceptions import MidiPortNotFoundError

raise MidiPortNotFoundError("Launchpad", direction="output")

# User sees: "No MIDI output port matches 'Launchpad'."
# Recovery hint: "Run 'midiwire midi list' to see available ports."
```

The framing core (assembler, codec, dispatcher) raises none of these:
malformed packets and sends to unknown destinations degrade to dropped data
and a log record.
"""

from .base import MidiWireError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import ErrorContext, format_error_for_display, wrap_pydantic_error
from .midi import MidiPortError, MidiPortNotFoundError, wrap_port_error

__all__ = [
    # Base
    "MidiWireError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # MIDI
    "MidiPortError",
    "MidiPortNotFoundError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_port_error",
    "wrap_pydantic_error",
]
