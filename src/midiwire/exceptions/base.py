"""Root of the midiwire exception hierarchy."""

from typing import Optional


class MidiWireError(Exception):
    """
    An error the CLI can show without a traceback.

    `user_message` is what `str()` returns and what the CLI prints,
    `technical_message` goes to the log file, and `recovery_hint` is printed
    under the message when set. `recoverable` marks errors the user can fix
    (wrong port name, broken config) as opposed to internal failures.
    """

    def __init__(
        self,
        user_message: str,
        *,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message if technical_message is not None else user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if any."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
