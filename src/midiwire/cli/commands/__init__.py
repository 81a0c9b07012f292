"""CLI commands for midiwire."""

from .config import config_group
from .midi import midi_group
from .send import send_group

__all__ = ["config_group", "midi_group", "send_group"]
