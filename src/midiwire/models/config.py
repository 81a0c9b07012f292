"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from midiwire.utils.persistence import read_model_or_default, write_model

DEFAULT_CONFIG_DIR = Path.home() / ".midiwire"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class FilterConfig(BaseModel):
    """
    Input filtering flags.

    Frozen so the assembler can take a snapshot per packet; change filters
    by replacing the whole value (e.g. `filters.model_copy(update=...)`).
    """

    model_config = ConfigDict(frozen=True)

    ignore_active_sensing: bool = Field(
        default=True, description="Drop active sensing (0xFE) bytes"
    )
    ignore_sysex: bool = Field(
        default=False, description="Drop System Exclusive messages, including continuations"
    )
    ignore_realtime_clock: bool = Field(
        default=True, description="Drop timing clock (0xF8) and MIDI time code (0xF1) messages"
    )


class AppConfig(BaseModel):
    """Application configuration and settings."""

    filters: FilterConfig = Field(
        default_factory=FilterConfig,
        description="Input filtering applied to every packet",
    )
    network_enabled: bool = Field(
        default=False,
        description="Ask the transport to enable its network MIDI session (if supported)",
    )
    input_port_filter: str | None = Field(
        default=None,
        description="Only open input ports whose name contains this text (None = all inputs)",
    )
    output_port_filter: str | None = Field(
        default=None,
        description="Only open output ports whose name contains this text (None = all outputs)",
    )
    default_destination: int | None = Field(
        default=None,
        description="Output index used when a command names none (None = all outputs)",
    )

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.midiwire/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH
        return read_model_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH
        write_model(self, path)
