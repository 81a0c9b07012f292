"""Raw packet as delivered by a transport."""

from pydantic import BaseModel, ConfigDict, Field

# Transport could not supply a timestamp (e.g. an asynchronously delivered
# SysEx continuation); the assembler substitutes a clock reading.
NO_TIMESTAMP = 0


class RawPacket(BaseModel):
    """
    An ordered byte buffer from one input source.

    Attributes:
        data: Raw MIDI bytes, possibly several messages or a message fragment
        timestamp: Opaque clock ticks, or NO_TIMESTAMP
        source: Identifier of the input the packet arrived on
    """

    model_config = ConfigDict(frozen=True)

    data: bytes
    timestamp: int = Field(default=NO_TIMESTAMP, ge=0)
    source: str = "default"

    def hex(self) -> str:
        """Space-separated hex dump of the packet bytes."""
        return " ".join(f"{b:02X}" for b in self.data)
