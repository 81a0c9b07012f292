"""
Channel voice status table.

One table maps each channel voice message kind to its status nibble and its
number of data bytes. The assembler uses it for framing lengths, the
decoder to pick a variant from a status byte, and the encoder to build the
status byte for a command.

    Nibble  Kind              Data bytes   Message length
    0x80    note off          2            3
    0x90    note on           2            3
    0xA0    poly aftertouch   2            3
    0xB0    control change    2            3
    0xC0    program change    1            2
    0xD0    aftertouch        1            2
    0xE0    pitch bend        2            3
"""

from typing import NamedTuple, Optional

from midiwire.models.enums import MessageKind, SystemStatus


class StatusEntry(NamedTuple):
    kind: MessageKind
    nibble: int
    data_length: int


CHANNEL_STATUS_TABLE: tuple[StatusEntry, ...] = (
    StatusEntry(MessageKind.NOTE_OFF, 0x80, 2),
    StatusEntry(MessageKind.NOTE_ON, 0x90, 2),
    StatusEntry(MessageKind.POLY_AFTERTOUCH, 0xA0, 2),
    StatusEntry(MessageKind.CONTROL_CHANGE, 0xB0, 2),
    StatusEntry(MessageKind.PROGRAM_CHANGE, 0xC0, 1),
    StatusEntry(MessageKind.AFTERTOUCH, 0xD0, 1),
    StatusEntry(MessageKind.PITCH_BEND, 0xE0, 2),
)

BY_NIBBLE: dict[int, StatusEntry] = {entry.nibble: entry for entry in CHANNEL_STATUS_TABLE}
BY_KIND: dict[MessageKind, StatusEntry] = {entry.kind: entry for entry in CHANNEL_STATUS_TABLE}

# Data bytes following system common status bytes
SYSTEM_COMMON_DATA_LENGTH: dict[int, int] = {
    SystemStatus.TIME_CODE: 1,
    SystemStatus.SONG_POSITION: 2,
    SystemStatus.SONG_SELECT: 1,
}


def is_status(byte: int) -> bool:
    """True if the byte has its high bit set."""
    return bool(byte & 0x80)


def is_channel_status(byte: int) -> bool:
    """True for 0x80-0xEF."""
    return 0x80 <= byte < SystemStatus.SYSEX


def channel_entry(status: int) -> Optional[StatusEntry]:
    """Table entry for a channel status byte, or None for system bytes."""
    if not is_channel_status(status):
        return None
    return BY_NIBBLE[status & 0xF0]


def channel_message_length(status: int) -> int:
    """Total length (status + data) of a channel voice message."""
    entry = channel_entry(status)
    if entry is None:
        raise ValueError(f"0x{status:02X} is not a channel status byte")
    return 1 + entry.data_length


def status_byte(kind: MessageKind, channel: int) -> int:
    """Build a status byte from a kind and a 1-based channel."""
    return BY_KIND[kind].nibble | ((channel - 1) & 0x0F)
