"""Enumerations for MIDI framing."""

from enum import Enum, IntEnum


class MessageKind(str, Enum):
    """Logical message and command variants."""

    NOTE_OFF = "note_off"
    NOTE_ON = "note_on"
    POLY_AFTERTOUCH = "poly_aftertouch"  # aka key pressure
    CONTROL_CHANGE = "control_change"
    PROGRAM_CHANGE = "program_change"
    AFTERTOUCH = "aftertouch"  # aka channel pressure
    PITCH_BEND = "pitch_bend"
    SYSEX_BYTE = "sysex_byte"  # one byte of a SysEx frame
    RAW_BYTE = "raw_byte"  # system or unrecognized byte


class SystemStatus(IntEnum):
    """System status bytes (0xF0-0xFF)."""

    SYSEX = 0xF0
    TIME_CODE = 0xF1
    SONG_POSITION = 0xF2
    SONG_SELECT = 0xF3
    TUNE_REQUEST = 0xF6
    SYSEX_END = 0xF7
    TIMING_CLOCK = 0xF8
    START = 0xFA
    CONTINUE = 0xFB
    STOP = 0xFC
    ACTIVE_SENSING = 0xFE
    SYSTEM_RESET = 0xFF
