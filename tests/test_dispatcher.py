"""Unit tests for the Dispatcher."""

import logging
from unittest.mock import Mock

import pytest

from conftest import FakeTransport, packet
from midiwire.core import Dispatcher
from midiwire.models import (
    FilterConfig,
    LogicalMessage,
    NoteOn,
    NoteOnCommand,
    RawByteCommand,
)


@pytest.mark.unit
class TestIncomingRouting:
    """Test routing of decoded messages to sinks and monitors."""

    def test_note_on_routed_to_sink(self, dispatcher, sink):
        """Test a note on packet reaches on_note_on."""
        dispatcher.handle_packets("keys", [packet(0x91, 60, 100, timestamp=1000)])

        sink.on_note_on.assert_called_once_with(2, 60, 100)

    def test_every_kind_routed(self, dispatcher, sink):
        """Test each message kind reaches its own callback."""
        dispatcher.handle_packets("keys", [packet(
            0x80, 60, 0,
            0xA0, 60, 10,
            0xB0, 7, 100,
            0xC0, 3,
            0xD0, 50,
            0xE0, 0x00, 0x40,
            0xFA,
            timestamp=1000,
        )])

        sink.on_note_off.assert_called_once_with(1, 60, 0)
        sink.on_poly_aftertouch.assert_called_once_with(1, 60, 10)
        sink.on_control_change.assert_called_once_with(1, 7, 100)
        sink.on_program_change.assert_called_once_with(1, 3)
        sink.on_aftertouch.assert_called_once_with(1, 50)
        sink.on_pitch_bend.assert_called_once_with(1, 8192)
        sink.on_raw_byte.assert_called_once_with(1, 0xFA)

    def test_sysex_bytes_routed_in_order(self, dispatcher, sink):
        """Test SysEx bytes reach on_sysex_byte one by one."""
        dispatcher.handle_packets("keys", [
            packet(0xF0, 0x01, 0x02, timestamp=1000),
            packet(0x03, 0xF7, timestamp=1001),
        ])

        assert [c.args for c in sink.on_sysex_byte.call_args_list] == [
            (1, 0x01), (1, 0x02), (1, 0x03), (1, 0xF7)
        ]

    def test_monitor_sees_source_and_message(self, dispatcher):
        """Test monitors receive the source and the full message."""
        monitor = Mock()
        dispatcher.register_monitor(monitor)

        dispatcher.handle_packets("pads", [packet(0x90, 60, 100, timestamp=1000)])

        monitor.on_midi_message.assert_called_once_with(
            "pads", NoteOn(channel=1, pitch=60, velocity=100)
        )

    def test_returns_messages(self, dispatcher):
        """Test handle_packets returns what it routed."""
        messages = dispatcher.handle_packets("keys", [packet(0x90, 60, 100, timestamp=1000)])

        assert messages == [NoteOn(channel=1, pitch=60, velocity=100)]

    def test_handle_packet_uses_packet_source(self, dispatcher):
        """Test that a single packet is assembled under its own source."""
        dispatcher.handle_packet(packet(0x90, 60, 100, timestamp=1000, source="pads"))

        assert dispatcher.sources == ["pads"]

    def test_sink_without_callback_skipped(self, dispatcher, sink):
        """Test sinks may implement only some callbacks."""

        class NotesOnly:
            def __init__(self):
                self.notes = []

            def on_note_on(self, channel, pitch, velocity):
                self.notes.append(pitch)

        notes = NotesOnly()
        dispatcher.register_sink(notes)

        dispatcher.handle_packets("keys", [packet(0xB0, 1, 2, 0x90, 60, 100, timestamp=1000)])

        assert notes.notes == [60]
        sink.on_control_change.assert_called_once_with(1, 1, 2)

    def test_base_message_reaches_monitors_only(self, dispatcher, sink):
        """Test a message without a sink callback is shown to monitors and not sent to sinks."""
        monitor = Mock()
        dispatcher.register_monitor(monitor)
        message = LogicalMessage(channel=3)

        dispatcher.dispatch("keys", message)

        assert message.payload() == (3,)
        monitor.on_midi_message.assert_called_once_with("keys", message)
        assert sink.method_calls == []

    def test_failing_sink_does_not_stop_others(self, dispatcher, sink):
        """Test an exception in one sink is logged and others still run."""
        broken = Mock()
        broken.on_note_on.side_effect = RuntimeError("boom")
        dispatcher.unregister_sink(sink)
        dispatcher.register_sink(broken)
        dispatcher.register_sink(sink)

        dispatcher.handle_packets("keys", [packet(0x90, 60, 100, timestamp=1000)])

        sink.on_note_on.assert_called_once_with(1, 60, 100)

    def test_unregistered_sink_not_called(self, dispatcher, sink):
        """Test unregistering a sink."""
        dispatcher.unregister_sink(sink)

        dispatcher.handle_packets("keys", [packet(0x90, 60, 100, timestamp=1000)])

        sink.on_note_on.assert_not_called()


@pytest.mark.unit
class TestSources:
    """Test per-source assembly state."""

    def test_sources_are_independent(self, dispatcher, sink):
        """Test an open SysEx on one source does not affect another."""
        dispatcher.handle_packets("a", [packet(0xF0, 0x01, timestamp=1000)])
        dispatcher.handle_packets("b", [packet(0x90, 60, 100, timestamp=1001)])

        sink.on_note_on.assert_called_once_with(1, 60, 100)
        assert dispatcher.assembler_for("a").state.sysex_continuation

    def test_assembler_reused(self, dispatcher):
        """Test the same assembler serves repeated deliveries."""
        assert dispatcher.assembler_for("a") is dispatcher.assembler_for("a")

    def test_remove_source(self, dispatcher, sink):
        """Test removing a source abandons its open SysEx."""
        dispatcher.handle_packets("a", [packet(0xF0, 0x01, timestamp=1000)])

        dispatcher.remove_source("a")
        dispatcher.handle_packets("a", [packet(0x02, 0xF7, timestamp=1001)])

        assert "a" in dispatcher.sources
        sink.on_sysex_byte.assert_not_called()

    def test_filters_apply_to_next_delivery(self, dispatcher, sink):
        """Test changing filters between deliveries."""
        dispatcher.handle_packets("a", [packet(0xFE, timestamp=1000)])
        sink.on_raw_byte.assert_not_called()

        dispatcher.filters = FilterConfig(ignore_active_sensing=False)
        dispatcher.handle_packets("a", [packet(0xFE, timestamp=1001)])

        sink.on_raw_byte.assert_called_once_with(1, 0xFE)


@pytest.mark.unit
class TestOutgoing:
    """Test command encoding and destination selection."""

    def test_send_to_destination(self, dispatcher, transport):
        """Test a command with a destination index goes only there."""
        assert dispatcher.send_note_on(1, 60, 100, destination=1)

        assert transport.destinations[0].sent == []
        assert transport.destinations[1].sent == [b"\x90\x3c\x64"]

    def test_broadcast(self, dispatcher, transport):
        """Test a command without destination goes everywhere."""
        assert dispatcher.send_control_change(2, 7, 100)

        for destination in transport.destinations:
            assert destination.sent == [b"\xb1\x07\x64"]

    def test_default_destination(self, transport, clock):
        """Test the default destination is used when none is named."""
        dispatcher = Dispatcher(transport=transport, clock=clock, default_destination=0)

        dispatcher.send_program_change(1, 5)

        assert transport.destinations[0].sent == [b"\xc0\x05"]
        assert transport.destinations[1].sent == []

    def test_out_of_range_destination(self, dispatcher, transport, caplog):
        """Test an unknown destination is logged and dropped."""
        with caplog.at_level(logging.WARNING):
            assert dispatcher.send(NoteOnCommand(pitch=60, velocity=100, destination=5)) is False

        assert "destination 5 not found" in caplog.text
        assert all(d.sent == [] for d in transport.destinations)

    def test_negative_destination(self, dispatcher):
        """Test a negative index is treated as unknown."""
        assert dispatcher.send(RawByteCommand(byte=0xF8, destination=-1)) is False

    def test_no_destinations(self, clock):
        """Test broadcasting with no outputs sends nothing."""
        dispatcher = Dispatcher(transport=FakeTransport(count=0), clock=clock)

        assert dispatcher.send_raw_byte(0xFA) is False

    def test_no_transport(self, caplog):
        """Test sending without a transport logs a warning."""
        dispatcher = Dispatcher()

        with caplog.at_level(logging.WARNING):
            assert dispatcher.send_note_off(1, 60) is False

        assert "no transport" in caplog.text

    def test_destination_error_logged(self, dispatcher, transport, caplog):
        """Test a failing destination does not raise."""
        transport.destinations[0].send = Mock(side_effect=OSError("gone"))

        with caplog.at_level(logging.ERROR):
            assert dispatcher.send_pitch_bend(1, 8192)

        assert "gone" in caplog.text
        assert transport.destinations[1].sent == [b"\xe0\x00\x40"]

    def test_convenience_methods(self, dispatcher, transport):
        """Test the remaining send helpers encode correctly."""
        dispatcher.send_aftertouch(1, 64, destination=0)
        dispatcher.send_poly_aftertouch(1, 60, 30, destination=0)
        dispatcher.send_note_off(1, 60, 10, destination=0)
        dispatcher.send_raw_byte(0xFC, destination=0)

        assert transport.destinations[0].sent == [
            b"\xd0\x40", b"\xa0\x3c\x1e", b"\x80\x3c\x0a", b"\xfc"
        ]

    def test_enable_network_forwarded(self, dispatcher, transport):
        """Test network toggles reach the transport."""
        dispatcher.enable_network(True)

        assert transport.network_enabled is True
