"""Tests for utility modules."""

from unittest.mock import Mock

import pytest

from midiwire.exceptions import MidiPortNotFoundError, MidiWireError, format_error_for_display
from midiwire.protocols import Destination, MessageSink, Transport
from midiwire.utils import ObserverManager

from conftest import FakeDestination, FakeTransport


@pytest.mark.unit
class TestObserverManager:
    """Test observer registration and notification."""

    def test_register_is_idempotent(self):
        manager = ObserverManager[Mock]()
        observer = Mock()

        manager.register(observer)
        manager.register(observer)

        assert len(manager) == 1
        assert observer in manager

    def test_notify_calls_callback(self):
        manager = ObserverManager[Mock]()
        observer = Mock()
        manager.register(observer)

        manager.notify("on_note_on", 1, 60, 100)

        observer.on_note_on.assert_called_once_with(1, 60, 100)

    def test_missing_callback_skipped(self):
        """Test observers without the callback are skipped."""
        manager = ObserverManager[object]()
        manager.register(object())

        manager.notify("on_note_on", 1, 60, 100)

    def test_unregister_during_notify(self):
        """Test an observer may unregister itself from its callback."""
        manager = ObserverManager[Mock]()
        observer = Mock()
        observer.on_stop.side_effect = lambda: manager.unregister(observer)
        manager.register(observer)

        manager.notify("on_stop")

        assert not manager

    def test_clear(self):
        manager = ObserverManager[Mock]()
        manager.register(Mock())
        manager.register(Mock())

        manager.clear()

        assert len(manager) == 0


@pytest.mark.unit
class TestProtocols:
    """Test runtime protocol checks."""

    def test_fake_transport_satisfies_protocols(self):
        assert isinstance(FakeTransport(), Transport)
        assert isinstance(FakeDestination("x"), Destination)

    def test_partial_sink_is_not_a_message_sink(self):
        class NotesOnly:
            def on_note_on(self, channel, pitch, velocity):
                pass

        assert not isinstance(NotesOnly(), MessageSink)


@pytest.mark.unit
class TestErrorDisplay:
    """Test error formatting for the CLI."""

    def test_custom_error(self):
        message, hint = format_error_for_display(MidiPortNotFoundError("Launchpad", direction="output"))

        assert message == "No MIDI output port matches 'Launchpad'."
        assert hint == "Run 'midiwire midi list' to see available ports."

    def test_standard_error(self):
        message, hint = format_error_for_display(ValueError("bad"))

        assert message == "ValueError: bad"
        assert hint is None

    def test_full_message_includes_hint(self):
        error = MidiPortNotFoundError("Launchpad")

        assert error.get_full_message() == (
            "No MIDI input port matches 'Launchpad'.\n\n"
            "Suggestion: Run 'midiwire midi list' to see available ports."
        )

    def test_technical_message_defaults_to_user_message(self):
        error = MidiWireError("Port vanished")

        assert str(error) == "Port vanished"
        assert error.technical_message == "Port vanished"
        assert error.recoverable is False
        assert error.get_full_message() == "Port vanished"

    def test_details_are_keyword_only(self):
        with pytest.raises(TypeError):
            MidiWireError("Port vanished", "rtmidi: device removed")
