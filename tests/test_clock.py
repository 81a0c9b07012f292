"""Unit tests for ClockSource."""

import pytest

from midiwire.core import ClockSource


@pytest.mark.unit
class TestClockSource:
    """Test tick reading and conversion."""

    def test_now_reads_timer(self, timer):
        """Test that now() returns the timer value."""
        clock = ClockSource(timer=timer)
        timer.ticks = 42

        assert clock.now() == 42

    def test_default_timer_is_monotonic(self):
        """Test the default timer never goes backwards."""
        clock = ClockSource()
        first = clock.now()

        assert clock.now() >= first

    def test_timebase_conversion(self):
        """Test ticks are scaled by numer/denom."""
        clock = ClockSource(timer=lambda: 0, calibrate=lambda: (125, 3))

        assert clock.to_nanos(3) == 125
        assert clock.to_millis(24_000) == pytest.approx(1.0)

    def test_calibrated_once(self):
        """Test that the timebase is resolved lazily and only once."""
        calls = []

        def calibrate():
            calls.append(1)
            return (1, 1)

        clock = ClockSource(calibrate=calibrate)
        assert calls == []

        clock.to_millis(1)
        clock.to_millis(2)

        assert calls == [1]

    def test_invalid_timebase(self):
        """Test that a zero denominator is rejected."""
        clock = ClockSource(calibrate=lambda: (1, 0))

        with pytest.raises(ValueError):
            clock.to_nanos(1)
