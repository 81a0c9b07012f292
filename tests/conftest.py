"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import Mock

import pytest

from midiwire.core import ClockSource, Dispatcher, MessageAssembler
from midiwire.models import FilterConfig, RawPacket


class FakeTimer:
    """Manually advanced tick counter."""

    def __init__(self, ticks: int = 1_000):
        self.ticks = ticks

    def __call__(self) -> int:
        return self.ticks

    def advance(self, ticks: int) -> None:
        self.ticks += ticks


class FakeDestination:
    """Destination recording every send."""

    def __init__(self, name: str):
        self._name = name
        self.sent: list[bytes] = []

    @property
    def name(self) -> str:
        return self._name

    def send(self, data: bytes, message_count: int = 1, first_offset: int = 0) -> None:
        self.sent.append(bytes(data[first_offset:]))


class FakeTransport:
    """Transport with a fixed list of destinations."""

    def __init__(self, count: int = 2):
        self.destinations = [FakeDestination(f"out-{i}") for i in range(count)]
        self.network_enabled: bool | None = None

    def enable_network(self, enabled: bool) -> None:
        self.network_enabled = enabled


def packet(*data: int, timestamp: int = 0, source: str = "default") -> RawPacket:
    """Build a packet from byte values."""
    return RawPacket(data=bytes(data), timestamp=timestamp, source=source)


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def timer():
    """Tick counter starting at 1000."""
    return FakeTimer()


@pytest.fixture
def clock(timer):
    """Clock where one tick is one millisecond."""
    return ClockSource(timer=timer, calibrate=lambda: (1_000_000, 1))


@pytest.fixture
def all_filters_off():
    """Filters that let every byte through."""
    return FilterConfig(ignore_active_sensing=False, ignore_sysex=False, ignore_realtime_clock=False)


@pytest.fixture
def assembler(clock):
    """Assembler with default filters and the millisecond clock."""
    return MessageAssembler(source="test", clock=clock)


@pytest.fixture
def transport():
    """Fake transport with two destinations."""
    return FakeTransport(count=2)


@pytest.fixture
def sink():
    """Mock message sink."""
    return Mock()


@pytest.fixture
def dispatcher(transport, clock, sink):
    """Dispatcher wired to the fake transport with a mock sink."""
    d = Dispatcher(transport=transport, clock=clock)
    d.register_sink(sink)
    return d
