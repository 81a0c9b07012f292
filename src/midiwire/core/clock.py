"""Monotonic clock used to stamp packets and measure delta times."""

import logging
import time
from collections.abc import Callable
from typing import Optional

logger = logging.getLogger(__name__)

NANOS_PER_MILLI = 1_000_000


def _default_timebase() -> tuple[int, int]:
    # perf_counter_ns already counts nanoseconds
    return (1, 1)


class ClockSource:
    """
    Wraps a monotonic tick counter and converts ticks to time units.

    Ticks are opaque integers. A timebase `(numer, denom)` converts them to
    nanoseconds as `ticks * numer // denom`. The timebase is resolved once,
    on first conversion, by calling `calibrate`.

    Example:
        ```python
        clock = ClockSource()
        start = clock.now()
        ...
        elapsed_ms = clock.to_millis(clock.now() - start)
        ```
    """

    def __init__(
        self,
        timer: Callable[[], int] = time.perf_counter_ns,
        calibrate: Callable[[], tuple[int, int]] = _default_timebase,
    ):
        """
        Initialize the clock.

        Args:
            timer: Returns the current monotonic tick count
            calibrate: Returns the (numer, denom) ticks-to-nanoseconds ratio
        """
        self._timer = timer
        self._calibrate = calibrate
        self._timebase: Optional[tuple[int, int]] = None

    def now(self) -> int:
        """Current tick count."""
        return self._timer()

    @property
    def timebase(self) -> tuple[int, int]:
        """Ticks-to-nanoseconds ratio, calibrated on first use."""
        if self._timebase is None:
            numer, denom = self._calibrate()
            if numer <= 0 or denom <= 0:
                raise ValueError(f"Invalid clock timebase {numer}/{denom}")
            self._timebase = (numer, denom)
            logger.debug(f"Clock timebase calibrated: {numer}/{denom}")
        return self._timebase

    def to_nanos(self, ticks: int) -> int:
        """Convert ticks to nanoseconds."""
        numer, denom = self.timebase
        return ticks * numer // denom

    def to_millis(self, ticks: int) -> float:
        """Convert ticks to milliseconds."""
        return self.to_nanos(ticks) / NANOS_PER_MILLI
