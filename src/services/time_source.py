"""
Time sources

The clock samples exactly one ClockReading per accepted frame. Sources must
be cheap and side-effect free, since they are called at frame rate.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol

from models.clock import ClockReading


class ITimeSource(Protocol):
    """Supplies the current wall-clock reading on demand"""

    def now(self) -> ClockReading:
        ...


class SystemTimeSource(ITimeSource):
    """Local wall clock via datetime.now()"""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or datetime.now

    def now(self) -> ClockReading:
        return ClockReading.from_datetime(self._clock())


class FixedTimeSource(ITimeSource):
    """
    Manually controlled time source for tests and demos.

    Example:
        source = FixedTimeSource(ClockReading(10, 30, 15, 0))
        source.set(seconds=15, milliseconds=880)
    """

    def __init__(self, reading: Optional[ClockReading] = None):
        self.reading = reading or ClockReading(0, 0, 0, 0)
        self.calls = 0

    def now(self) -> ClockReading:
        self.calls += 1
        return self.reading

    def set(
        self,
        hours: Optional[int] = None,
        minutes: Optional[int] = None,
        seconds: Optional[int] = None,
        milliseconds: Optional[int] = None,
    ) -> ClockReading:
        current = self.reading
        self.reading = ClockReading(
            hours=current.hours if hours is None else hours,
            minutes=current.minutes if minutes is None else minutes,
            seconds=current.seconds if seconds is None else seconds,
            milliseconds=current.milliseconds if milliseconds is None else milliseconds,
        )
        return self.reading


def shift_reading(reading: ClockReading, offset_minutes: int) -> ClockReading:
    """
    Apply a constant minute offset to a reading, wrapping at 24h.

    Seconds and milliseconds are untouched.
    """
    if not offset_minutes:
        return reading
    total = (reading.hours * 60 + reading.minutes + offset_minutes) % (24 * 60)
    return ClockReading(
        hours=total // 60,
        minutes=total % 60,
        seconds=reading.seconds,
        milliseconds=reading.milliseconds,
    )
