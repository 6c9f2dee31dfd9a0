from datetime import datetime

from models.clock import ClockReading
from services.time_source import FixedTimeSource, SystemTimeSource, shift_reading


class TestTimeSources:

    def test_system_source_reads_injected_clock(self):
        source = SystemTimeSource(lambda: datetime(2026, 1, 2, 13, 45, 7, 123456))
        assert source.now() == ClockReading(13, 45, 7, 123)

    def test_fixed_source(self):
        source = FixedTimeSource(ClockReading(1, 2, 3, 4))
        source.set(seconds=10)

        assert source.now() == ClockReading(1, 2, 10, 4)
        assert source.calls == 1


class TestShiftReading:

    def test_zero_offset_returns_same_reading(self):
        reading = ClockReading(10, 0, 0, 0)
        assert shift_reading(reading, 0) is reading

    def test_wraps_forward(self):
        assert shift_reading(ClockReading(23, 50, 5, 6), 20) == ClockReading(0, 10, 5, 6)

    def test_wraps_backward(self):
        assert shift_reading(ClockReading(0, 10, 0, 0), -20) == ClockReading(23, 50, 0, 0)

    def test_full_day(self):
        reading = ClockReading(8, 30, 0, 0)
        assert shift_reading(reading, 1440) == reading
