"""
Clock reading and per-frame output models
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from models.enums import AnimationPhase, BlurDirection


@dataclass(frozen=True)
class ClockReading:
    """
    Immutable wall-clock snapshot taken once per frame.

    All angle math for a frame derives from exactly one reading, so hour,
    minute and second hands never tear against each other.

    Ranges: hours 0-23, minutes 0-59, seconds 0-59, milliseconds 0-999.
    Milliseconds are not clamped here: an out-of-range value coming from an
    irregular clock is handled by the state machine.
    """
    hours: int
    minutes: int
    seconds: int
    milliseconds: int = 0

    @classmethod
    def from_datetime(cls, moment: datetime) -> ClockReading:
        return cls(
            hours=moment.hour,
            minutes=moment.minute,
            seconds=moment.second,
            milliseconds=moment.microsecond // 1000,
        )

    @property
    def ms_until_next_tick(self) -> int:
        return 1000 - self.milliseconds


@dataclass(frozen=True)
class ClockFrame:
    """Everything a renderer needs for one accepted frame"""
    hour_angle: float
    minute_angle: float
    second_angle: float
    blur_direction: BlurDirection
    phase: AnimationPhase
    reading: ClockReading
    timestamp_ms: float = 0.0
