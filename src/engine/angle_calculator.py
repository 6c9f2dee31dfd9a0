"""
Hand angles from a single clock reading.

All angles are degrees clockwise from 12 o'clock in [0, 360). Hour and
minute hands move continuously; only the second hand's visual angle
(engine/second_hand.py) is discontinuous.
"""

from typing import Tuple

from models.clock import ClockReading


def hour_angle(reading: ClockReading) -> float:
    return ((reading.hours % 12) + reading.minutes / 60) / 12 * 360


def minute_angle(reading: ClockReading) -> float:
    return (reading.minutes + reading.seconds / 60) / 60 * 360


def second_base_angle(seconds: int) -> float:
    """Snapped angle of a whole second"""
    return seconds / 60 * 360


def smooth_angles(reading: ClockReading) -> Tuple[float, float]:
    """(hour_angle, minute_angle) for one reading"""
    return hour_angle(reading), minute_angle(reading)
