"""
Services layer - wall clock sources and the service container
"""

from .time_source import ITimeSource, SystemTimeSource, FixedTimeSource, shift_reading

__all__ = [
    "ITimeSource",
    "SystemTimeSource",
    "FixedTimeSource",
    "shift_reading",
]
