"""
Clock engine - angle math, second hand physics and frame scheduling
"""

from .clock_engine import ClockEngine
from .frame_driver import AsyncioFrameDriver, ManualFrameDriver, IFrameDriver
from .frame_scheduler import FrameScheduler
from .second_hand import SecondHandStateMachine, advance, seed_state

__all__ = [
    "ClockEngine",
    "AsyncioFrameDriver",
    "ManualFrameDriver",
    "IFrameDriver",
    "FrameScheduler",
    "SecondHandStateMachine",
    "advance",
    "seed_state",
]
