# rendering/renderer_interface.py
"""
IClockRenderer Protocol
=======================
Minimal contract for anything that draws the clock.
The clock engine hands over one ClockFrame per accepted frame.
"""

from __future__ import annotations
from typing import Protocol
from models.clock import ClockFrame


class IClockRenderer(Protocol):
    """
    Protocol defining the renderer interface.

    All implementations must provide:
    - render: draw one frame (hour/minute angles, second visual angle, blur)
    - clear: blank the output (used on shutdown)
    """

    def render(self, frame: ClockFrame) -> None:
        """Draw a single frame. Must not block."""
        ...

    def clear(self) -> None:
        """Blank the output."""
        ...
