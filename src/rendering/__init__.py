"""
Rendering layer - renderer protocol, dial geometry and concrete renderers
"""

from .renderer_interface import IClockRenderer
from .virtual_renderer import VirtualDialRenderer
from .console_renderer import ConsoleDialRenderer

__all__ = [
    "IClockRenderer",
    "VirtualDialRenderer",
    "ConsoleDialRenderer",
]
