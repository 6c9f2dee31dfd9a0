from __future__ import annotations
from collections import deque
from typing import Deque, List, Optional
from models.clock import ClockFrame
from rendering.renderer_interface import IClockRenderer


class VirtualDialRenderer(IClockRenderer):

    def __init__(self, history: int = 300):
        self.last_frame: Optional[ClockFrame] = None
        self._history: Deque[ClockFrame] = deque(maxlen=history)
        self.frames_rendered = 0

    def render(self, frame: ClockFrame) -> None:
        self.last_frame = frame
        self._history.append(frame)
        self.frames_rendered += 1

    def get_history(self) -> List[ClockFrame]:
        return list(self._history)

    def clear(self) -> None:
        self.last_frame = None
        self._history.clear()
