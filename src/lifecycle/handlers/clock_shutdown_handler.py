"""
Clock shutdown handler.

Stops the frame loop and clears the renderer so the terminal is left clean.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from models.enums import LogCategory
from utils.logger import get_logger

if TYPE_CHECKING:
    from engine.clock_engine import ClockEngine

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ClockShutdownHandler(IShutdownHandler):
    """Priority 100: the clock stops before anything it depends on."""

    def __init__(self, engine: "ClockEngine"):
        self.engine = engine

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Stopping clock...")
        self.engine.stop()

        if self.engine.renderer is not None:
            self.engine.renderer.clear()

        log.debug("Clock stopped", ticks=self.engine.ticks)
