"""
FrameScheduler - throttled per-frame invocation.

Requests callbacks from a host frame driver and forwards at most one frame
per minimum interval to the frame handler. Callbacks arriving sooner than
the interval since the last *processed* frame are passed through: the next
callback is requested and nothing else happens.

The minimum interval matters for perception: overshoot, recoil and settle
are three discrete jumps that would blur into smooth motion if rendered at
a high refresh rate.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from engine.frame_driver import IFrameDriver
from models.config import DEFAULT_MAX_REFRESH_RATE_HZ
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SCHEDULER)

FrameHandler = Callable[[float], None]


class FrameScheduler:
    """
    Throttled frame loop on top of an IFrameDriver.

    start() and stop() are idempotent. After stop() returns, the frame
    handler is never invoked again for this run, including a callback the
    driver had already dequeued.
    """

    def __init__(
        self,
        driver: IFrameDriver,
        on_frame: FrameHandler,
        max_refresh_rate_hz: float = DEFAULT_MAX_REFRESH_RATE_HZ,
    ):
        """
        Args:
            driver: Host frame driver (asyncio or manual)
            on_frame: Called with the timestamp (ms) of every accepted frame
            max_refresh_rate_hz: Upper bound on accepted frames per second
        """
        self.driver = driver
        self.on_frame = on_frame
        self.max_refresh_rate_hz = max_refresh_rate_hz
        self.min_interval_ms = 1000.0 / max_refresh_rate_hz

        self.running = False
        self._handle: Optional[Any] = None
        self._generation = 0
        self._last_processed_ms: Optional[float] = None

        self.frames_processed = 0
        self.frames_throttled = 0
        self.frame_errors = 0
        self._error_streak = 0

    # === Lifecycle ===

    def start(self) -> None:
        if self.running:
            log.debug("FrameScheduler already running")
            return

        self.running = True
        self._generation += 1
        self._last_processed_ms = None
        self._error_streak = 0
        self._request()
        log.info(
            "FrameScheduler started",
            max_refresh_rate=f"{self.max_refresh_rate_hz:g} Hz",
            min_interval=f"{self.min_interval_ms:.2f}ms",
        )

    def stop(self) -> None:
        if not self.running:
            return

        self.running = False
        self._generation += 1
        if self._handle is not None:
            self.driver.cancel(self._handle)
            self._handle = None

        log.info(
            "FrameScheduler stopped",
            frames_processed=self.frames_processed,
            frames_throttled=self.frames_throttled,
        )

    # === Frame loop ===

    def _request(self) -> None:
        generation = self._generation
        self._handle = self.driver.schedule(
            lambda timestamp_ms: self._on_callback(timestamp_ms, generation)
        )

    def _on_callback(self, timestamp_ms: float, generation: int) -> None:
        # Stale callback from a stopped (or restarted) run
        if not self.running or generation != self._generation:
            return

        self._handle = None

        if (
            self._last_processed_ms is not None
            and timestamp_ms - self._last_processed_ms < self.min_interval_ms
        ):
            self.frames_throttled += 1
            self._request()
            return

        self._last_processed_ms = timestamp_ms
        self.frames_processed += 1

        try:
            self.on_frame(timestamp_ms)
        except Exception as e:
            self.frame_errors += 1
            self._error_streak += 1
            # Only the first error of a streak is loud
            if self._error_streak == 1:
                log.error(f"Frame error: {e}", error_type=type(e).__name__)
            else:
                log.debug(f"Frame error repeated: {e}", streak=self._error_streak)
        else:
            if self._error_streak:
                log.info("Frame handler recovered", failed_frames=self._error_streak)
                self._error_streak = 0

        # on_frame may have stopped (or restarted) the scheduler
        if self.running and generation == self._generation:
            self._request()

    # === Metrics ===

    def get_metrics(self) -> Dict:
        return {
            "running": self.running,
            "max_refresh_rate_hz": self.max_refresh_rate_hz,
            "frames_processed": self.frames_processed,
            "frames_throttled": self.frames_throttled,
            "frame_errors": self.frame_errors,
        }

    def __repr__(self) -> str:
        return (
            f"FrameScheduler(running={self.running}, "
            f"rate={self.max_refresh_rate_hz:g}Hz, "
            f"processed={self.frames_processed}, "
            f"throttled={self.frames_throttled})"
        )
