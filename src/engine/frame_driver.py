"""
Host frame drivers

A frame driver is the "requestAnimationFrame" of the host: it calls a
registered callback once, roughly one display refresh later, with a
monotonically non-decreasing timestamp in milliseconds. The scheduler
re-requests after every callback.

- AsyncioFrameDriver: real driver on the running asyncio event loop
- ManualFrameDriver: deterministic driver for tests and dry runs
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any, Callable, Dict, Optional, Protocol

FrameCallback = Callable[[float], None]


class IFrameDriver(Protocol):
    """
    Minimal per-frame scheduling contract.

    schedule() requests a single future invocation and returns a handle;
    cancel() withdraws a pending request (no-op if it already ran).
    """

    def schedule(self, callback: FrameCallback) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


class AsyncioFrameDriver(IFrameDriver):
    """
    Frame driver backed by loop.call_later().

    Timestamps come from loop.time(), so they are monotonic.
    """

    def __init__(self, interval_ms: float = 1000.0 / 60.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.interval_ms = interval_ms
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now_ms(self) -> float:
        return self._get_loop().time() * 1000.0

    def schedule(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self._get_loop()
        return loop.call_later(
            self.interval_ms / 1000.0,
            lambda: callback(loop.time() * 1000.0),
        )

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        if handle is not None:
            handle.cancel()


class ManualFrameDriver(IFrameDriver):
    """
    Frame driver that only fires when told to.

    Example:
        driver = ManualFrameDriver()
        scheduler = FrameScheduler(driver, on_frame)
        scheduler.start()
        driver.advance(20)   # fires pending callback at t=20ms
    """

    def __init__(self, start_ms: float = 0.0):
        self.now = start_ms
        self._pending: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)
        self.cancelled = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def schedule(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        if self._pending.pop(handle, None) is not None:
            self.cancelled += 1

    def fire(self, timestamp_ms: Optional[float] = None) -> int:
        """
        Run every callback pending right now.

        Callbacks scheduled while firing wait for the next fire().

        Returns:
            Number of callbacks invoked
        """
        if timestamp_ms is not None:
            if timestamp_ms < self.now:
                raise ValueError(f"Frame timestamps must not go backward ({timestamp_ms} < {self.now})")
            self.now = timestamp_ms

        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(self.now)
        return len(due)

    def advance(self, delta_ms: float) -> int:
        return self.fire(self.now + delta_ms)
