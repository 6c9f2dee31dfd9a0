"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, waits for a shutdown trigger (signal, explicit
request or critical task failure) and runs the registered handlers in
priority order.
"""

import asyncio
import signal
from typing import Dict, List, Optional, Set

from lifecycle.task_registry import TaskCategory, TaskRegistry
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

CRITICAL_TASK_CATEGORIES: Set[TaskCategory] = {
    TaskCategory.API,
    TaskCategory.RENDER,
}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(ClockShutdownHandler(engine))
        coordinator.register(APIServerShutdownHandler(api_wrapper))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Raises:
            ValueError: If handler lacks shutdown_priority or shutdown()
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def _ensure_event(self) -> asyncio.Event:
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        return self._shutdown_event

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT and SIGTERM handlers on the running loop."""
        self._ensure_event()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.trigger(s.name))

        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def trigger(self, reason: str) -> None:
        """Request shutdown; the first reason wins."""
        if self._shutdown_trigger["reason"] is None:
            self._shutdown_trigger["reason"] = reason
        log.info(f"Shutdown requested: {reason}")
        self._ensure_event().set()

    # === Critical task monitoring ===

    def _critical_failure(self) -> bool:
        for record in TaskRegistry.instance().failed():
            if record.info.category in CRITICAL_TASK_CATEGORIES:
                log.error(
                    f"Critical task failed: {record.info.description}",
                    category=record.info.category.name,
                )
                self._shutdown_trigger["reason"] = f"Task failure: {record.info.description}"
                return True
        return False

    async def _wait_once(self, event: asyncio.Event) -> None:
        """Wait for the event or for any critical task to finish."""
        critical = [
            r.task for r in TaskRegistry.instance().active()
            if r.info.category in CRITICAL_TASK_CATEGORIES
        ]
        if not critical:
            try:
                await asyncio.wait_for(event.wait(), timeout=0.2)
            except asyncio.TimeoutError:
                pass
            return

        waiter = asyncio.ensure_future(event.wait())
        try:
            await asyncio.wait({waiter, *critical}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not waiter.done():
                waiter.cancel()

    async def wait_for_shutdown(self) -> None:
        """
        Block until shutdown is requested or a critical task fails.

        A critical task that completes cleanly does not end the wait.
        """
        event = self._ensure_event()

        while not event.is_set():
            if self._critical_failure():
                return
            await self._wait_once(event)

        log.debug("Shutdown triggered", reason=self.reason)

    async def shutdown_all(self) -> None:
        """
        Run all handlers in descending priority order.

        Each handler gets timeout_per_handler; the sequence stops once
        total_timeout is exceeded. A failing handler does not stop the rest.
        """
        log.info("🛑 Initiating graceful shutdown sequence...", reason=self.reason or "UNKNOWN")

        handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in handlers:
            name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"{name} shutdown timeout ({self._timeout_per_handler}s)")
            except asyncio.CancelledError:
                log.warn("Shutdown sequence was cancelled")
                raise
            except Exception as e:
                log.error(f"Error shutting down {name}", error=str(e), error_type=type(e).__name__)

        log.info("✓ Shutdown sequence complete")

    def get_handler(self, handler_type: type):
        """Registered handler of the given type, or None."""
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
