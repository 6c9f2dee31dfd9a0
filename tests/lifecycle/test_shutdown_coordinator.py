"""
Tests for the shutdown coordinator, task registry and shutdown handlers.
"""

import asyncio
import contextlib
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException

from api.dependencies import get_service_container, set_service_container
from lifecycle.handlers import AllTasksCancellationHandler, APIServerShutdownHandler, ClockShutdownHandler
from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import TaskCategory, TaskRegistry, create_tracked_task
from services.service_container import ServiceContainer


class RecordingHandler:
    def __init__(self, name, priority, calls, error=None, delay=0.0):
        self.name = name
        self._priority = priority
        self.calls = calls
        self.error = error
        self.delay = delay

    @property
    def shutdown_priority(self):
        return self._priority

    async def shutdown(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        self.calls.append(self.name)
        if self.error:
            raise self.error


class TestRegister:

    def test_rejects_objects_without_protocol(self):
        coordinator = ShutdownCoordinator()
        with pytest.raises(ValueError):
            coordinator.register(object())

    def test_get_handler(self):
        coordinator = ShutdownCoordinator()
        handler = RecordingHandler("a", 1, [])
        coordinator.register(handler)
        assert coordinator.get_handler(RecordingHandler) is handler


class TestShutdownAll:

    @pytest.mark.asyncio
    async def test_runs_handlers_by_descending_priority(self):
        calls = []
        coordinator = ShutdownCoordinator()
        for name, priority in (("tasks", 30), ("clock", 100), ("api", 90)):
            coordinator.register(RecordingHandler(name, priority, calls))

        await coordinator.shutdown_all()

        assert calls == ["clock", "api", "tasks"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_sequence(self):
        calls = []
        coordinator = ShutdownCoordinator()
        coordinator.register(RecordingHandler("broken", 100, calls, error=RuntimeError("boom")))
        coordinator.register(RecordingHandler("next", 50, calls))

        await coordinator.shutdown_all()

        assert calls == ["broken", "next"]

    @pytest.mark.asyncio
    async def test_slow_handler_times_out(self):
        calls = []
        coordinator = ShutdownCoordinator(timeout_per_handler=0.05)
        coordinator.register(RecordingHandler("slow", 100, calls, delay=1.0))
        coordinator.register(RecordingHandler("fast", 50, calls))

        await coordinator.shutdown_all()

        assert calls == ["fast"]


class TestWaitForShutdown:

    @pytest.mark.asyncio
    async def test_returns_on_trigger(self):
        coordinator = ShutdownCoordinator()
        asyncio.get_running_loop().call_later(0.05, coordinator.trigger, "test")

        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

        assert coordinator.reason == "test"

    @pytest.mark.asyncio
    async def test_returns_on_critical_task_failure(self):
        async def failing():
            await asyncio.sleep(0.05)
            raise RuntimeError("server crashed")

        task = create_tracked_task(failing(), category=TaskCategory.API, description="API server")
        coordinator = ShutdownCoordinator()

        await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=2.0)

        assert coordinator.reason == "Task failure: API server"
        with contextlib.suppress(RuntimeError):
            await task

    @pytest.mark.asyncio
    async def test_clean_critical_completion_keeps_waiting(self):
        async def quick():
            return 42

        create_tracked_task(quick(), category=TaskCategory.RENDER, description="one-shot")
        coordinator = ShutdownCoordinator()

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=0.3)

    @pytest.mark.asyncio
    async def test_background_failure_is_not_critical(self):
        async def failing():
            raise RuntimeError("ignored")

        task = create_tracked_task(failing(), category=TaskCategory.BACKGROUND, description="helper")
        with contextlib.suppress(RuntimeError):
            await task

        coordinator = ShutdownCoordinator()
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=0.3)


class TestTaskRegistry:

    @pytest.mark.asyncio
    async def test_tracks_outcomes(self):
        async def ok():
            return 1

        async def bad():
            raise ValueError("x")

        async def forever():
            await asyncio.sleep(10)

        t1 = create_tracked_task(ok(), category=TaskCategory.GENERAL, description="ok")
        t2 = create_tracked_task(bad(), category=TaskCategory.GENERAL, description="bad")
        t3 = create_tracked_task(forever(), category=TaskCategory.GENERAL, description="forever")
        await asyncio.gather(t1, t2, return_exceptions=True)
        t3.cancel()
        await asyncio.gather(t3, return_exceptions=True)

        registry = TaskRegistry.instance()
        assert registry.summary_counts() == {"total": 3, "running": 0, "failed": 1, "cancelled": 1}
        assert registry.failed()[0].info.description == "bad"
        assert [r.status for r in registry.list_all()] == ["completed", "failed", "cancelled"]
        assert all(r.finished_at for r in registry.list_all())


class TestHandlers:

    @pytest.mark.asyncio
    async def test_clock_handler_stops_engine_and_clears_renderer(self, engine, driver, renderer):
        engine.start()
        driver.fire(0.0)

        handler = ClockShutdownHandler(engine)
        await handler.shutdown()

        assert handler.shutdown_priority == 100
        assert not engine.running
        assert renderer.last_frame is None

    @pytest.mark.asyncio
    async def test_api_handler_detaches_clock_and_stops_server(self, engine):
        set_service_container(ServiceContainer(clock_engine=engine))
        wrapper = MagicMock()
        wrapper.is_running = True
        wrapper.stop = AsyncMock()

        await APIServerShutdownHandler(wrapper).shutdown()

        wrapper.stop.assert_awaited_once()
        with pytest.raises(HTTPException) as exc_info:
            await get_service_container()
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_api_handler_skips_stopped_server(self):
        wrapper = MagicMock()
        wrapper.is_running = False
        wrapper.stop = AsyncMock()

        await APIServerShutdownHandler(wrapper).shutdown()

        wrapper.stop.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_all_tasks_cancellation(self):
        async def forever():
            await asyncio.sleep(10)

        task = create_tracked_task(forever(), category=TaskCategory.BACKGROUND, description="sleeper")
        await asyncio.sleep(0)

        await AllTasksCancellationHandler().shutdown()

        assert task.cancelled()
