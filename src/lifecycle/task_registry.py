"""
Task Registry
-------------

Tracks the asyncio tasks the clock process creates (API server, render
hosts, background helpers) so shutdown and the system API can see what is
running, what failed and what was cancelled.

The frame loop itself is not a task: it lives on loop.call_later() handles
owned by the FrameScheduler.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Dict, List, Optional

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.TASK)


class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks. API and RENDER are critical."""
    API = auto()
    RENDER = auto()
    SYSTEM = auto()
    BACKGROUND = auto()
    GENERAL = auto()


@dataclass(frozen=True)
class TaskInfo:
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC


@dataclass
class TaskRecord:
    """Completion state of a tracked task, filled in by the done callback."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_at: Optional[str] = None

    @property
    def status(self) -> str:
        if not self.task.done():
            return "running"
        if self.cancelled:
            return "cancelled"
        if self.finished_with_error is not None:
            return "failed"
        return "completed"


class TaskRegistry:
    """
    Process-wide registry of asyncio tasks.

    Example:
        task = create_tracked_task(
            api_wrapper.start(),
            category=TaskCategory.API,
            description="Clock API server",
        )
        print(TaskRegistry.instance().summary())
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self) -> None:
        self._records: Dict[asyncio.Task, TaskRecord] = {}
        self._next_id: int = 1

    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (tests only)."""
        cls._instance = None

    def register(self, task: asyncio.Task, category: TaskCategory, description: str) -> int:
        task_id = self._next_id
        self._next_id += 1

        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        self._records[task] = TaskRecord(task=task, info=info)
        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        return task_id

    def _on_task_done(self, task: asyncio.Task) -> None:
        record = self._records.get(task)
        if record is None:
            return

        record.finished_at = datetime.now(timezone.utc).isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {record.info.description}",
                error=str(exc),
                error_type=type(exc).__name__,
            )
        else:
            log.debug(f"[Task {record.info.id}] Completed")

    # === Introspection ===

    def list_all(self) -> List[TaskRecord]:
        return sorted(self._records.values(), key=lambda r: r.info.id)

    def active(self) -> List[TaskRecord]:
        return [r for r in self.list_all() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        return [r for r in self.list_all() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self.list_all() if r.cancelled]

    def summary_counts(self) -> Dict[str, int]:
        return {
            "total": len(self._records),
            "running": len(self.active()),
            "failed": len(self.failed()),
            "cancelled": len(self.cancelled()),
        }

    def summary(self) -> str:
        counts = self.summary_counts()
        return (
            f"Tasks: total={counts['total']}, running={counts['running']}, "
            f"failed={counts['failed']}, cancelled={counts['cancelled']}"
        )

    def get_tasks_for_shutdown(self, exclude: Optional[List[asyncio.Task]] = None) -> List[asyncio.Task]:
        """Running tasks that should be cancelled during shutdown."""
        exclude = exclude or []
        tasks = [r.task for r in self.active() if r.task not in exclude]
        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> asyncio.Task:
    """Create and register a task in a single call."""
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(coro, name=description)
    TaskRegistry.instance().register(task=task, category=category, description=description)
    return task
