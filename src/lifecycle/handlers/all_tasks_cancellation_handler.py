import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels every tracked task still running, except the task executing
    the shutdown and any explicitly excluded ones.

    Priority: 30 (last)
    """

    shutdown_priority = 30

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        exclude = [current, *self.exclude_tasks] if current else list(self.exclude_tasks)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No background tasks to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background task(s)")
        for task in tasks:
            task.cancel(msg="shutdown")

        await asyncio.gather(*tasks, return_exceptions=True)
        log.debug(TaskRegistry.instance().summary())
