from __future__ import annotations

from typing import TYPE_CHECKING

from api.dependencies import set_service_container
from lifecycle.shutdown_protocol import IShutdownHandler
from models.enums import LogCategory
from utils.logger import get_logger

if TYPE_CHECKING:
    from lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.SHUTDOWN)


class APIServerShutdownHandler(IShutdownHandler):
    """
    Detaches the clock from the HTTP API, then stops uvicorn.

    Requests that arrive between the two steps get 503 instead of reaching
    an engine that has already been stopped.

    Priority: 90 (after the clock has stopped drawing)
    """

    def __init__(self, api_wrapper: "APIServerWrapper"):
        self.api_wrapper = api_wrapper

    @property
    def shutdown_priority(self) -> int:
        return 90

    async def shutdown(self) -> None:
        set_service_container(None)

        if not self.api_wrapper.is_running:
            log.debug("Clock API not running")
            return

        await self.api_wrapper.stop()
