from __future__ import annotations

import asyncio
from typing import Optional

import uvicorn
from fastapi import FastAPI

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs uvicorn inside an asyncio task with uvicorn's own signal handlers
    disabled, so SIGINT/SIGTERM reach the ShutdownCoordinator.

    start() launches uvicorn.Server.serve() in the background and blocks
    until stop() is called. Schedule it with create_tracked_task().
    """

    def __init__(self, app: FastAPI, host: str = "0.0.0.0", port: int = 8000):
        self.app = app
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event: asyncio.Event = asyncio.Event()

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level="warning",
            access_log=False,
            server_header=False,
        )
        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore
        return server

    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        """Serve until stop() is called."""
        if self.is_running:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info("Launching clock API", url=self.url)
        self._serve_task = asyncio.create_task(self._server.serve(), name="UvicornServe")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + wait_started_timeout
        while loop.time() < deadline and not self._serve_task.done():
            if getattr(self._server, "started", False):
                log.info("Clock API listening", url=self.url)
                break
            await asyncio.sleep(0.05)

        if self._serve_task.done():
            # Bind failures surface here instead of hanging on the stop event
            self._serve_task.result()
            raise RuntimeError("API server exited during startup")

        try:
            await self._stop_event.wait()
        except asyncio.CancelledError:
            log.debug("start() cancelled externally, invoking stop()")
            await self.stop()
            raise

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        """Stop uvicorn, release the port and unblock start()."""
        self._stop_event.set()

        if self._server is None:
            log.debug("API server stop() called but server was not running")
            return

        log.info("Stopping clock API...")
        self._server.should_exit = True
        self._server.force_exit = True

        if self._serve_task and not self._serve_task.done():
            try:
                await asyncio.wait_for(asyncio.shield(self._serve_task), timeout=shutdown_timeout)
            except asyncio.TimeoutError:
                log.warn("Clock API did not stop in time; cancelling serve task", timeout=f"{shutdown_timeout}s")
                self._serve_task.cancel()
                try:
                    await self._serve_task
                except asyncio.CancelledError:
                    log.debug("Uvicorn serve task cancelled")

        self._server = None
        self._serve_task = None
        log.info("Clock API stopped")

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/api/v1/clock"

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()
