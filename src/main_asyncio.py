"""
main_asyncio.py - Application entry point for the inertia clock
---------------------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- wiring the clock engine, renderer and API (dependency injection)
- running the asyncio main loop
- graceful shutdown on Ctrl+C, SIGTERM or a failed critical task
"""

import sys

# Unicode log symbols on consoles that default to another encoding
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from typing import Optional

from api.dependencies import set_service_container
from api.main import create_app
from engine.clock_engine import ClockEngine
from engine.frame_driver import AsyncioFrameDriver
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import AllTasksCancellationHandler, APIServerShutdownHandler, ClockShutdownHandler
from lifecycle.shutdown_coordinator import ShutdownCoordinator
from lifecycle.task_registry import TaskCategory, TaskRegistry, create_tracked_task
from managers.config_manager import ConfigManager
from models.config import DialConfig, RuntimeConfig
from models.enums import LogCategory, RendererType
from rendering import ConsoleDialRenderer, IClockRenderer, VirtualDialRenderer
from services.service_container import ServiceContainer
from services.time_source import SystemTimeSource
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def build_renderer(runtime: RuntimeConfig, dial: DialConfig) -> Optional[IClockRenderer]:
    if runtime.renderer is RendererType.CONSOLE:
        return ConsoleDialRenderer(dial, size=runtime.console_size, use_colors=runtime.log_colors)
    if runtime.renderer is RendererType.VIRTUAL:
        return VirtualDialRenderer()
    return None


def build_services(config: ConfigManager, loop: Optional[asyncio.AbstractEventLoop] = None) -> ServiceContainer:
    """Create the clock engine and its collaborators from loaded config."""
    runtime = config.get_runtime_config()
    scheduler_config = config.get_scheduler_config()
    dial = config.get_dial_config()

    engine = ClockEngine(
        AsyncioFrameDriver(interval_ms=scheduler_config.sanitized()[0].frame_interval_ms, loop=loop),
        renderer=build_renderer(runtime, dial),
        time_source=SystemTimeSource(),
        physics=config.get_physics_config(),
        scheduler_config=scheduler_config,
        time_zone_offset_minutes=runtime.time_zone_offset_minutes,
    )
    return ServiceContainer(clock_engine=engine, config_manager=config, dial_config=dial)


async def main() -> None:
    # ========================================================================
    # CONFIGURATION
    # ========================================================================
    config = ConfigManager()
    config.load()
    runtime = config.get_runtime_config()
    configure_logger(runtime.log_level, runtime.log_colors)

    log.info("Starting inertia clock...")

    # ========================================================================
    # CLOCK
    # ========================================================================
    loop = asyncio.get_running_loop()
    services = build_services(config, loop)
    set_service_container(services)
    engine = services.clock_engine

    coordinator = ShutdownCoordinator()
    coordinator.register(ClockShutdownHandler(engine))

    engine.start()

    # ========================================================================
    # API SERVER
    # ========================================================================
    if runtime.api_enabled:
        api_wrapper = APIServerWrapper(create_app(), host=runtime.api_host, port=runtime.api_port)
        create_tracked_task(
            api_wrapper.start(),
            category=TaskCategory.API,
            description=f"API server ({runtime.api_host}:{runtime.api_port})",
        )
        coordinator.register(APIServerShutdownHandler(api_wrapper))

    coordinator.register(AllTasksCancellationHandler())

    # ========================================================================
    # RUN UNTIL SHUTDOWN
    # ========================================================================
    coordinator.setup_signal_handlers(loop)
    log.info("Clock running. Press Ctrl+C to stop.")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    log.debug(TaskRegistry.instance().summary())
    log.info("👋 Inertia clock shut down cleanly.")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
