"""Service Container - Dependency injection container for the clock services"""

from dataclasses import dataclass, field
from typing import Optional

from engine.clock_engine import ClockEngine
from managers.config_manager import ConfigManager
from models.config import DialConfig


@dataclass
class ServiceContainer:
    """
    Centralized container for the services the API endpoints need.

    Usage:
        services = ServiceContainer(
            clock_engine=engine,
            config_manager=config_manager,
            dial_config=config_manager.get_dial_config(),
        )
        set_service_container(services)

        @router.get("/clock")
        async def get_clock(services: ServiceContainer = Depends(get_service_container)):
            return services.clock_engine.get_status()
    """

    clock_engine: ClockEngine
    config_manager: Optional[ConfigManager] = None
    dial_config: DialConfig = field(default_factory=DialConfig)
