"""
Clock endpoints - status, last frame, start/stop and time zone offset
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.middleware.error_handler import ClockNotStartedError, InvalidTimeZoneOffsetError
from api.schemas.clock import (
    ClockConfigResponse,
    ClockStatusResponse,
    FrameResponse,
    PhysicsResponse,
    TimeZoneOffsetRequest,
)
from models.enums import LogCategory
from services.service_container import ServiceContainer
from utils.logger import get_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/clock", tags=["Clock"])


def _status(services: ServiceContainer) -> ClockStatusResponse:
    status = services.clock_engine.get_status()
    frame = status["last_frame"]
    return ClockStatusResponse(
        running=status["running"],
        phase=Serializer.enum_to_str(status["phase"]),
        time_zone_offset_minutes=status["time_zone_offset_minutes"],
        ticks=status["ticks"],
        frames_processed=status["frames_processed"],
        frames_throttled=status["frames_throttled"],
        frame_errors=status["frame_errors"],
        max_refresh_rate_hz=status["max_refresh_rate_hz"],
        last_frame=FrameResponse.from_frame(frame) if frame is not None else None,
        config_warnings=status["config_warnings"],
    )


@router.get("", response_model=ClockStatusResponse)
async def get_clock(services: ServiceContainer = Depends(get_service_container)):
    """Current clock status"""
    return _status(services)


@router.get("/frame", response_model=FrameResponse)
async def get_frame(services: ServiceContainer = Depends(get_service_container)):
    """
    Last frame handed to the renderer.

    Raises 409 CLOCK_NOT_STARTED until the first frame after start().
    """
    engine = services.clock_engine
    if engine.last_frame is None:
        raise ClockNotStartedError(running=engine.running)
    return FrameResponse.from_frame(engine.last_frame)


@router.post("/start", response_model=ClockStatusResponse)
async def start_clock(services: ServiceContainer = Depends(get_service_container)):
    """Start the clock (no-op when already running)"""
    log.info("Clock start requested via API")
    services.clock_engine.start()
    return _status(services)


@router.post("/stop", response_model=ClockStatusResponse)
async def stop_clock(services: ServiceContainer = Depends(get_service_container)):
    """Stop the clock (no-op when already stopped)"""
    log.info("Clock stop requested via API")
    services.clock_engine.stop()
    return _status(services)


@router.put("/time-zone-offset", response_model=ClockStatusResponse)
async def set_time_zone_offset(
    request: TimeZoneOffsetRequest,
    services: ServiceContainer = Depends(get_service_container),
):
    try:
        services.clock_engine.set_time_zone_offset(request.minutes)
    except ValueError as e:
        raise InvalidTimeZoneOffsetError(request.minutes, str(e))
    return _status(services)


@router.get("/config", response_model=ClockConfigResponse)
async def get_clock_config(services: ServiceContainer = Depends(get_service_container)):
    """Effective physics and throttle after sanitization"""
    engine = services.clock_engine
    return ClockConfigResponse(
        physics=PhysicsResponse.from_physics(engine.physics),
        max_refresh_rate_hz=engine.scheduler_config.max_refresh_rate_hz,
        min_frame_interval_ms=engine.scheduler_config.min_frame_interval_ms,
        frame_interval_ms=engine.scheduler_config.frame_interval_ms,
        config_warnings=list(engine.config_warnings),
    )
