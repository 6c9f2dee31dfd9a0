"""
Clock schemas - request/response models for the clock endpoints
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from engine.clock_engine import MAX_OFFSET_MINUTES
from models.clock import ClockFrame, ClockReading
from models.physics import PhysicsConfig
from utils.serialization import Serializer


class ReadingResponse(BaseModel):
    """Wall-clock reading a frame was computed from (offset applied)"""
    hours: int = Field(ge=0, le=23)
    minutes: int = Field(ge=0, le=59)
    seconds: int = Field(ge=0, le=59)
    milliseconds: int = Field(ge=0, le=999)

    @classmethod
    def from_reading(cls, reading: ClockReading) -> "ReadingResponse":
        return cls(**Serializer.reading_to_dict(reading))


class FrameResponse(BaseModel):
    """One rendered frame"""
    hour_angle: float = Field(description="Hour hand angle, degrees clockwise from 12")
    minute_angle: float = Field(description="Minute hand angle, degrees clockwise from 12")
    second_angle: float = Field(description="Visual second hand angle (may exceed 360 or dip below 0)")
    blur_direction: int = Field(description="-1 anticlockwise, 0 none, +1 clockwise")
    phase: str = Field(description="SETTLED, CREEPING, OVERSHOOT or RECOIL")
    reading: ReadingResponse
    timestamp_ms: float = Field(description="Host frame timestamp")

    @classmethod
    def from_frame(cls, frame: ClockFrame) -> "FrameResponse":
        return cls(**Serializer.frame_to_dict(frame))

    class Config:
        json_schema_extra = {
            "example": {
                "hour_angle": 307.625,
                "minute_angle": 195.5,
                "second_angle": 92.0,
                "blur_direction": -1,
                "phase": "OVERSHOOT",
                "reading": {"hours": 10, "minutes": 15, "seconds": 30, "milliseconds": 4},
                "timestamp_ms": 12840.3
            }
        }


class ClockStatusResponse(BaseModel):
    """Clock status and frame counters"""
    running: bool
    phase: Optional[str] = Field(None, description="Current phase, null when stopped")
    time_zone_offset_minutes: int
    ticks: int = Field(description="Ticks since the last start()")
    frames_processed: int
    frames_throttled: int
    frame_errors: int
    max_refresh_rate_hz: float
    last_frame: Optional[FrameResponse] = None
    config_warnings: List[str] = Field(default_factory=list)


class TimeZoneOffsetRequest(BaseModel):
    """Constant shift applied to every wall-clock reading"""
    minutes: int = Field(
        ge=-MAX_OFFSET_MINUTES,
        le=MAX_OFFSET_MINUTES,
        strict=True,
        description="Offset in whole minutes (±24h)"
    )

    class Config:
        json_schema_extra = {"example": {"minutes": 60}}


class PhysicsResponse(BaseModel):
    creep_duration_ms: float
    creep_angle_degrees: float
    overshoot_degrees: float
    recoil_degrees: float

    @classmethod
    def from_physics(cls, physics: PhysicsConfig) -> "PhysicsResponse":
        return cls(**Serializer.physics_to_dict(physics))


class ClockConfigResponse(BaseModel):
    """Effective (sanitized) configuration of the running engine"""
    physics: PhysicsResponse
    max_refresh_rate_hz: float
    min_frame_interval_ms: float
    frame_interval_ms: float
    config_warnings: List[str] = Field(default_factory=list)
