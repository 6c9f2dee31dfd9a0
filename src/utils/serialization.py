"""
Serialization utilities - enum and model conversion for config and the JSON API

Provides bidirectional conversion between:
- Enums ↔ Strings (AnimationPhase, BlurDirection, RendererType, LogLevel)
- Clock models → Dicts (ClockReading, ClockFrame, PhysicsConfig)
"""

from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from models.clock import ClockFrame, ClockReading
from models.physics import PhysicsConfig

T = TypeVar('T', bound=Enum)


class Serializer:
    """Central enum and model serialization"""

    # ========================================================================
    # ENUM SERIALIZATION
    # ========================================================================

    @staticmethod
    def enum_to_str(value: Optional[Enum]) -> Optional[str]:
        """Convert any enum to string name"""
        return value.name if value is not None else None

    @staticmethod
    def str_to_enum(value: str, enum_type: Type[T]) -> T:
        """Convert string to enum (case-insensitive), raise ValueError if invalid"""
        if isinstance(value, enum_type):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid {enum_type.__name__}: {value!r}")
        try:
            return enum_type[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid {enum_type.__name__}: {value}")

    # ========================================================================
    # CLOCK MODELS
    # ========================================================================

    @staticmethod
    def reading_to_dict(reading: ClockReading) -> Dict[str, int]:
        return asdict(reading)

    @staticmethod
    def frame_to_dict(frame: ClockFrame) -> Dict[str, Any]:
        return {
            "hour_angle": frame.hour_angle,
            "minute_angle": frame.minute_angle,
            "second_angle": frame.second_angle,
            "blur_direction": int(frame.blur_direction),
            "phase": frame.phase.name,
            "reading": Serializer.reading_to_dict(frame.reading),
            "timestamp_ms": frame.timestamp_ms,
        }

    @staticmethod
    def physics_to_dict(physics: PhysicsConfig) -> Dict[str, float]:
        return asdict(physics)
