"""
Models package - Data models for the inertia clock
"""

from .enums import AnimationPhase, BlurDirection, RendererType, LogLevel, LogCategory
from .clock import ClockReading, ClockFrame
from .physics import PhysicsConfig
from .animation_state import AnimationState, StepResult
from .config import SchedulerConfig, DialConfig, HandStyle, ShadowStyle, RuntimeConfig

__all__ = [
    'AnimationPhase',
    'BlurDirection',
    'RendererType',
    'LogLevel',
    'LogCategory',
    'ClockReading',
    'ClockFrame',
    'PhysicsConfig',
    'AnimationState',
    'StepResult',
    'SchedulerConfig',
    'DialConfig',
    'HandStyle',
    'ShadowStyle',
    'RuntimeConfig',
]
