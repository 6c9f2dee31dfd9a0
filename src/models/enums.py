"""
Enums for the second hand state machine and supporting infrastructure
"""

from enum import Enum, IntEnum, auto


class AnimationPhase(Enum):
    """
    Second hand animation phases

    SETTLED:   Hand rests exactly on the base angle of the last ticked second
    CREEPING:  Final milliseconds before a tick, hand drifts forward
    OVERSHOOT: Tick just happened, hand jumped past the new base angle
    RECOIL:    Hand bounced back behind the base angle
    """
    SETTLED = auto()
    CREEPING = auto()
    OVERSHOOT = auto()
    RECOIL = auto()


class BlurDirection(IntEnum):
    """
    Which rotational side an abrupt jump approached from.

    Values are a renderer hint for directional motion blur, not a velocity.
    """
    ANTICLOCKWISE = -1   # CW jump, blur trails ACW
    NONE = 0
    CLOCKWISE = 1        # ACW jump, blur trails CW


class RendererType(Enum):
    """Renderer selected by runtime config"""
    CONSOLE = auto()
    VIRTUAL = auto()
    NONE = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    CLOCK = auto()       # Clock engine lifecycle, offset changes
    PHYSICS = auto()     # Second hand phase transitions
    SCHEDULER = auto()   # Frame scheduling and throttling
    RENDER = auto()      # Renderers and dial geometry
    API = auto()
    SYSTEM = auto()      # Startup, shutdown, errors
    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
