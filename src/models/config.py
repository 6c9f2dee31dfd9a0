"""
Configuration models

Typed views over the YAML configuration loaded by ConfigManager.
Physics lives in models/physics.py; everything else a running clock needs
is defined here.
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Tuple

from models.enums import LogLevel, RendererType

DEFAULT_MAX_REFRESH_RATE_HZ = 50.0
DEFAULT_FRAME_INTERVAL_MS = 1000.0 / 60.0


def _positive(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Frame scheduling settings

    max_refresh_rate_hz: Throttle; frames closer than 1000/rate ms are skipped
    frame_interval_ms: Cadence of the host frame driver (display refresh)
    """
    max_refresh_rate_hz: float = DEFAULT_MAX_REFRESH_RATE_HZ
    frame_interval_ms: float = DEFAULT_FRAME_INTERVAL_MS

    @property
    def min_frame_interval_ms(self) -> float:
        return 1000.0 / self.max_refresh_rate_hz

    def sanitized(self) -> Tuple["SchedulerConfig", List[str]]:
        """Copy with non-positive or non-numeric rates replaced by defaults"""
        warnings: List[str] = []
        fixed = self
        if not _positive(self.max_refresh_rate_hz):
            warnings.append(
                f"max_refresh_rate_hz={self.max_refresh_rate_hz!r} must be > 0, "
                f"using {DEFAULT_MAX_REFRESH_RATE_HZ}"
            )
            fixed = replace(fixed, max_refresh_rate_hz=DEFAULT_MAX_REFRESH_RATE_HZ)
        if not _positive(self.frame_interval_ms):
            warnings.append(
                f"frame_interval_ms={self.frame_interval_ms!r} must be > 0, "
                f"using {DEFAULT_FRAME_INTERVAL_MS:.2f}"
            )
            fixed = replace(fixed, frame_interval_ms=DEFAULT_FRAME_INTERVAL_MS)
        return fixed, warnings


@dataclass(frozen=True)
class ShadowStyle:
    offset_x: float = 2.0
    offset_y: float = 2.0
    blur: float = 3.0
    color: str = "rgba(0, 0, 0, 0.3)"


@dataclass(frozen=True)
class HandStyle:
    """Single hand appearance. length is a fraction of the dial radius."""
    color: str = "#000000"
    length: float = 0.5
    width: float = 7.0
    counterweight_length: float = 0.0


@dataclass(frozen=True)
class DialConfig:
    """Dial appearance consumed by dial geometry and renderers"""
    dial_color: str = "#FFFFFF"
    border_color: str = "#000000"
    border_width: float = 5.0
    show_numerals: bool = True
    numeral_color: str = "#000000"
    major_tick_color: str = "#000000"
    major_tick_length: float = 10.0
    major_tick_width: float = 3.0
    show_minor_ticks: bool = True
    minor_tick_color: str = "#333333"
    minor_tick_length: float = 5.0
    minor_tick_width: float = 1.0
    center_pin_color: str = "#000000"

    hand_shadow: ShadowStyle = field(default_factory=ShadowStyle)
    hour_hand: HandStyle = field(default_factory=lambda: HandStyle("#000000", 0.5, 7.0))
    minute_hand: HandStyle = field(default_factory=lambda: HandStyle("#000000", 0.75, 5.0))
    second_hand: HandStyle = field(default_factory=lambda: HandStyle("#FF0000", 0.9, 2.0, 0.15))

    motion_blur_strength: float = 12.0
    motion_blur_offset: float = 3.0


@dataclass(frozen=True)
class RuntimeConfig:
    """Process-level settings for main_asyncio"""
    time_zone_offset_minutes: int = 0
    renderer: RendererType = RendererType.CONSOLE
    console_size: Tuple[int, int] = (41, 21)
    api_enabled: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: LogLevel = LogLevel.INFO
    log_colors: bool = True
