"""
ClockEngine - glue between time source, physics and renderer.

Per accepted frame:
  1. sample the time source once (time zone offset applied)
  2. compute hour/minute angles
  3. advance the second hand state machine
  4. hand a ClockFrame to the renderer

Owns the FrameScheduler and the single live AnimationState. start() always
reinitialises the state (including the forced first tick); stop() discards it.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from engine.angle_calculator import smooth_angles
from engine.frame_driver import IFrameDriver
from engine.frame_scheduler import FrameScheduler
from engine.second_hand import SecondHandStateMachine
from models.clock import ClockFrame, ClockReading
from models.config import SchedulerConfig
from models.enums import LogCategory
from models.physics import PhysicsConfig
from rendering.renderer_interface import IClockRenderer
from services.time_source import ITimeSource, SystemTimeSource, shift_reading
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CLOCK)

MAX_OFFSET_MINUTES = 24 * 60


class ClockEngine:
    """
    Analogue clock with an inertial second hand.

    Example:
        engine = ClockEngine(AsyncioFrameDriver(), renderer=ConsoleDialRenderer())
        engine.start()
        engine.set_time_zone_offset(60)
        ...
        engine.stop()
    """

    def __init__(
        self,
        driver: IFrameDriver,
        renderer: Optional[IClockRenderer] = None,
        time_source: Optional[ITimeSource] = None,
        physics: Optional[PhysicsConfig] = None,
        scheduler_config: Optional[SchedulerConfig] = None,
        time_zone_offset_minutes: int = 0,
    ):
        """
        Args:
            driver: Host frame driver
            renderer: Receives one ClockFrame per accepted frame (optional)
            time_source: Wall clock (defaults to the system clock)
            physics: Second hand physics; invalid values fall back to defaults
            scheduler_config: Throttle settings; invalid values fall back to defaults
            time_zone_offset_minutes: Constant shift applied to every reading;
                an invalid value falls back to 0 with a config warning
        """
        physics, physics_warnings = (physics or PhysicsConfig()).sanitized()
        scheduler_config, scheduler_warnings = (scheduler_config or SchedulerConfig()).sanitized()

        self.config_warnings: List[str] = physics_warnings + scheduler_warnings

        self.physics = physics
        self.scheduler_config = scheduler_config
        self.time_source = time_source or SystemTimeSource()
        self.renderer = renderer
        self.time_zone_offset_minutes = 0
        try:
            self.set_time_zone_offset(time_zone_offset_minutes)
        except ValueError as e:
            self.config_warnings.append(f"time_zone_offset_minutes: {e}; using 0")

        for warning in self.config_warnings:
            log.warn("Invalid clock configuration replaced", detail=warning)

        self.state_machine = SecondHandStateMachine(physics)
        self.scheduler = FrameScheduler(
            driver,
            self._on_frame,
            max_refresh_rate_hz=scheduler_config.max_refresh_rate_hz,
        )
        self.last_frame: Optional[ClockFrame] = None
        self.ticks = 0

    # === Lifecycle ===

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def start(self) -> None:
        if self.running:
            log.debug("Clock already running")
            return

        self.state_machine.reset(self.sample())
        self.last_frame = None
        self.ticks = 0
        self.scheduler.start()
        log.info("Clock started", offset_minutes=self.time_zone_offset_minutes)

    def stop(self) -> None:
        if not self.running:
            return

        self.scheduler.stop()
        self.state_machine.clear()
        log.info("Clock stopped", ticks=self.ticks)

    def set_time_zone_offset(self, minutes: int) -> None:
        """
        Shift all subsequent readings by a constant number of minutes.

        Raises:
            ValueError: If minutes is not an integer within ±24h
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise ValueError(f"Time zone offset must be an integer number of minutes, got {minutes!r}")
        if abs(minutes) > MAX_OFFSET_MINUTES:
            raise ValueError(f"Time zone offset {minutes} exceeds ±{MAX_OFFSET_MINUTES} minutes")

        if minutes != self.time_zone_offset_minutes:
            log.info(
                "Time zone offset changed",
                offset_from=self.time_zone_offset_minutes,
                offset_to=minutes,
            )
        self.time_zone_offset_minutes = minutes

    # === Frame ===

    def sample(self) -> ClockReading:
        return shift_reading(self.time_source.now(), self.time_zone_offset_minutes)

    def _on_frame(self, timestamp_ms: float) -> None:
        reading = self.sample()
        hour_angle, minute_angle = smooth_angles(reading)
        result = self.state_machine.step(reading)
        if result.tick:
            self.ticks += 1

        frame = ClockFrame(
            hour_angle=hour_angle,
            minute_angle=minute_angle,
            second_angle=result.visual_angle,
            blur_direction=result.blur_direction,
            phase=result.phase,
            reading=reading,
            timestamp_ms=timestamp_ms,
        )
        self.last_frame = frame

        if self.renderer is not None:
            self.renderer.render(frame)

    # === Introspection ===

    def get_status(self) -> Dict:
        frame = self.last_frame
        return {
            "running": self.running,
            "phase": self.state_machine.phase,
            "time_zone_offset_minutes": self.time_zone_offset_minutes,
            "ticks": self.ticks,
            "last_frame": frame,
            "config_warnings": list(self.config_warnings),
            **{k: v for k, v in self.scheduler.get_metrics().items() if k != "running"},
        }

    def __repr__(self) -> str:
        scheduler = getattr(self, "scheduler", None)
        running = scheduler.running if scheduler is not None else False
        return (
            f"ClockEngine(running={running}, "
            f"offset={getattr(self, 'time_zone_offset_minutes', 0)}min, "
            f"ticks={getattr(self, 'ticks', 0)})"
        )
