"""
SecondHandStateMachine - mechanical inertia for a ticking second hand.

Per accepted frame the hand either rests on the base angle of the last
ticked second, creeps forward in the final milliseconds before the next
boundary, or runs the three-frame jump sequence after a tick:

    tick      → OVERSHOOT  (base + overshoot, blur -1)
    next      → RECOIL     (base + recoil,    blur +1)
    next      → SETTLED    (base exactly,     blur -1)

Tick detection is level-triggered on the wall clock: a tick is any frame
whose reading.seconds differs from the last observed second. Several
skipped seconds collapse into one tick with no catch-up animation.

advance() is a pure function of (state, reading, physics). The
SecondHandStateMachine class only owns the current state value.
"""

from __future__ import annotations

from typing import Optional

from engine.angle_calculator import second_base_angle
from models.animation_state import AnimationState, StepResult
from models.clock import ClockReading
from models.enums import AnimationPhase, BlurDirection, LogCategory
from models.physics import PhysicsConfig
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.PHYSICS)


def seed_state(reading: ClockReading) -> AnimationState:
    """
    Initial state for a freshly started clock.

    last_observed_second is set one second behind so the very first frame
    is processed as a tick. Both angles rest on that second.
    """
    last_observed = (reading.seconds + 59) % 60
    base = second_base_angle(last_observed)
    return AnimationState(
        phase=AnimationPhase.SETTLED,
        last_observed_second=last_observed,
        target_base_angle=base,
        visual_angle=base,
        blur_direction=BlurDirection.NONE,
    )


def creep_progress(ms_until_next_tick: float, physics: PhysicsConfig) -> float:
    """Fraction of the creep window already elapsed, clamped to [0, 1]"""
    duration = physics.creep_duration_ms
    time_into_creep = max(0.0, min(duration, duration - ms_until_next_tick))
    return time_into_creep / duration


def creep_angle(base_angle: float, ms_until_next_tick: float, physics: PhysicsConfig) -> float:
    return base_angle + creep_progress(ms_until_next_tick, physics) * physics.creep_angle_degrees


def _settled(state: AnimationState, base_angle: float, blur: BlurDirection = BlurDirection.NONE) -> AnimationState:
    return AnimationState(
        phase=AnimationPhase.SETTLED,
        last_observed_second=state.last_observed_second,
        target_base_angle=base_angle,
        visual_angle=base_angle,
        blur_direction=blur,
    )


def _creeping(state: AnimationState, ms_until_next_tick: float, physics: PhysicsConfig) -> AnimationState:
    return AnimationState(
        phase=AnimationPhase.CREEPING,
        last_observed_second=state.last_observed_second,
        target_base_angle=state.target_base_angle,
        visual_angle=creep_angle(state.target_base_angle, ms_until_next_tick, physics),
        blur_direction=BlurDirection.NONE,
    )


def advance(state: AnimationState, reading: ClockReading, physics: PhysicsConfig) -> StepResult:
    """
    Run one frame of the transition table.

    Args:
        state: State after the previous accepted frame
        reading: The single clock snapshot for this frame
        physics: Sanitized physics parameters

    Returns:
        StepResult with the new state; tick is True when this frame
        observed a new second
    """
    if reading.seconds != state.last_observed_second:
        base = second_base_angle(reading.seconds)
        return StepResult(
            state=AnimationState(
                phase=AnimationPhase.OVERSHOOT,
                last_observed_second=reading.seconds,
                target_base_angle=base,
                visual_angle=base + physics.overshoot_degrees,
                blur_direction=BlurDirection.ANTICLOCKWISE,
            ),
            tick=True,
        )

    base = state.target_base_angle
    ms_until = reading.ms_until_next_tick
    phase = state.phase

    if phase is AnimationPhase.OVERSHOOT:
        new_state = AnimationState(
            phase=AnimationPhase.RECOIL,
            last_observed_second=state.last_observed_second,
            target_base_angle=base,
            visual_angle=base + physics.recoil_degrees,
            blur_direction=BlurDirection.CLOCKWISE,
        )

    elif phase is AnimationPhase.RECOIL:
        new_state = _settled(state, base, BlurDirection.ANTICLOCKWISE)

    elif phase is AnimationPhase.SETTLED:
        # Entering the creep window computes the creep angle in this same frame
        if 0 < ms_until <= physics.creep_duration_ms:
            new_state = _creeping(state, ms_until, physics)
        else:
            new_state = _settled(state, base)

    elif phase is AnimationPhase.CREEPING:
        if ms_until > physics.creep_duration_ms or ms_until < 0:
            # Window passed or the clock moved backward: drop the creep
            new_state = _settled(state, base)
        else:
            new_state = _creeping(state, ms_until, physics)

    else:
        new_state = _settled(state, second_base_angle(reading.seconds))

    return StepResult(state=new_state, tick=False)


class SecondHandStateMachine:
    """
    Owns the live AnimationState for one running clock.

    Not thread-safe; only the frame scheduler callback calls step().
    """

    def __init__(self, physics: PhysicsConfig):
        self.physics = physics
        self.state: Optional[AnimationState] = None

    def reset(self, reading: ClockReading) -> AnimationState:
        """Discard any previous state and seed a tick-forcing one"""
        self.state = seed_state(reading)
        return self.state

    def clear(self) -> None:
        self.state = None

    def step(self, reading: ClockReading) -> StepResult:
        if self.state is None:
            self.reset(reading)

        previous = self.state.phase
        result = advance(self.state, reading, self.physics)
        self.state = result.state

        if result.tick:
            log.debug(
                "Tick",
                second=reading.seconds,
                visual_angle=f"{result.visual_angle:.2f}",
            )
        elif result.phase is not previous:
            log.debug(f"{previous.name} → {result.phase.name}", visual_angle=f"{result.visual_angle:.2f}")

        return result

    @property
    def phase(self) -> Optional[AnimationPhase]:
        return self.state.phase if self.state else None
