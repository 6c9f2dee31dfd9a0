"""
Second hand animation state

Defines the immutable state value threaded through the state machine and
the result of a single step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from models.enums import AnimationPhase, BlurDirection


@dataclass(frozen=True)
class AnimationState:
    """
    Second hand state between frames.

    target_base_angle is always the snapped angle of last_observed_second;
    visual_angle is expressed relative to it and never accumulates past 360.
    """
    phase: AnimationPhase = AnimationPhase.SETTLED
    last_observed_second: Optional[int] = None
    target_base_angle: float = 0.0
    visual_angle: float = 0.0
    blur_direction: BlurDirection = BlurDirection.NONE


@dataclass(frozen=True)
class StepResult:
    """New state plus what the renderer consumes for this frame"""
    state: AnimationState
    tick: bool = False

    @property
    def visual_angle(self) -> float:
        return self.state.visual_angle

    @property
    def blur_direction(self) -> BlurDirection:
        return self.state.blur_direction

    @property
    def phase(self) -> AnimationPhase:
        return self.state.phase
