"""
Second hand physics configuration

Immutable for the lifetime of a running clock. Invalid values never reach
the state machine: sanitized() swaps them for defaults and reports what it
changed so the caller can warn once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Tuple

DEFAULT_CREEP_DURATION_MS = 150.0
DEFAULT_CREEP_ANGLE_DEGREES = 2.0
DEFAULT_OVERSHOOT_DEGREES = 2.0
DEFAULT_RECOIL_DEGREES = -1.5


@dataclass(frozen=True)
class PhysicsConfig:
    """
    Second hand inertia parameters

    Attributes:
        creep_duration_ms: Length of the pre-tick creep window (> 0)
        creep_angle_degrees: Forward drift reached at the end of the window (>= 0)
        overshoot_degrees: Offset past the new base angle on a tick (conventionally > 0)
        recoil_degrees: Offset from the base angle on the bounce back (conventionally < 0)
    """
    creep_duration_ms: float = DEFAULT_CREEP_DURATION_MS
    creep_angle_degrees: float = DEFAULT_CREEP_ANGLE_DEGREES
    overshoot_degrees: float = DEFAULT_OVERSHOOT_DEGREES
    recoil_degrees: float = DEFAULT_RECOIL_DEGREES

    @property
    def max_excursion(self) -> float:
        return max(0.0, self.creep_angle_degrees, self.overshoot_degrees, self.recoil_degrees)

    @property
    def min_excursion(self) -> float:
        return min(0.0, self.overshoot_degrees, self.recoil_degrees)

    def sanitized(self) -> Tuple[PhysicsConfig, List[str]]:
        """
        Return a copy with invalid fields replaced by defaults.

        Returns:
            (config, warnings) - warnings is empty when nothing was replaced
        """
        warnings: List[str] = []
        fixed = self

        if not _is_finite(self.creep_duration_ms) or self.creep_duration_ms <= 0:
            warnings.append(
                f"creep_duration_ms={self.creep_duration_ms!r} must be > 0, "
                f"using {DEFAULT_CREEP_DURATION_MS}"
            )
            fixed = replace(fixed, creep_duration_ms=DEFAULT_CREEP_DURATION_MS)

        if not _is_finite(self.creep_angle_degrees) or self.creep_angle_degrees < 0:
            warnings.append(
                f"creep_angle_degrees={self.creep_angle_degrees!r} must be >= 0, "
                f"using {DEFAULT_CREEP_ANGLE_DEGREES}"
            )
            fixed = replace(fixed, creep_angle_degrees=DEFAULT_CREEP_ANGLE_DEGREES)

        if not _is_finite(self.overshoot_degrees):
            warnings.append(
                f"overshoot_degrees={self.overshoot_degrees!r} is not a number, "
                f"using {DEFAULT_OVERSHOOT_DEGREES}"
            )
            fixed = replace(fixed, overshoot_degrees=DEFAULT_OVERSHOOT_DEGREES)

        if not _is_finite(self.recoil_degrees):
            warnings.append(
                f"recoil_degrees={self.recoil_degrees!r} is not a number, "
                f"using {DEFAULT_RECOIL_DEGREES}"
            )
            fixed = replace(fixed, recoil_degrees=DEFAULT_RECOIL_DEGREES)

        return fixed, warnings


def _is_finite(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False
