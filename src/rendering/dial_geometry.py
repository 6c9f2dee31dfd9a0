"""
Dial geometry - pure layout math for drawing a clock face.

Turns a ClockFrame plus DialConfig into points and segments in screen
coordinates (origin top-left, y down). Angles are degrees clockwise from
12 o'clock, so 0° points up and 90° points right.

Nothing here draws; renderers rasterise the resulting DialScene.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import List, Tuple

from models.clock import ClockFrame
from models.config import DialConfig, HandStyle, ShadowStyle
from models.enums import BlurDirection

MOTION_BLUR_ALPHA = 0.35
FALLBACK_RGB = (255, 0, 0)

_HEX_COLOR = re.compile(r"^#([A-Fa-f0-9]{3}){1,2}$")


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class DialLayout:
    width: float
    height: float
    center: Point
    radius: float
    numeral_radius: float


@dataclass(frozen=True)
class TickMark:
    index: int
    major: bool
    inner: Point
    outer: Point
    width: float
    color: str


@dataclass(frozen=True)
class Numeral:
    label: str
    position: Point


@dataclass(frozen=True)
class HandSegment:
    start: Point
    tip: Point
    width: float
    color: str
    shadow: ShadowStyle


@dataclass(frozen=True)
class DialScene:
    layout: DialLayout
    numerals: List[Numeral]
    ticks: List[TickMark]
    hour_hand: HandSegment
    minute_hand: HandSegment
    second_hand: HandSegment


def compute_layout(width: float, height: float, dial: DialConfig) -> DialLayout:
    """Radius leaves room for the border and numerals around the dial"""
    base_radius = min(width, height) / 2
    radius = base_radius - max(dial.border_width, base_radius * 0.15)
    return DialLayout(
        width=width,
        height=height,
        center=Point(width / 2, height / 2),
        radius=radius,
        numeral_radius=radius * 0.85,
    )


def polar(layout: DialLayout, angle_degrees: float, distance: float) -> Point:
    """Point at distance from the dial centre along a clock angle"""
    radians = math.radians(angle_degrees - 90)
    return Point(
        layout.center.x + distance * math.cos(radians),
        layout.center.y + distance * math.sin(radians),
    )


def numeral_positions(layout: DialLayout) -> List[Numeral]:
    return [
        Numeral(str(i), polar(layout, i * 30, layout.numeral_radius))
        for i in range(1, 13)
    ]


def tick_marks(layout: DialLayout, dial: DialConfig) -> List[TickMark]:
    """Sixty ticks, every fifth one major; minor ticks only if enabled"""
    outer_distance = layout.radius - dial.border_width / 2
    ticks = []
    for i in range(60):
        major = i % 5 == 0
        if major:
            if not (dial.show_numerals or dial.major_tick_length > 0):
                continue
            length, width, color = dial.major_tick_length, dial.major_tick_width, dial.major_tick_color
        else:
            if not dial.show_minor_ticks:
                continue
            length, width, color = dial.minor_tick_length, dial.minor_tick_width, dial.minor_tick_color

        ticks.append(TickMark(
            index=i,
            major=major,
            inner=polar(layout, i * 6, outer_distance - length),
            outer=polar(layout, i * 6, outer_distance),
            width=width,
            color=color,
        ))
    return ticks


def parse_color(color: str) -> Tuple[int, int, int]:
    """
    Parse '#rgb', '#rrggbb' or 'rgb(r, g, b)' / 'rgba(...)' into an RGB tuple.

    Anything else falls back to red.
    """
    color = color.strip()
    if _HEX_COLOR.match(color):
        digits = color[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        value = int(digits, 16)
        return (value >> 16) & 255, (value >> 8) & 255, value & 255

    if color.startswith("rgb"):
        parts = re.findall(r"\d+", color)
        if len(parts) >= 3:
            return int(parts[0]), int(parts[1]), int(parts[2])

    return FALLBACK_RGB


def second_hand_shadow(dial: DialConfig, blur: BlurDirection) -> ShadowStyle:
    """
    Shadow used to fake directional motion blur on the second hand.

    No blur: the standard hand shadow. Otherwise a diffuse shadow in the hand
    colour, shifted toward the side the jump came from.
    """
    standard = dial.hand_shadow
    if blur == BlurDirection.NONE:
        return standard

    r, g, b = parse_color(dial.second_hand.color)
    shift = int(blur) * dial.motion_blur_offset
    return replace(
        standard,
        offset_x=standard.offset_x + shift,
        offset_y=standard.offset_y + shift,
        blur=dial.motion_blur_strength,
        color=f"rgba({r},{g},{b},{MOTION_BLUR_ALPHA})",
    )


def hand_segment(layout: DialLayout, angle: float, style: HandStyle, shadow: ShadowStyle) -> HandSegment:
    """Hand from the counterweight end (or centre) to its tip"""
    return HandSegment(
        start=polar(layout, angle, -style.counterweight_length * layout.radius),
        tip=polar(layout, angle, style.length * layout.radius),
        width=style.width,
        color=style.color,
        shadow=shadow,
    )


def build_scene(frame: ClockFrame, width: float, height: float, dial: DialConfig) -> DialScene:
    layout = compute_layout(width, height, dial)
    return DialScene(
        layout=layout,
        numerals=numeral_positions(layout) if dial.show_numerals else [],
        ticks=tick_marks(layout, dial),
        hour_hand=hand_segment(layout, frame.hour_angle, dial.hour_hand, dial.hand_shadow),
        minute_hand=hand_segment(layout, frame.minute_angle, dial.minute_hand, dial.hand_shadow),
        second_hand=hand_segment(
            layout,
            frame.second_angle,
            dial.second_hand,
            second_hand_shadow(dial, frame.blur_direction),
        ),
    )
