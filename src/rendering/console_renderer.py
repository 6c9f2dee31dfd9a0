"""
Console dial renderer

Rasterises the dial geometry into a character grid and repaints the
terminal in place. Terminal cells are roughly twice as tall as they are
wide, so geometry is computed on a grid with doubled height and each y is
halved when plotted.
"""

from __future__ import annotations

import math
import sys
from dataclasses import replace
from typing import List, Optional, TextIO, Tuple

from models.clock import ClockFrame
from models.config import DialConfig
from models.enums import BlurDirection, LogCategory
from rendering.dial_geometry import DialLayout, Point, build_scene, parse_color, polar
from rendering.renderer_interface import IClockRenderer
from utils.logger import Colors, get_logger

log = get_logger().for_category(LogCategory.RENDER)

CLEAR_SCREEN = "\033[H\033[2J"
BLUR_TRAIL_DEGREES = 3.0
BORDER_CELLS = 1.5

# (character, foreground code, background code)
Cell = Tuple[str, str, str]


def fg(color: str) -> str:
    r, g, b = parse_color(color)
    return f"\033[38;2;{r};{g};{b}m"


def bg(color: str) -> str:
    r, g, b = parse_color(color)
    return f"\033[48;2;{r};{g};{b}m"


class ConsoleDialRenderer(IClockRenderer):
    """
    Draws the clock as text.

    Hour hand '#', minute hand '+', second hand 'o'. During overshoot,
    recoil and settle a dim trail marks the side the jump came from.
    With colours enabled the dial face, border, ticks, numerals, hands and
    centre pin use the 24-bit colours from DialConfig.
    """

    def __init__(
        self,
        dial: Optional[DialConfig] = None,
        size: Tuple[int, int] = (41, 21),
        stream: Optional[TextIO] = None,
        use_colors: bool = True,
    ):
        self.cols, self.rows = size
        # Pixel sizes from the dial config make no sense in character cells
        self.dial = replace(
            dial or DialConfig(),
            border_width=1.0,
            major_tick_length=1.0,
            minor_tick_length=0.0,
        )
        self.stream = stream or sys.stdout
        self.use_colors = use_colors
        log.debug("ConsoleDialRenderer ready", cols=self.cols, rows=self.rows)

    # === IClockRenderer ===

    def render(self, frame: ClockFrame) -> None:
        self.stream.write(CLEAR_SCREEN + self.draw(frame))
        self.stream.flush()

    def clear(self) -> None:
        self.stream.write(CLEAR_SCREEN)
        self.stream.flush()

    # === Rasterisation ===

    def draw(self, frame: ClockFrame) -> str:
        """Return the full text for one frame (grid plus status line)"""
        scene = build_scene(frame, self.cols, self.rows * 2, self.dial)
        dial = self.dial
        grid: List[List[Cell]] = [
            [(" ", "", self._face(scene.layout, col, row)) for col in range(self.cols)]
            for row in range(self.rows)
        ]

        for tick in scene.ticks:
            self._plot(grid, tick.outer, "o" if tick.major else ".", fg(tick.color))

        for numeral in scene.numerals:
            self._text(grid, numeral.position, numeral.label, fg(dial.numeral_color))

        if frame.blur_direction != BlurDirection.NONE:
            trail_angle = frame.second_angle + int(frame.blur_direction) * BLUR_TRAIL_DEGREES
            trail_tip = polar(scene.layout, trail_angle, dial.second_hand.length * scene.layout.radius)
            self._line(grid, scene.layout.center, trail_tip, ":", Colors.DIM + fg(scene.second_hand.color))

        for hand, char in ((scene.hour_hand, "#"), (scene.minute_hand, "+"), (scene.second_hand, "o")):
            self._line(grid, hand.start, hand.tip, char, fg(hand.color))
        self._plot(grid, scene.layout.center, "@", fg(dial.center_pin_color))

        lines = ["".join(self._paint(cell) for cell in row).rstrip() for row in grid]
        lines.append(self._status(frame))
        return "\n".join(lines) + "\n"

    def _status(self, frame: ClockFrame) -> str:
        r = frame.reading
        return (
            f"{r.hours:02d}:{r.minutes:02d}:{r.seconds:02d}.{r.milliseconds:03d}  "
            f"{frame.phase.name:<9} sec={frame.second_angle:7.2f}°  blur={int(frame.blur_direction):+d}"
        )

    def _face(self, layout: DialLayout, col: int, row: int) -> str:
        """Background code for a cell: dial face, border ring or none"""
        distance = math.hypot(col - layout.center.x, row * 2 - layout.center.y)
        if distance <= layout.radius:
            return bg(self.dial.dial_color)
        if distance <= layout.radius + BORDER_CELLS:
            return bg(self.dial.border_color)
        return ""

    def _paint(self, cell: Cell) -> str:
        char, color, background = cell
        codes = background + (color if char != " " else "")
        if not self.use_colors or not codes:
            return char
        return f"{codes}{char}{Colors.RESET}"

    def _cell(self, point: Point) -> Tuple[int, int]:
        return int(round(point.x)), int(round(point.y / 2))

    def _plot(self, grid: List[List[Cell]], point: Point, char: str, color: str) -> None:
        col, row = self._cell(point)
        if 0 <= row < self.rows and 0 <= col < self.cols:
            grid[row][col] = (char, color, grid[row][col][2])

    def _text(self, grid: List[List[Cell]], point: Point, text: str, color: str) -> None:
        start = Point(point.x - (len(text) - 1) / 2, point.y)
        for i, char in enumerate(text):
            self._plot(grid, Point(start.x + i, start.y), char, color)

    def _line(self, grid: List[List[Cell]], start: Point, end: Point, char: str, color: str) -> None:
        length = max(abs(end.x - start.x), abs(end.y - start.y) / 2)
        steps = max(1, int(length * 2))
        for i in range(steps + 1):
            t = i / steps
            self._plot(
                grid,
                Point(start.x + (end.x - start.x) * t, start.y + (end.y - start.y) * t),
                char,
                color,
            )
