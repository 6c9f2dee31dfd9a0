"""
Tests for dial geometry: layout, ticks, numerals, hands and motion blur shadow.
"""

import pytest

from models.clock import ClockFrame, ClockReading
from models.config import DialConfig, HandStyle
from models.enums import AnimationPhase, BlurDirection
from rendering.dial_geometry import (
    MOTION_BLUR_ALPHA,
    build_scene,
    compute_layout,
    numeral_positions,
    parse_color,
    polar,
    second_hand_shadow,
    tick_marks,
)


def make_frame(second_angle=90.0, blur=BlurDirection.NONE):
    return ClockFrame(
        hour_angle=0.0,
        minute_angle=180.0,
        second_angle=second_angle,
        blur_direction=blur,
        phase=AnimationPhase.SETTLED,
        reading=ClockReading(12, 30, 15, 0),
    )


class TestLayout:

    def test_border_dominates_on_small_dial(self):
        layout = compute_layout(20, 20, DialConfig(border_width=5))
        assert layout.radius == pytest.approx(5.0)

    def test_fifteen_percent_margin_on_large_dial(self):
        layout = compute_layout(400, 300, DialConfig(border_width=5))
        assert layout.radius == pytest.approx(150 - 22.5)
        assert layout.numeral_radius == pytest.approx(0.85 * layout.radius)
        assert (layout.center.x, layout.center.y) == (200, 150)

    @pytest.mark.parametrize("angle, expected", [(0, (100, 50)), (90, (150, 100)), (180, (100, 150)), (270, (50, 100))])
    def test_polar_is_clockwise_from_twelve(self, angle, expected):
        layout = compute_layout(200, 200, DialConfig())
        point = polar(layout, angle, 50)
        assert point.x == pytest.approx(expected[0])
        assert point.y == pytest.approx(expected[1])


class TestTicksAndNumerals:

    def test_sixty_ticks_every_fifth_major(self):
        layout = compute_layout(300, 300, DialConfig())
        ticks = tick_marks(layout, DialConfig())

        assert len(ticks) == 60
        assert [t.index for t in ticks if t.major] == list(range(0, 60, 5))

    def test_minor_ticks_optional(self):
        dial = DialConfig(show_minor_ticks=False)
        ticks = tick_marks(compute_layout(300, 300, dial), dial)

        assert len(ticks) == 12
        assert all(t.major for t in ticks)

    def test_tick_length(self):
        dial = DialConfig()
        layout = compute_layout(300, 300, dial)
        top = tick_marks(layout, dial)[0]

        assert top.inner.y - top.outer.y == pytest.approx(dial.major_tick_length)

    def test_twelve_numerals_with_twelve_on_top(self):
        layout = compute_layout(300, 300, DialConfig())
        numerals = numeral_positions(layout)

        assert [n.label for n in numerals] == [str(i) for i in range(1, 13)]
        twelve = numerals[-1].position
        assert twelve.x == pytest.approx(layout.center.x)
        assert twelve.y == pytest.approx(layout.center.y - layout.numeral_radius)

    def test_numerals_hidden(self):
        scene = build_scene(make_frame(), 300, 300, DialConfig(show_numerals=False))
        assert scene.numerals == []


class TestHands:

    def test_second_hand_counterweight(self):
        dial = DialConfig()
        scene = build_scene(make_frame(second_angle=90.0), 300, 300, dial)
        layout = scene.layout

        assert scene.second_hand.tip.x == pytest.approx(layout.center.x + 0.9 * layout.radius)
        assert scene.second_hand.start.x == pytest.approx(layout.center.x - 0.15 * layout.radius)

    def test_hour_hand_starts_at_centre(self):
        scene = build_scene(make_frame(), 300, 300, DialConfig())
        assert scene.hour_hand.start.x == pytest.approx(scene.layout.center.x)
        assert scene.hour_hand.start.y == pytest.approx(scene.layout.center.y)

    def test_visual_angle_beyond_360_draws_normally(self):
        a = build_scene(make_frame(second_angle=362.0), 300, 300, DialConfig())
        b = build_scene(make_frame(second_angle=2.0), 300, 300, DialConfig())
        assert a.second_hand.tip.x == pytest.approx(b.second_hand.tip.x)
        assert a.second_hand.tip.y == pytest.approx(b.second_hand.tip.y)


class TestParseColor:

    @pytest.mark.parametrize("value, expected", [
        ("#FF0000", (255, 0, 0)),
        ("#0f0", (0, 255, 0)),
        ("#12ab9C", (18, 171, 156)),
        ("rgb(10, 20, 30)", (10, 20, 30)),
        ("rgba(1,2,3,0.5)", (1, 2, 3)),
    ])
    def test_supported_formats(self, value, expected):
        assert parse_color(value) == expected

    @pytest.mark.parametrize("value", ["red", "#12345", "hsl(0, 50%, 50%)", ""])
    def test_fallback_is_red(self, value):
        assert parse_color(value) == (255, 0, 0)


class TestMotionBlurShadow:

    def test_no_blur_uses_standard_shadow(self):
        dial = DialConfig()
        assert second_hand_shadow(dial, BlurDirection.NONE) == dial.hand_shadow

    def test_anticlockwise_blur_shifts_negative(self):
        dial = DialConfig()
        shadow = second_hand_shadow(dial, BlurDirection.ANTICLOCKWISE)

        assert shadow.offset_x == pytest.approx(dial.hand_shadow.offset_x - dial.motion_blur_offset)
        assert shadow.offset_y == pytest.approx(dial.hand_shadow.offset_y - dial.motion_blur_offset)
        assert shadow.blur == dial.motion_blur_strength
        assert shadow.color == f"rgba(255,0,0,{MOTION_BLUR_ALPHA})"

    def test_clockwise_blur_shifts_positive(self):
        dial = DialConfig()
        shadow = second_hand_shadow(dial, BlurDirection.CLOCKWISE)
        assert shadow.offset_x == pytest.approx(dial.hand_shadow.offset_x + dial.motion_blur_offset)

    def test_blur_colour_follows_hand_colour(self):
        dial = DialConfig(second_hand=HandStyle("#00f", 0.9, 2.0, 0.15))
        shadow = second_hand_shadow(dial, BlurDirection.CLOCKWISE)
        assert shadow.color == "rgba(0,0,255,0.35)"

    def test_scene_applies_blur_only_to_second_hand(self):
        dial = DialConfig()
        scene = build_scene(make_frame(blur=BlurDirection.ANTICLOCKWISE), 300, 300, dial)

        assert scene.hour_hand.shadow == dial.hand_shadow
        assert scene.second_hand.shadow.blur == dial.motion_blur_strength
