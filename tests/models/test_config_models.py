import math

import pytest

from models.config import SchedulerConfig
from models.physics import PhysicsConfig


class TestPhysicsConfigSanitized:

    def test_defaults_are_valid(self):
        config, warnings = PhysicsConfig().sanitized()

        assert config == PhysicsConfig(150.0, 2.0, 2.0, -1.5)
        assert warnings == []

    @pytest.mark.parametrize("value", [0, -10, math.nan, math.inf, "fast", None, True])
    def test_bad_creep_duration(self, value):
        config, warnings = PhysicsConfig(creep_duration_ms=value).sanitized()

        assert config.creep_duration_ms == 150.0
        assert len(warnings) == 1
        assert "creep_duration_ms" in warnings[0]

    def test_zero_creep_angle_is_allowed(self):
        config, warnings = PhysicsConfig(creep_angle_degrees=0).sanitized()

        assert config.creep_angle_degrees == 0
        assert warnings == []

    def test_negative_creep_angle(self):
        config, warnings = PhysicsConfig(creep_angle_degrees=-0.5).sanitized()

        assert config.creep_angle_degrees == 2.0
        assert len(warnings) == 1

    def test_unconventional_signs_are_kept(self):
        """Negative overshoot or positive recoil are odd but finite"""
        config, warnings = PhysicsConfig(overshoot_degrees=-1.0, recoil_degrees=0.5).sanitized()

        assert (config.overshoot_degrees, config.recoil_degrees) == (-1.0, 0.5)
        assert warnings == []

    def test_non_finite_overshoot_and_recoil(self):
        config, warnings = PhysicsConfig(overshoot_degrees=math.inf, recoil_degrees=math.nan).sanitized()

        assert (config.overshoot_degrees, config.recoil_degrees) == (2.0, -1.5)
        assert len(warnings) == 2

    def test_original_is_unchanged(self):
        original = PhysicsConfig(creep_duration_ms=-1)
        original.sanitized()
        assert original.creep_duration_ms == -1

    def test_excursion_bounds(self):
        physics = PhysicsConfig(creep_angle_degrees=3.0, overshoot_degrees=2.0, recoil_degrees=-1.5)
        assert physics.max_excursion == 3.0
        assert physics.min_excursion == -1.5

    def test_excursion_bounds_with_unconventional_signs(self):
        physics = PhysicsConfig(creep_angle_degrees=1.0, overshoot_degrees=-2.5, recoil_degrees=1.5)
        assert physics.max_excursion == 1.5
        assert physics.min_excursion == -2.5


class TestSchedulerConfig:

    def test_min_frame_interval(self):
        assert SchedulerConfig(max_refresh_rate_hz=50).min_frame_interval_ms == pytest.approx(20.0)

    @pytest.mark.parametrize("rate", [0, -5, math.nan, "50"])
    def test_bad_refresh_rate(self, rate):
        config, warnings = SchedulerConfig(max_refresh_rate_hz=rate).sanitized()

        assert config.max_refresh_rate_hz == 50.0
        assert len(warnings) == 1

    def test_bad_frame_interval(self):
        config, warnings = SchedulerConfig(frame_interval_ms=0).sanitized()

        assert config.frame_interval_ms == pytest.approx(1000 / 60)
        assert len(warnings) == 1
