import pytest

from models.enums import AnimationPhase, RendererType
from models.physics import PhysicsConfig
from utils.serialization import Serializer


class TestEnumSerialization:

    def test_str_to_enum_is_case_insensitive(self):
        assert Serializer.str_to_enum(" console ", RendererType) is RendererType.CONSOLE

    def test_str_to_enum_passes_members_through(self):
        assert Serializer.str_to_enum(AnimationPhase.RECOIL, AnimationPhase) is AnimationPhase.RECOIL

    @pytest.mark.parametrize("value", ["hologram", 3, None])
    def test_str_to_enum_rejects_unknown(self, value):
        with pytest.raises(ValueError):
            Serializer.str_to_enum(value, RendererType)

    def test_enum_to_str(self):
        assert Serializer.enum_to_str(AnimationPhase.CREEPING) == "CREEPING"
        assert Serializer.enum_to_str(None) is None


def test_physics_to_dict():
    assert Serializer.physics_to_dict(PhysicsConfig()) == {
        "creep_duration_ms": 150.0,
        "creep_angle_degrees": 2.0,
        "overshoot_degrees": 2.0,
        "recoil_degrees": -1.5,
    }
