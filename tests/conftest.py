import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from engine.clock_engine import ClockEngine
from engine.frame_driver import ManualFrameDriver
from lifecycle.task_registry import TaskRegistry
from models.clock import ClockReading
from models.physics import PhysicsConfig
from rendering.virtual_renderer import VirtualDialRenderer
from services.time_source import FixedTimeSource


@pytest.fixture
def physics():
    return PhysicsConfig()


@pytest.fixture
def time_source():
    """Wall clock parked at 10:15:30.000"""
    return FixedTimeSource(ClockReading(10, 15, 30, 0))


@pytest.fixture
def driver():
    return ManualFrameDriver()


@pytest.fixture
def renderer():
    return VirtualDialRenderer()


@pytest.fixture
def engine(driver, renderer, time_source):
    clock = ClockEngine(driver, renderer=renderer, time_source=time_source)
    yield clock
    clock.stop()


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry.reset_instance()
    yield
    TaskRegistry.reset_instance()
