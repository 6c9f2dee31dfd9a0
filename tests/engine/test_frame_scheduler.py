"""
Tests for FrameScheduler throttling and start/stop behaviour.
"""

import pytest

from engine.frame_driver import ManualFrameDriver
from engine.frame_scheduler import FrameScheduler


@pytest.fixture
def frames():
    return []


@pytest.fixture
def scheduler(driver, frames):
    return FrameScheduler(driver, frames.append, max_refresh_rate_hz=50)


class TestThrottle:

    def test_first_frame_always_accepted(self, driver, scheduler, frames):
        scheduler.start()
        driver.fire(3.0)
        assert frames == [3.0]

    def test_frames_closer_than_interval_are_skipped(self, driver, scheduler, frames):
        """60 Hz driver against a 50 Hz throttle"""
        scheduler.start()
        for i in range(7):
            driver.fire(i * 16.7)

        assert frames == pytest.approx([0.0, 33.4, 66.8, 100.2])
        assert scheduler.frames_throttled == 3

    def test_exact_interval_is_accepted(self, driver, scheduler, frames):
        scheduler.start()
        driver.fire(0.0)
        driver.fire(20.0)
        assert frames == [0.0, 20.0]

    def test_throttled_callback_requests_next_frame(self, driver, scheduler, frames):
        scheduler.start()
        driver.fire(0.0)
        driver.fire(5.0)

        assert driver.pending == 1
        assert frames == [0.0]

    def test_duplicate_timestamp_not_processed_twice(self, driver, scheduler, frames):
        scheduler.start()
        driver.fire(100.0)
        driver.fire(100.0)
        assert frames == [100.0]

    def test_accepted_frames_are_strictly_increasing(self, driver, scheduler, frames):
        scheduler.start()
        t = 0.0
        for step in (1, 19, 0, 25, 3, 40, 20, 0.5):
            t += step
            driver.fire(t)

        assert all(b - a >= scheduler.min_interval_ms for a, b in zip(frames, frames[1:]))


class TestLifecycle:

    def test_start_requests_one_frame(self, driver, scheduler):
        scheduler.start()
        assert driver.pending == 1
        assert scheduler.running

    def test_start_is_idempotent(self, driver, scheduler):
        scheduler.start()
        scheduler.start()
        assert driver.pending == 1

    def test_stop_cancels_pending_request(self, driver, scheduler, frames):
        scheduler.start()
        scheduler.stop()

        assert driver.pending == 0
        assert driver.cancelled == 1
        assert driver.fire(10.0) == 0
        assert frames == []

    def test_stop_is_idempotent(self, driver, scheduler):
        scheduler.start()
        scheduler.stop()
        scheduler.stop()
        assert driver.cancelled == 1

    def test_stale_callback_after_stop_is_ignored(self, frames):
        """A callback already dequeued by the host must not run the handler"""
        captured = []

        class GrabbingDriver:
            def schedule(self, callback):
                captured.append(callback)
                return len(captured)

            def cancel(self, handle):
                pass

        scheduler = FrameScheduler(GrabbingDriver(), frames.append)
        scheduler.start()
        scheduler.stop()

        captured[0](50.0)

        assert frames == []

    def test_stale_callback_after_restart_is_ignored(self, frames):
        captured = []

        class GrabbingDriver:
            def schedule(self, callback):
                captured.append(callback)
                return len(captured)

            def cancel(self, handle):
                pass

        scheduler = FrameScheduler(GrabbingDriver(), frames.append)
        scheduler.start()
        scheduler.stop()
        scheduler.start()

        captured[0](50.0)
        captured[1](60.0)

        assert frames == [60.0]

    def test_restart_resets_throttle(self, driver, scheduler, frames):
        scheduler.start()
        driver.fire(100.0)
        scheduler.stop()
        scheduler.start()
        driver.fire(105.0)

        assert frames == [100.0, 105.0]

    def test_handler_stopping_scheduler_prevents_rerequest(self, driver):
        scheduler = FrameScheduler(driver, lambda ts: scheduler.stop())
        scheduler.start()
        driver.fire(0.0)

        assert not scheduler.running
        assert driver.pending == 0


class TestErrors:

    def test_handler_error_is_counted_and_loop_continues(self, driver):
        calls = []

        def on_frame(ts):
            calls.append(ts)
            raise RuntimeError("boom")

        scheduler = FrameScheduler(driver, on_frame)
        scheduler.start()
        driver.fire(0.0)
        driver.fire(20.0)

        assert calls == [0.0, 20.0]
        assert scheduler.frame_errors == 2
        assert scheduler.running

    def test_repeated_errors_logged_once_per_streak(self, driver, capsys):
        failing = [True]

        def on_frame(ts):
            if failing[0]:
                raise RuntimeError("boom")

        scheduler = FrameScheduler(driver, on_frame)
        scheduler.start()
        for i in range(5):
            driver.fire(i * 20.0)

        out = capsys.readouterr().out
        assert out.count("Frame error:") == 1
        assert scheduler.frame_errors == 5

        failing[0] = False
        driver.fire(100.0)
        failing[0] = True
        driver.fire(120.0)

        out = capsys.readouterr().out
        assert "Frame handler recovered" in out
        assert out.count("Frame error:") == 1


class TestManualFrameDriver:

    def test_backward_timestamp_rejected(self, driver):
        driver.fire(10.0)
        with pytest.raises(ValueError):
            driver.fire(5.0)

    def test_advance(self, driver, scheduler, frames):
        scheduler.start()
        driver.advance(20)
        driver.advance(20)
        assert frames == [20, 40]
