"""
Tests for auto-play.

Ticks are driven by a manual scheduler so timing is deterministic; one
test runs on a real asyncio event loop.
"""

import asyncio

import pytest

from treewalk.core.engine import AutoPlayTimer, ExecutionEngine
from treewalk.errors import SchedulerUnavailableError


class TestAutoPlay:
    """Tests for play, pause and set_speed."""

    def test_play_steps_at_interval(self, engine, scheduler):
        """One step per 500 ms by default."""
        engine.play()

        assert engine.is_playing()
        assert engine.get_current_step_index() == -1

        scheduler.advance(0.5)
        assert engine.get_current_step_index() == 0

        scheduler.advance(0.25)
        assert engine.get_current_step_index() == 0

        scheduler.advance(1.25)
        assert engine.get_current_step_index() == 3

    def test_pause_stops_ticks(self, engine, scheduler):
        engine.play()
        scheduler.advance(1.0)
        engine.pause()

        assert not engine.is_playing()
        assert scheduler.pending() == 0

        scheduler.advance(5.0)
        assert engine.get_current_step_index() == 1

    def test_pause_when_idle(self, engine):
        """Pausing without playing is harmless."""
        seen = []
        engine.subscribe(seen.append)

        engine.pause()

        assert not engine.is_playing()
        assert seen == []

    def test_play_is_idempotent(self, engine, scheduler):
        """A second play neither doubles the rate nor re-notifies."""
        engine.play()
        engine.play()

        assert scheduler.pending() == 1
        scheduler.advance(0.5)
        assert engine.get_current_step_index() == 0

    def test_set_speed_while_playing(self, engine, scheduler):
        """Changing speed restarts the timer at the new interval without skipping steps."""
        engine.play()
        scheduler.advance(0.5)

        engine.set_speed(100)

        assert engine.is_playing()
        assert engine.get_state().animation_speed == 100
        assert scheduler.pending() == 1
        scheduler.advance(0.3)
        assert engine.get_current_step_index() == 3

    def test_set_speed_while_paused(self, engine, scheduler):
        engine.set_speed(250)

        assert not engine.is_playing()
        assert scheduler.pending() == 0

        engine.play()
        scheduler.advance(0.5)
        assert engine.get_current_step_index() == 1

    @pytest.mark.parametrize("speed", [0, -10])
    def test_set_speed_rejects_non_positive(self, engine, speed):
        with pytest.raises(ValueError):
            engine.set_speed(speed)
        assert engine.get_state().animation_speed == 500

    def test_stops_at_end(self, engine, scheduler):
        """Reaching the last step ends auto-play on its own."""
        engine.play()
        scheduler.advance(0.5 * 70)

        assert engine.is_at_end()
        assert not engine.is_playing()
        assert scheduler.pending() == 0
        assert engine.get_state().traversal_output == [1, 2, 3, 4, 5, 6, 7]

    def test_play_at_end_stops_on_first_tick(self, engine, scheduler):
        engine.run_to_end()
        engine.play()
        scheduler.advance(0.5)

        assert not engine.is_playing()
        assert scheduler.pending() == 0

    def test_manual_step_while_playing(self, engine, scheduler):
        """Manual stepping during playback keeps the timeline consistent."""
        engine.play()
        engine.next_step()
        scheduler.advance(0.5)

        assert engine.get_current_step_index() == 1

    def test_undo_after_pause_stays_paused(self, engine, scheduler):
        """Snapshots taken mid-play do not bring playback back."""
        engine.play()
        scheduler.advance(1.5)
        engine.pause()
        engine.set_speed(200)

        assert engine.previous_step() is True

        state = engine.get_state()
        assert state.current_step_index == 1
        assert state.is_playing is False
        assert state.animation_speed == 200

    def test_initialize_stops_playing(self, engine, scheduler):
        engine.play()
        engine.initialize("preorder")

        assert not engine.is_playing()
        assert scheduler.pending() == 0

    def test_play_without_event_loop(self):
        """Without a scheduler or running loop, play fails cleanly."""
        eng = ExecutionEngine()
        eng.initialize("inorder")

        with pytest.raises(SchedulerUnavailableError):
            eng.play()
        assert not eng.is_playing()

    def test_runs_on_asyncio_loop(self):
        """The default scheduler is the running event loop."""

        async def scenario():
            eng = ExecutionEngine()
            eng.initialize("postorder")
            eng.set_speed(1)
            done = asyncio.Event()
            eng.subscribe(lambda state: None if state.is_playing else done.set())
            eng.play()
            await asyncio.wait_for(done.wait(), timeout=5)
            return eng

        eng = asyncio.run(scenario())

        assert eng.is_at_end()
        assert eng.get_state().traversal_output == [1, 3, 2, 5, 7, 6, 4]


class TestAutoPlayTimer:
    """Tests for the timer on its own."""

    def test_tick_until_false(self, scheduler):
        calls = []

        def tick():
            calls.append(scheduler.now)
            return len(calls) < 3

        timer = AutoPlayTimer(scheduler)
        timer.start(200, tick)
        scheduler.advance(2.0)

        assert calls == pytest.approx([0.2, 0.4, 0.6])
        assert scheduler.pending() == 0

    def test_cancel(self, scheduler):
        timer = AutoPlayTimer(scheduler)
        timer.start(100, lambda: True)
        timer.cancel()

        assert not timer.active
        assert scheduler.pending() == 0

    def test_start_when_active_is_noop(self, scheduler):
        timer = AutoPlayTimer(scheduler)
        timer.start(100, lambda: True)
        timer.start(50, lambda: True)

        assert timer.interval_ms == 100
        assert scheduler.pending() == 1

    def test_start_rejects_non_positive(self, scheduler):
        with pytest.raises(ValueError):
            AutoPlayTimer(scheduler).start(0, lambda: True)
