"""Playback controller tests."""

from __future__ import annotations

import random

import pytest

from conftest import make_graph
from scenereel.models import SceneGraph
from scenereel.playback import PlaybackController, PlaybackState, VirtualScheduler


class TestInstall:
    def test_starts_idle(self, controller):
        assert controller.state == PlaybackState.IDLE
        assert controller.cursor is None
        assert controller.current_scene is None

    def test_install_rewinds_and_pauses(self, loaded, scheduler, graph):
        loaded.play()
        loaded.next()
        assert loaded.state == PlaybackState.PLAYING

        loaded.install_sequence(graph)
        assert loaded.state == PlaybackState.PAUSED
        assert loaded.cursor == 0
        assert loaded.auto_advancing is False
        assert scheduler.pending == []

    def test_stale_timer_never_fires_against_new_sequence(self, loaded, scheduler):
        loaded.play()
        loaded.install_sequence(make_graph((2.0, 2.0)))
        scheduler.advance(60)
        assert loaded.cursor == 0
        assert loaded.current_scene.id == "s1"

    def test_cancelled_callback_run_late_is_ignored(self, loaded, scheduler):
        loaded.play()
        callback = scheduler.pending[0].callback
        loaded.pause()
        callback()
        assert loaded.cursor == 0
        assert loaded.state == PlaybackState.PAUSED

    def test_superseded_callback_does_not_double_advance(self, loaded, scheduler):
        loaded.play()
        callback = scheduler.pending[0].callback
        loaded.next()
        callback()
        assert loaded.cursor == 1
        assert len(scheduler.pending) == 1

    def test_clear_returns_to_idle(self, loaded, scheduler):
        loaded.play()
        loaded.clear()
        assert loaded.state == PlaybackState.IDLE
        assert loaded.length == 0
        assert scheduler.pending == []


class TestAutoAdvance:
    def test_normal_pacing_scenario(self, loaded, scheduler):
        loaded.play()
        assert [t.delay for t in scheduler.pending] == [pytest.approx(3.6)]

        scheduler.run_next()
        assert loaded.cursor == 1
        assert [t.delay for t in scheduler.pending] == [pytest.approx(4.0)]

        scheduler.run_next()
        assert loaded.cursor == 2
        assert [t.delay for t in scheduler.pending] == [pytest.approx(3.6)]

        scheduler.run_next()
        assert loaded.cursor == 2
        assert loaded.auto_advancing is False
        assert loaded.state == PlaybackState.PAUSED
        assert scheduler.pending == []
        assert scheduler.now == pytest.approx(11.2)

    def test_does_not_advance_early(self, loaded, scheduler):
        loaded.play()
        scheduler.advance(3.5)
        assert loaded.cursor == 0
        scheduler.advance(0.2)
        assert loaded.cursor == 1

    def test_tick_at_last_scene_stops(self, loaded):
        loaded.next()
        loaded.next()
        loaded.play()
        loaded.tick()
        assert loaded.cursor == 2
        assert loaded.auto_advancing is False

    def test_single_scene(self, controller, scheduler):
        controller.install_sequence(make_graph((1.0,)))
        controller.play()
        assert len(scheduler.pending) == 1
        assert scheduler.pending[0].delay == pytest.approx(3.8)

        scheduler.run_next()
        assert controller.cursor == 0
        assert controller.auto_advancing is False

    def test_tick_ignored_when_paused(self, loaded):
        loaded.tick()
        assert loaded.cursor == 0

    def test_missing_duration_uses_default(self, controller, scheduler):
        graph = SceneGraph.model_validate({"scenes": [{"id": "a"}, {"id": "b"}]})
        controller.install_sequence(graph)
        controller.play()
        assert scheduler.pending[0].delay == pytest.approx(3.6)


class FailingScheduler:
    def call_later(self, delay, callback):
        raise RuntimeError("no running event loop")


class TestSchedulerFailure:
    def test_failed_play_stays_paused(self):
        controller = PlaybackController(scheduler=FailingScheduler())
        controller.install_sequence(make_graph())
        with pytest.raises(RuntimeError):
            controller.play()
        assert controller.state == PlaybackState.PAUSED
        assert controller.pending is False

    def test_play_works_once_scheduler_recovers(self, scheduler):
        failing = FailingScheduler()
        controller = PlaybackController(scheduler=failing)
        controller.install_sequence(make_graph())
        with pytest.raises(RuntimeError):
            controller.play()

        controller._scheduler = scheduler
        controller.play()
        assert controller.state == PlaybackState.PLAYING
        assert len(scheduler.pending) == 1


class TestManualControl:
    def test_empty_sequence_is_noop(self, controller, scheduler):
        controller.install_sequence(SceneGraph())
        controller.play()
        controller.next()
        controller.previous()
        assert controller.state == PlaybackState.PAUSED
        assert controller.auto_advancing is False
        assert controller.current_scene is None
        assert scheduler.pending == []

    def test_navigation_clamps(self, loaded):
        loaded.previous()
        assert loaded.cursor == 0
        for _ in range(5):
            loaded.next()
        assert loaded.cursor == 2

    def test_pause_keeps_cursor(self, loaded, scheduler):
        loaded.play()
        scheduler.run_next()
        loaded.pause()
        assert loaded.cursor == 1
        assert loaded.state == PlaybackState.PAUSED
        assert scheduler.pending == []

    def test_navigation_while_paused_schedules_nothing(self, loaded, scheduler):
        loaded.next()
        assert loaded.cursor == 1
        assert scheduler.pending == []

    def test_rapid_navigation_leaves_one_timer(self, loaded, scheduler):
        loaded.play()
        loaded.next()
        loaded.next()
        loaded.previous()
        assert len(scheduler.pending) == 1
        assert loaded.cursor == 1
        assert scheduler.pending[0].delay == pytest.approx(4.0)

    def test_navigation_restarts_hold_clock(self, loaded, scheduler):
        loaded.play()
        scheduler.advance(3.0)
        loaded.next()
        scheduler.advance(3.0)
        assert loaded.cursor == 1
        scheduler.advance(1.0)
        assert loaded.cursor == 2

    def test_reset(self, loaded, scheduler):
        loaded.play()
        scheduler.run_next()
        loaded.reset()
        assert loaded.cursor == 0
        assert loaded.state == PlaybackState.PAUSED
        assert scheduler.pending == []

    def test_toggle(self, loaded):
        loaded.toggle()
        assert loaded.state == PlaybackState.PLAYING
        loaded.toggle()
        assert loaded.state == PlaybackState.PAUSED

    def test_play_twice_keeps_one_timer(self, loaded, scheduler):
        loaded.play()
        loaded.play()
        assert len(scheduler.pending) == 1

    def test_set_pacing_reschedules(self, loaded, scheduler):
        loaded.play()
        loaded.set_pacing("fast")
        assert len(scheduler.pending) == 1
        assert scheduler.pending[0].delay == pytest.approx(2.6)


class TestInvariants:
    def test_cursor_stays_in_bounds(self):
        rng = random.Random(7)
        for length in (1, 2, 5):
            scheduler = VirtualScheduler()
            controller = PlaybackController(scheduler=scheduler)
            controller.install_sequence(make_graph([0.5] * length))
            ops = [
                controller.play, controller.pause, controller.next,
                controller.previous, controller.reset, controller.toggle,
                lambda: scheduler.advance(rng.uniform(0, 5)),
            ]
            for _ in range(300):
                rng.choice(ops)()
                assert 0 <= controller.cursor < length
                assert len(scheduler.pending) <= 1
                assert controller.pending == (len(scheduler.pending) == 1)


class TestObservers:
    def test_listener_receives_snapshots(self, loaded, scheduler):
        seen = []
        loaded.subscribe(seen.append)
        loaded.play()
        scheduler.run_next()
        assert [s.cursor for s in seen] == [0, 1]
        assert seen[-1].scene.id == "s2"
        assert seen[-1].profile.kind.value == "crossfade"

    def test_failing_listener_does_not_break_playback(self, loaded, scheduler):
        def boom(snapshot):
            raise RuntimeError("render failed")

        loaded.subscribe(boom)
        loaded.play()
        scheduler.run_next()
        assert loaded.cursor == 1

    def test_unsubscribe(self, loaded):
        seen = []
        unsubscribe = loaded.subscribe(seen.append)
        unsubscribe()
        loaded.next()
        assert seen == []
