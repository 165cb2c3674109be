"""Tests for RevealScheduler."""

import pytest

from chat_reveal.core.reveal import RevealScheduler
from chat_reveal.core.tokenizer import plain_text
from chat_reveal.types import RevealConfig, SchedulerState, Span


def make(clock, recorder, source="Hi", **kwargs) -> RevealScheduler:
    kwargs.setdefault("interval_ms", 10)
    return RevealScheduler(
        source,
        clock=clock,
        on_tick=recorder.on_tick,
        on_complete=recorder.on_complete,
        **kwargs,
    )


class TestCharacterMode:
    def test_two_char_message(self, clock, recorder):
        sched = make(clock, recorder, "Hi")
        sched.start()
        assert sched.state is SchedulerState.REVEALING
        assert len(clock.active_timers) == 1
        assert clock.active_timers[0].interval == pytest.approx(0.01)

        clock.tick()
        assert recorder.ticks[-1] == [Span("plain", "H")]
        assert recorder.completions == 0

        clock.tick()
        assert recorder.ticks[-1] == [Span("plain", "Hi")]
        assert recorder.completions == 1
        assert sched.state is SchedulerState.COMPLETE

        # timer cleared: no third tick
        assert clock.active_timers == []
        clock.tick()
        assert len(recorder.ticks) == 2
        assert recorder.completions == 1

    def test_formatting_preserved_while_revealing(self, clock, recorder):
        sched = make(clock, recorder, "Hello **world**!")
        sched.start()
        clock.tick(8)
        assert recorder.ticks[-1] == [Span("plain", "Hello "), Span("bold", "wo")]

    def test_one_tick_per_visible_char(self, clock, recorder):
        sched = make(clock, recorder, "Check [docs](https://x.io) now")
        sched.start()
        ticks = clock.run_until_idle()
        assert ticks == 14
        assert recorder.texts[-1] == "Check docs now"
        assert recorder.completions == 1
        assert sched.cursor == sched.total_length == 14

    def test_visible_snapshot_property(self, clock, recorder):
        sched = make(clock, recorder, "abc")
        sched.start()
        clock.tick()
        assert sched.visible == [Span("plain", "a")]


class TestWordMode:
    def test_advances_by_word(self, clock, recorder):
        sched = make(clock, recorder, "Hi there **you**", mode="word")
        sched.start()
        assert clock.active_timers[0].interval == pytest.approx(0.04)

        clock.tick()
        assert recorder.texts == ["Hi"]
        clock.tick()
        assert recorder.texts[-1] == "Hi there"
        clock.tick()
        assert recorder.ticks[-1][-1] == Span("bold", "you")
        assert recorder.completions == 1
        assert clock.active_timers == []

    def test_custom_multiplier(self, clock, recorder):
        sched = make(clock, recorder, "a b", mode="word", interval_ms=20, word_tick_multiplier=2)
        sched.start()
        assert clock.active_timers[0].interval == pytest.approx(0.04)

    def test_trailing_space_reaches_full_length(self, clock, recorder):
        sched = make(clock, recorder, "one two ", mode="word")
        sched.start()
        clock.run_until_idle()
        assert recorder.texts == ["one", "one two", "one two "]
        assert recorder.completions == 1


class TestRestart:
    def test_set_source_restarts_from_zero(self, clock, recorder):
        sched = make(clock, recorder, "First message text")
        sched.start()
        clock.tick(5)
        assert recorder.texts[-1] == "First"

        sched.set_source("Second")
        # one live timer, the first one stopped
        assert len(clock.active_timers) == 1
        assert clock.timers[0].active is False
        assert sched.cursor == 0

        recorder.ticks.clear()
        clock.run_until_idle()
        assert recorder.texts == ["S", "Se", "Sec", "Seco", "Secon", "Second"]
        assert not any("F" in t for t in recorder.texts)
        assert recorder.completions == 1

    def test_same_source_is_noop(self, clock, recorder):
        sched = make(clock, recorder, "Same")
        sched.start()
        clock.tick(2)
        sched.set_source("Same")
        assert sched.cursor == 2
        assert len(clock.timers) == 1

    def test_restart_after_complete_fires_again(self, clock, recorder):
        sched = make(clock, recorder, "ab")
        sched.start()
        clock.run_until_idle()
        sched.set_source("cd")
        clock.run_until_idle()
        assert recorder.completions == 2
        assert plain_text(sched.visible) == "cd"

    def test_start_twice_never_leaves_two_timers(self, clock, recorder):
        sched = make(clock, recorder, "abcdef")
        sched.start()
        sched.start()
        assert len(clock.active_timers) == 1


class TestAnimationDisabled:
    def test_jumps_to_complete(self, clock, recorder):
        sched = make(clock, recorder, "Hello **world**!", animation_enabled=False)
        sched.start()
        assert clock.timers == []
        assert sched.state is SchedulerState.COMPLETE
        assert sched.cursor == 12
        assert recorder.ticks == [[Span("plain", "Hello "), Span("bold", "world"), Span("plain", "!")]]
        assert recorder.completions == 1

    def test_disable_mid_reveal(self, clock, recorder):
        sched = make(clock, recorder, "abcdef")
        sched.start()
        clock.tick(2)
        sched.set_animation_enabled(False)
        assert clock.active_timers == []
        assert recorder.texts[-1] == "abcdef"
        assert recorder.completions == 1


class TestEdgeCases:
    def test_empty_source_completes_without_timer(self, clock, recorder):
        sched = make(clock, recorder, "")
        sched.start()
        assert clock.timers == []
        assert sched.state is SchedulerState.COMPLETE
        assert recorder.completions == 1

    def test_skip(self, clock, recorder):
        sched = make(clock, recorder, "abcdef")
        sched.start()
        clock.tick()
        sched.skip()
        assert recorder.texts[-1] == "abcdef"
        assert recorder.completions == 1
        assert clock.active_timers == []
        sched.skip()
        assert recorder.completions == 1

    def test_cancel_returns_to_idle(self, clock, recorder):
        sched = make(clock, recorder, "abcdef")
        sched.start()
        clock.tick(3)
        sched.cancel()
        assert sched.state is SchedulerState.IDLE
        assert clock.active_timers == []
        assert recorder.completions == 0

    def test_cancel_keeps_complete(self, clock, recorder):
        sched = make(clock, recorder, "a")
        sched.start()
        clock.tick()
        sched.cancel()
        assert sched.state is SchedulerState.COMPLETE

    def test_stray_tick_after_cancel_is_ignored(self, clock, recorder):
        sched = make(clock, recorder, "abc")
        sched.start()
        callback = clock.timers[0].callback
        sched.cancel()
        callback()
        assert recorder.ticks == []

    @pytest.mark.parametrize("kwargs", [
        {"mode": "sentence"},
        {"interval_ms": 0},
        {"word_tick_multiplier": 0},
    ])
    def test_invalid_arguments(self, clock, recorder, kwargs):
        with pytest.raises(ValueError):
            make(clock, recorder, "x", **kwargs)


def test_from_config(clock, recorder):
    config = RevealConfig(mode="word", interval_ms=5, word_tick_multiplier=3, animation_enabled=True)
    sched = RevealScheduler.from_config("a b", config, clock=clock, on_tick=recorder.on_tick)
    assert sched.mode == "word"
    assert sched.tick_seconds == pytest.approx(0.015)
    assert sched.tick_seconds == pytest.approx(config.tick_seconds)
