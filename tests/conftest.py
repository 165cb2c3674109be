"""Shared fixtures for chat-reveal tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable

import pytest

from chat_reveal.config import load_config
from chat_reveal.types import ChatRevealConfig, RevealConfig


class ManualTimer:
    """Repeating timer that only fires when the test says so."""

    def __init__(self, interval: float, callback: Callable[[], object]):
        self.interval = interval
        self.callback = callback
        self.active = True
        self.fired = 0

    def stop(self) -> None:
        self.active = False


class ManualClock:
    """Deterministic stand-in for Textual's ``set_interval``."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def set_interval(self, interval: float, callback: Callable[[], object]) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.active]

    def tick(self, n: int = 1) -> None:
        """Fire every active timer *n* times, in arming order."""
        for _ in range(n):
            for timer in list(self.active_timers):
                if timer.active:
                    timer.fired += 1
                    timer.callback()

    def run_until_idle(self, max_ticks: int = 10_000) -> int:
        """Tick until no timer is armed. Returns the number of ticks."""
        ticks = 0
        while self.active_timers and ticks < max_ticks:
            self.tick()
            ticks += 1
        return ticks


class FakeReplySource:
    """Reply source that returns canned replies (no I/O)."""

    def __init__(self, replies: list[str] | None = None):
        self._replies = replies or ["Hello! I'm a **test** assistant."]
        self._call_count = 0
        self.prompts: list[str] = []

    def reply(self, text: str) -> str:
        idx = min(self._call_count, len(self._replies) - 1)
        self._call_count += 1
        self.prompts.append(text)
        return self._replies[idx]


class Recorder:
    """Collects scheduler callbacks for assertions."""

    def __init__(self):
        self.ticks: list[list] = []
        self.completions = 0

    def on_tick(self, visible) -> None:
        self.ticks.append(visible)

    def on_complete(self) -> None:
        self.completions += 1

    @property
    def texts(self) -> list[str]:
        return ["".join(s.text for s in visible) for visible in self.ticks]


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def reveal_config() -> RevealConfig:
    return RevealConfig(mode="character", interval_ms=10)


@pytest.fixture
def sample_config() -> ChatRevealConfig:
    return load_config(config_dict={
        "reveal": {"mode": "character", "interval_ms": 10},
        "chain": {"split_blocks": True, "max_blocks": 4},
    })


@pytest.fixture
def tmp_dir():
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)
