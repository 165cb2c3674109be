"""RevealScheduler: timer-driven progressive disclosure of one message."""

from __future__ import annotations

import logging

from ..types import (
    REVEAL_MODES,
    Clock,
    CompleteCallback,
    RevealConfig,
    RevealMode,
    SchedulerState,
    Span,
    TickCallback,
    Timer,
)
from .slicer import plain_length, slice_at, word_boundaries
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class RevealScheduler:
    """Advance a visible-character (or visible-word) cursor on a timer.

    States: IDLE -> REVEALING -> COMPLETE.

    - Each tick moves the cursor, slices the spans, and calls ``on_tick``.
    - When the cursor reaches the plain length the timer is stopped and
      ``on_complete`` fires exactly once.
    - ``set_source`` with different text cancels the running timer before
      arming a new cycle at cursor 0, so one scheduler never owns two
      live timers.
    """

    def __init__(
        self,
        source: str,
        *,
        clock: Clock,
        on_tick: TickCallback | None = None,
        on_complete: CompleteCallback | None = None,
        mode: RevealMode = "character",
        interval_ms: int = 30,
        word_tick_multiplier: int = 4,
        animation_enabled: bool = True,
    ) -> None:
        if mode not in REVEAL_MODES:
            raise ValueError(f"Unknown reveal mode: {mode!r}")
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be > 0, got {interval_ms}")
        if word_tick_multiplier < 1:
            raise ValueError(f"word_tick_multiplier must be >= 1, got {word_tick_multiplier}")

        self.clock = clock
        self.on_tick = on_tick
        self.on_complete = on_complete
        self.mode = mode
        self.interval_ms = interval_ms
        self.word_tick_multiplier = word_tick_multiplier
        self.animation_enabled = animation_enabled

        self._source = source
        self._spans = tokenize(source)
        self._total = plain_length(self._spans)
        self._boundaries: list[int] = []
        self._boundary_index = -1
        self._cursor = 0
        self._timer: Timer | None = None
        self._state = SchedulerState.IDLE
        self._completion_fired = False
        self._visible: list[Span] = []

    @classmethod
    def from_config(cls, source: str, config: RevealConfig, **kwargs) -> RevealScheduler:
        return cls(
            source,
            mode=config.mode,
            interval_ms=config.interval_ms,
            word_tick_multiplier=config.word_tick_multiplier,
            animation_enabled=config.animation_enabled,
            **kwargs,
        )

    # -- read-only views ----------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def spans(self) -> list[Span]:
        return list(self._spans)

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def total_length(self) -> int:
        return self._total

    @property
    def visible(self) -> list[Span]:
        """Span snapshot delivered by the latest tick."""
        return list(self._visible)

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    @property
    def tick_seconds(self) -> float:
        interval = self.interval_ms
        if self.mode == "word":
            interval *= self.word_tick_multiplier
        return interval / 1000

    # -- transitions --------------------------------------------------------

    def start(self) -> None:
        """Begin a reveal cycle for the current source at cursor 0."""
        # clear-then-arm: never leave a previous timer running
        self._stop_timer()
        self._cursor = 0
        self._boundary_index = -1
        self._visible = []
        self._completion_fired = False
        self._boundaries = word_boundaries(self._spans) if self.mode == "word" else []

        if not self.animation_enabled:
            self._jump_to_end()
            return

        if self._total == 0:
            # nothing to reveal, already complete
            logger.debug("Empty source, completing without a timer")
            self._finish()
            return

        self._state = SchedulerState.REVEALING
        self._timer = self.clock.set_interval(self.tick_seconds, self._tick)
        logger.debug(
            "Reveal started: mode=%s length=%d tick=%.3fs",
            self.mode, self._total, self.tick_seconds,
        )

    def set_source(self, text: str) -> None:
        """Replace the source text, restarting the reveal if it changed."""
        if text == self._source:
            return
        self.cancel()
        self._source = text
        self._spans = tokenize(text)
        self._total = plain_length(self._spans)
        logger.debug("Source replaced (%d visible chars), restarting", self._total)
        self.start()

    def set_animation_enabled(self, enabled: bool) -> None:
        """Toggle animation. Disabling mid-reveal jumps to the end."""
        self.animation_enabled = enabled
        if not enabled and self._state is SchedulerState.REVEALING:
            self._stop_timer()
            self._jump_to_end()

    def skip(self) -> None:
        """Finish an in-flight reveal immediately."""
        if self._state is not SchedulerState.REVEALING:
            return
        self._stop_timer()
        self._jump_to_end()

    def cancel(self) -> None:
        """Stop the timer synchronously. A completed reveal stays complete."""
        self._stop_timer()
        if self._state is SchedulerState.REVEALING:
            self._state = SchedulerState.IDLE
            logger.debug("Reveal cancelled at cursor %d/%d", self._cursor, self._total)

    # -- internals ----------------------------------------------------------

    def _tick(self) -> None:
        if self._state is not SchedulerState.REVEALING:
            return

        if self.mode == "word":
            self._boundary_index += 1
            if self._boundary_index < len(self._boundaries):
                self._cursor = self._boundaries[self._boundary_index]
            else:
                self._cursor = self._total
        else:
            self._cursor = min(self._cursor + 1, self._total)

        self._emit(slice_at(self._spans, self._cursor))

        if self._cursor >= self._total:
            self._finish()

    def _jump_to_end(self) -> None:
        self._cursor = self._total
        self._boundary_index = len(self._boundaries) - 1
        self._emit(slice_at(self._spans, self._total))
        self._finish()

    def _emit(self, visible: list[Span]) -> None:
        self._visible = visible
        if self.on_tick is not None:
            self.on_tick(list(visible))

    def _finish(self) -> None:
        self._stop_timer()
        self._state = SchedulerState.COMPLETE
        if self._completion_fired:
            return
        self._completion_fired = True
        logger.debug("Reveal complete (%d chars)", self._total)
        if self.on_complete is not None:
            self.on_complete()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
