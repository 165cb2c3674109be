"""Repeating timers on a plain asyncio event loop.

Textual widgets already provide ``set_interval``; this clock covers the
headless player and any other asyncio host.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class AsyncioTimer:
    """Re-arms ``loop.call_later`` after each callback until stopped."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], object],
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._stopped = False

    @property
    def active(self) -> bool:
        return not self._stopped

    def start(self) -> None:
        self._handle = self._loop.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if self._stopped:
            return
        self._callback()
        # the callback may have stopped us
        if not self._stopped:
            self._handle = self._loop.call_later(self._interval, self._fire)

    def stop(self) -> None:
        self._stopped = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioClock:
    """Clock backed by the running (or given) asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def set_interval(self, interval: float, callback: Callable[[], object]) -> AsyncioTimer:
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        loop = self._loop or asyncio.get_running_loop()
        timer = AsyncioTimer(loop, interval, callback)
        timer.start()
        logger.debug("Armed %.3fs timer", interval)
        return timer
