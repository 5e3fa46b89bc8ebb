"""Timers for the single-threaded event loop.

Everything that waits (render debounce, mock delay, request watchdog) goes through
a `Scheduler`, so tests can swap the asyncio loop for a manual clock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by the running (or given) asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay_s, fn)


class DebounceTimer:
    """Cancel-and-reschedule timer: only the last `schedule()` within `delay_ms` fires."""

    def __init__(self, scheduler: Scheduler, delay_ms: int):
        self._scheduler = scheduler
        self._delay_s = delay_ms / 1000
        self._pending: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, fn: Callable[[], None]) -> None:
        self.cancel()

        def _fire():
            self._pending = None
            fn()

        self._pending = self._scheduler.call_later(self._delay_s, _fire)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
