"""Delayed-call schedulers used by the preview controller."""

from __future__ import annotations

import asyncio
import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Handle(Protocol):
    """A scheduled call that can be cancelled before it fires."""

    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs ``callback`` once after ``delay`` seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class ThreadingScheduler:
    """Fires callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AsyncioScheduler:
    """Schedules on an asyncio event loop.

    Must be called from the loop's own thread; with no explicit loop the
    running loop is used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


@dataclass(order=True)
class _ManualHandle:
    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock: nothing fires until the host calls ``advance``.

    For hosts that drive their own loop, and for deterministic tests.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[_ManualHandle] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        handle = _ManualHandle(self._now + max(delay, 0.0), next(self._seq), callback)
        self._queue.append(handle)
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due callbacks in time order. Returns how many fired."""
        target = self._now + seconds
        fired = 0
        while True:
            due = sorted(h for h in self._queue if not h.cancelled and h.when <= target)
            if not due:
                break
            handle = due[0]
            self._queue.remove(handle)
            self._now = handle.when
            handle.callback()
            fired += 1
        self._queue = [h for h in self._queue if not h.cancelled]
        self._now = target
        return fired

    def run_all(self) -> int:
        """Fire everything scheduled, including callbacks scheduled while firing."""
        fired = 0
        while self.pending:
            latest = max(h.when for h in self._queue if not h.cancelled)
            fired += self.advance(max(latest - self._now, 0.0))
        return fired
