"""Debounced live preview: coalesces recompute requests, last request wins."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from textpipe_core.executor.executor import execute
from textpipe_core.executor.models import ExecutionResult, StepOutcome
from textpipe_core.pipeline.pipeline import Pipeline
from textpipe_core.preview.scheduler import (
    AsyncioScheduler,
    Handle,
    ManualScheduler,
    Scheduler,
    ThreadingScheduler,
)

if TYPE_CHECKING:
    from textpipe_core.config.models import TextpipeConfig

logger = logging.getLogger(__name__)

Executor = Callable[[Pipeline, str], ExecutionResult]
Subscriber = Callable[["PreviewSnapshot"], None]


class PreviewSnapshot(BaseModel):
    """Latest committed result. ``stale`` is True while a newer request is outstanding."""

    model_config = ConfigDict(frozen=True)

    output: str = ""
    diagnostics: tuple[StepOutcome, ...] = ()
    stale: bool = False
    epoch: int = 0


class PreviewController:
    """Schedules executor runs behind a debounce window.

    Every ``request`` bumps a monotonically increasing epoch and replaces the
    pending run. A run only starts if its epoch is still the latest, and its
    result is only committed if no newer request arrived while it ran.
    """

    def __init__(
        self,
        debounce_seconds: float = 0.15,
        *,
        scheduler: Scheduler | None = None,
        executor: Executor = execute,
    ) -> None:
        if debounce_seconds < 0:
            raise ValueError("debounce_seconds must be >= 0")
        self._debounce = debounce_seconds
        self._scheduler = scheduler or ThreadingScheduler()
        self._executor = executor
        self._lock = threading.Lock()
        self._epoch = 0
        self._pending: Handle | None = None
        self._pending_args: tuple[int, Pipeline, str] | None = None
        self._stale = False
        self._result: ExecutionResult | None = None
        self._result_epoch = 0
        self._subscribers: list[Subscriber] = []

    @classmethod
    def from_config(cls, config: TextpipeConfig, **kwargs) -> PreviewController:
        settings = config.preview
        if "scheduler" not in kwargs:
            kwargs["scheduler"] = {
                "thread": ThreadingScheduler,
                "asyncio": AsyncioScheduler,
                "manual": ManualScheduler,
            }[settings.scheduler]()
        return cls(settings.debounce_ms / 1000, **kwargs)

    @property
    def debounce_seconds(self) -> float:
        return self._debounce

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def snapshot(self) -> PreviewSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> PreviewSnapshot:
        if self._result is None:
            return PreviewSnapshot(stale=self._stale)
        return PreviewSnapshot(
            output=self._result.output,
            diagnostics=self._result.diagnostics,
            stale=self._stale,
            epoch=self._result_epoch,
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback`` with every committed snapshot. Returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def request(self, pipeline: Pipeline, text: str) -> int:
        """Schedule a recompute for ``(pipeline, text)``, superseding any pending one."""
        with self._lock:
            self._epoch += 1
            epoch = self._epoch
            if self._pending is not None:
                self._pending.cancel()
            self._pending_args = (epoch, pipeline, text)
            self._stale = True
            self._pending = self._scheduler.call_later(self._debounce, lambda: self._run(epoch))
        logger.debug("Preview request %d scheduled in %.3fs", epoch, self._debounce)
        return epoch

    def flush(self) -> PreviewSnapshot:
        """Run the pending request now instead of waiting for the debounce window."""
        with self._lock:
            args = self._pending_args
            if self._pending is not None:
                self._pending.cancel()
            self._pending = None
            self._pending_args = None
        if args is not None:
            self._execute(*args)
        return self.snapshot

    def cancel(self) -> None:
        """Drop pending work and discard the result of any run still in flight."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._pending = None
            self._pending_args = None
            self._epoch += 1
            self._stale = False
        logger.debug("Preview cancelled at epoch %d", self._epoch)

    def __enter__(self) -> PreviewController:
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()

    def _run(self, epoch: int) -> None:
        with self._lock:
            # flush() or a newer request may have claimed this run after the timer fired
            if self._pending_args is None or self._pending_args[0] != epoch:
                logger.debug("Skipping preview run %d (latest %d)", epoch, self._epoch)
                return
            _, pipeline, text = self._pending_args
            self._pending = None
            self._pending_args = None
        self._execute(epoch, pipeline, text)

    def _execute(self, epoch: int, pipeline: Pipeline, text: str) -> None:
        try:
            result = self._executor(pipeline, text)
        except Exception:
            logger.exception("Preview run %d failed", epoch)
            with self._lock:
                if epoch == self._epoch:
                    self._stale = False
            raise

        with self._lock:
            if epoch != self._epoch:
                logger.debug("Discarding result of superseded run %d (latest %d)", epoch, self._epoch)
                return
            self._result = result
            self._result_epoch = epoch
            self._stale = False
            snapshot = self._snapshot_locked()
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Preview subscriber failed for epoch %d", epoch)
