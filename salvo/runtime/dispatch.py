"""Serialized action dispatch over one FIFO plus the scheduler clock."""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass
from time import monotonic
from typing import Any, TypeVar

from salvo.runtime.scheduler import Scheduler

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Pending:
    action: Callable[[], Any]
    future: Future[Any]


class SerialDispatcher:
    """Run every mutation on a single owning thread, one action at a time.

    Producers on any thread call `submit`; only the owner calls `pump` or
    `serve`. Scheduler callbacks are run by the same owner after the inbox is
    drained, so deferred work and inbound actions never interleave.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        time_source: Callable[[], float] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._time_source = time_source or monotonic
        self._origin_seconds = self._time_source()
        self._inbox: queue.SimpleQueue[_Pending] = queue.SimpleQueue()

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    def elapsed_seconds(self) -> float:
        """Return seconds since the dispatcher was created."""
        return self._time_source() - self._origin_seconds

    def submit(self, action: Callable[[], T]) -> Future[T]:
        """Queue an action and return a future resolved by the owner thread."""
        future: Future[T] = Future()
        self._inbox.put(_Pending(action=action, future=future))
        return future

    def pump(self, now_seconds: float | None = None) -> int:
        """Drain queued actions, then run timers due at `now_seconds`.

        Returns the number of actions and timer callbacks executed.
        """
        executed = 0
        while True:
            try:
                pending = self._inbox.get_nowait()
            except queue.Empty:
                break
            if self._run(pending):
                executed += 1
        now = self.elapsed_seconds() if now_seconds is None else now_seconds
        executed += self._scheduler.run_due(max(now, self._scheduler.now_seconds))
        return executed

    def serve(self, stop: threading.Event, *, idle_seconds: float = 0.05) -> None:
        """Block pumping actions and timers until `stop` is set."""
        logger.info("dispatcher_serve_start idle_seconds=%s", idle_seconds)
        while not stop.is_set():
            self.pump()
            timeout = idle_seconds
            due_seconds = self._scheduler.next_due_seconds()
            if due_seconds is not None:
                timeout = max(0.0, min(idle_seconds, due_seconds - self.elapsed_seconds()))
            try:
                pending = self._inbox.get(timeout=timeout)
            except queue.Empty:
                continue
            self._run(pending)
        logger.info("dispatcher_serve_stop")

    @staticmethod
    def _run(pending: _Pending) -> bool:
        if not pending.future.set_running_or_notify_cancel():
            return False
        try:
            result = pending.action()
        except Exception as exc:
            pending.future.set_exception(exc)
        else:
            pending.future.set_result(result)
        return True
