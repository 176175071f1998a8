"""Deferred automated moves keyed by (session, participant)."""

from __future__ import annotations

import logging
from collections.abc import Callable

from salvo.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)

TurnKey = tuple[str, str]

DEFAULT_THINK_DELAY_SECONDS = 0.7


class TurnScheduler:
    """At most one pending think-delay callback per automated seat."""

    def __init__(
        self, scheduler: Scheduler, *, think_delay_seconds: float = DEFAULT_THINK_DELAY_SECONDS
    ) -> None:
        if think_delay_seconds < 0.0:
            raise ValueError("think_delay_seconds must be >= 0")
        self._scheduler = scheduler
        self._think_delay_seconds = think_delay_seconds
        self._pending: dict[TurnKey, int] = {}
        self._by_session: dict[str, set[str]] = {}

    @property
    def think_delay_seconds(self) -> float:
        return self._think_delay_seconds

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def is_pending(self, session_id: str, participant_id: str) -> bool:
        return (session_id, participant_id) in self._pending

    def arm(self, session_id: str, participant_id: str, callback: Callable[[], None]) -> int:
        """Schedule `callback` after the think-delay, replacing any pending one for the key."""
        key = (session_id, participant_id)
        self.cancel(session_id, participant_id)

        def fire() -> None:
            if self._pending.get(key) != task_id:
                return
            self._release(key)
            callback()

        task_id = self._scheduler.call_later(self._think_delay_seconds, fire)
        self._pending[key] = task_id
        self._by_session.setdefault(session_id, set()).add(participant_id)
        logger.debug(
            "turn_armed session=%s participant=%s task=%s delay=%s",
            session_id,
            participant_id,
            task_id,
            self._think_delay_seconds,
        )
        return task_id

    def cancel(self, session_id: str, participant_id: str) -> bool:
        """Cancel the pending move for the key. Absent keys are a no-op."""
        key = (session_id, participant_id)
        task_id = self._pending.get(key)
        if task_id is None:
            return False
        self._release(key)
        self._scheduler.cancel(task_id)
        logger.debug("turn_cancelled session=%s participant=%s task=%s", session_id, participant_id, task_id)
        return True

    def cancel_session(self, session_id: str) -> int:
        """Cancel every pending move of a session and return how many were cancelled."""
        participant_ids = tuple(self._by_session.get(session_id, ()))
        return sum(1 for participant_id in participant_ids if self.cancel(session_id, participant_id))

    def _release(self, key: TurnKey) -> None:
        session_id, participant_id = key
        self._pending.pop(key, None)
        seated = self._by_session.get(session_id)
        if seated is not None:
            seated.discard(participant_id)
            if not seated:
                del self._by_session[session_id]
