"""Live session index with one-session-per-player enforcement."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from salvo.game.core.errors import ParticipantBusyError, SessionNotFoundError
from salvo.game.core.models import BOARD_SIZE
from salvo.game.session.participants import Identity, Participant
from salvo.game.session.session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LookupEntry:
    """Where a human identity is currently seated."""

    session_id: str
    participant_id: str


class SessionRegistry:
    """Creates, finds and removes sessions.

    Human identities are indexed by name so that no name can sit in two live
    sessions. Automated identities are never indexed.
    """

    def __init__(self, *, board_size: int = BOARD_SIZE) -> None:
        self._board_size = board_size
        self._sessions: dict[str, Session] = {}
        self._lookup: dict[str, LookupEntry] = {}
        self._sequence = 1

    @property
    def board_size(self) -> int:
        return self._board_size

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(tuple(self._sessions.values()))

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def is_busy(self, name: str) -> bool:
        return name in self._lookup

    def lookup(self, name: str) -> LookupEntry | None:
        return self._lookup.get(name)

    def create(self, first: Identity, second: Identity) -> Session:
        """Seat two identities in a new FORMING session."""
        for identity in (first, second):
            if not identity.automated and self.is_busy(identity.name):
                raise ParticipantBusyError(identity.name)
        if not first.automated and not second.automated and first.name == second.name:
            raise ParticipantBusyError(first.name)

        session_id = f"g-{self._sequence}"
        self._sequence += 1
        seats = tuple(
            Participant(
                participant_id=f"{session_id}-p-{seat}",
                identity=identity,
                board_size=self._board_size,
            )
            for seat, identity in enumerate((first, second), start=1)
        )
        session = Session(session_id, seats[0], seats[1])
        self._sessions[session_id] = session
        for participant in session.participants:
            if not participant.automated:
                self._lookup[participant.name] = LookupEntry(session_id, participant.participant_id)
        logger.info(
            "session_created session=%s seats=%s",
            session_id,
            ",".join(f"{p.participant_id}:{p.name}" for p in session.participants),
        )
        return session

    def get(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def find(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def remove(self, session_id: str) -> Session | None:
        """Drop a session and release its players. Unknown ids are ignored."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return None
        for participant in session.participants:
            entry = self._lookup.get(participant.name)
            if entry is not None and entry.session_id == session_id:
                del self._lookup[participant.name]
        logger.info("session_removed session=%s status=%s", session_id, session.status)
        return session

    def forget(self, name: str) -> None:
        """Drop a stale lookup entry whose session no longer exists."""
        self._lookup.pop(name, None)
