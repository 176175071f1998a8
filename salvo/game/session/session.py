"""Two-seat contest state machine."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum

from salvo.game.core.attack import resolve_attack
from salvo.game.core.errors import (
    CellAlreadyTargetedError,
    CoordinateOutOfBoundsError,
    FleetLockedError,
    NotYourTurnError,
    ParticipantNotFoundError,
    SessionNotActiveError,
)
from salvo.game.core.models import AttackStatus, Coord, FleetPlacement
from salvo.game.session.participants import Participant


class SessionStatus(StrEnum):
    """Session lifecycle states."""

    FORMING = "FORMING"
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """Result of one attack as seen by the outer layer."""

    session_id: str
    shooter_id: str
    coord: Coord
    status: AttackStatus
    contour: tuple[Coord, ...]
    next_turn: str | None
    winner_id: str | None


class Session:
    """One contest between exactly two participants, in fixed seat order."""

    def __init__(self, session_id: str, first: Participant, second: Participant) -> None:
        if first.participant_id == second.participant_id:
            raise ValueError("participants must have distinct ids")
        self.session_id = session_id
        self.participants: tuple[Participant, Participant] = (first, second)
        self.status = SessionStatus.FORMING
        self.turn_owner: str | None = None
        self.winner_id: str | None = None

    def __repr__(self) -> str:
        return (
            f"Session(id={self.session_id!r}, status={self.status}, "
            f"turn_owner={self.turn_owner!r}, winner_id={self.winner_id!r})"
        )

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def is_finished(self) -> bool:
        return self.status == SessionStatus.FINISHED

    def participant(self, participant_id: str) -> Participant:
        for participant in self.participants:
            if participant.participant_id == participant_id:
                return participant
        raise ParticipantNotFoundError(self.session_id, participant_id)

    def opponent_of(self, participant_id: str) -> Participant:
        first, second = self.participants
        if first.participant_id == participant_id:
            return second
        if second.participant_id == participant_id:
            return first
        raise ParticipantNotFoundError(self.session_id, participant_id)

    def submit_fleet(
        self, participant_id: str, fleet: FleetPlacement, rng: random.Random
    ) -> str | None:
        """Store a validated fleet; return the first turn owner if this activates the session."""
        participant = self.participant(participant_id)
        if self.status != SessionStatus.FORMING:
            raise FleetLockedError(self.session_id)
        participant.accept_fleet(fleet)
        if all(seat.ready for seat in self.participants):
            return self._activate(rng)
        return None

    def _activate(self, rng: random.Random) -> str:
        self.turn_owner = rng.choice(self.participants).participant_id
        self.status = SessionStatus.ACTIVE
        return self.turn_owner

    def legal_targets(self, participant_id: str) -> list[Coord]:
        """Cells the participant has not fired at yet."""
        return self.participant(participant_id).fired.remaining()

    def check_can_attack(self, participant_id: str) -> Participant:
        """Raise unless `participant_id` may attack right now."""
        attacker = self.participant(participant_id)
        if self.status != SessionStatus.ACTIVE:
            raise SessionNotActiveError(self.session_id, self.status)
        if self.turn_owner != participant_id:
            raise NotYourTurnError(participant_id, self.turn_owner)
        return attacker

    def attack(self, participant_id: str, coord: Coord) -> AttackOutcome:
        """Resolve one attack and apply turn and winner transitions."""
        attacker = self.check_can_attack(participant_id)
        defender = self.opponent_of(participant_id)
        if not coord.in_bounds(attacker.fired.size):
            raise CoordinateOutOfBoundsError(coord, attacker.fired.size)
        if coord in attacker.fired:
            raise CellAlreadyTargetedError(coord)
        if defender.board is None:
            raise SessionNotActiveError(self.session_id, self.status)

        resolution = resolve_attack(defender.board, attacker.fired, coord)
        if resolution.status is AttackStatus.MISS:
            self.turn_owner = defender.participant_id
        if resolution.fleet_destroyed:
            self.status = SessionStatus.FINISHED
            self.winner_id = attacker.participant_id

        return AttackOutcome(
            session_id=self.session_id,
            shooter_id=attacker.participant_id,
            coord=coord,
            status=resolution.status,
            contour=resolution.contour,
            next_turn=self.turn_owner,
            winner_id=self.winner_id,
        )

    def terminate(self) -> None:
        """Force the session to FINISHED without a winner."""
        self.status = SessionStatus.FINISHED
        self.winner_id = None
