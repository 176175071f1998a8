"""Typed failures reported to callers of the game engine."""

from __future__ import annotations

from salvo.game.core.models import Coord


class GameError(Exception):
    """Base for user-facing precondition failures.

    `code` is a stable identifier a transport can forward as-is.
    """

    code = "game_error"


class SessionNotFoundError(GameError):
    code = "session_not_found"

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found.")
        self.session_id = session_id


class ParticipantNotFoundError(GameError):
    code = "participant_not_found"

    def __init__(self, session_id: str, participant_id: str) -> None:
        super().__init__(f"Participant {participant_id} is not part of session {session_id}.")
        self.session_id = session_id
        self.participant_id = participant_id


class SessionNotActiveError(GameError):
    code = "session_not_active"

    def __init__(self, session_id: str, status: str) -> None:
        super().__init__(f"Session {session_id} is not active (status {status}).")
        self.session_id = session_id
        self.status = status


class NotYourTurnError(GameError):
    code = "not_your_turn"

    def __init__(self, participant_id: str, turn_owner: str | None) -> None:
        super().__init__(f"It is not {participant_id}'s turn.")
        self.participant_id = participant_id
        self.turn_owner = turn_owner


class CoordinateOutOfBoundsError(GameError):
    code = "out_of_bounds"

    def __init__(self, coord: Coord, size: int) -> None:
        super().__init__(f"({coord.x}, {coord.y}) is outside the {size}x{size} board.")
        self.coord = coord
        self.size = size


class CellAlreadyTargetedError(GameError):
    code = "cell_already_targeted"

    def __init__(self, coord: Coord) -> None:
        super().__init__(f"Cell ({coord.x}, {coord.y}) was already targeted.")
        self.coord = coord


class NoLegalTargetsError(GameError):
    code = "no_legal_targets"

    def __init__(self, participant_id: str) -> None:
        super().__init__(f"No untargeted cells remain for {participant_id}.")
        self.participant_id = participant_id


class InvalidFleetError(GameError):
    code = "invalid_fleet"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class FleetLockedError(GameError):
    code = "fleet_locked"

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Fleets for session {session_id} can no longer change.")
        self.session_id = session_id


class ParticipantBusyError(GameError):
    code = "participant_busy"

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is already in an active session.")
        self.name = name
