"""Domain events published by the game engine."""

from __future__ import annotations

from dataclasses import dataclass

from salvo.game.session.session import AttackOutcome


@dataclass(frozen=True, slots=True)
class GameEvent:
    session_id: str


@dataclass(frozen=True, slots=True)
class GameStarted(GameEvent):
    turn_owner: str


@dataclass(frozen=True, slots=True)
class AttackResolved(GameEvent):
    outcome: AttackOutcome


@dataclass(frozen=True, slots=True)
class TurnAssigned(GameEvent):
    """Sent after every non-final attack and on start, even if the owner is unchanged."""

    turn_owner: str
    automated: bool


@dataclass(frozen=True, slots=True)
class GameFinished(GameEvent):
    """A fleet was destroyed. Scoreboards usually skip automated winners."""

    winner_id: str
    winner_name: str
    winner_automated: bool


@dataclass(frozen=True, slots=True)
class OpponentLeft(GameEvent):
    """Forced termination after a disconnect; no winner is recorded."""

    departed_name: str
    opponent_id: str
    reason: str = "opponent_left"
