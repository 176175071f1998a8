"""Session state machine, registry, turn scheduling and the engine facade."""

from salvo.game.session.engine import DisconnectOutcome, FleetSubmission, GameEngine
from salvo.game.session.participants import Automated, Human, Identity, Participant
from salvo.game.session.registry import LookupEntry, SessionRegistry
from salvo.game.session.session import AttackOutcome, Session, SessionStatus
from salvo.game.session.turns import TurnScheduler

__all__ = [
    "AttackOutcome",
    "Automated",
    "DisconnectOutcome",
    "FleetSubmission",
    "GameEngine",
    "Human",
    "Identity",
    "LookupEntry",
    "Participant",
    "Session",
    "SessionRegistry",
    "SessionStatus",
    "TurnScheduler",
]
