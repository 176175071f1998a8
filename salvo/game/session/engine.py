"""Game engine: the operations the transport and matchmaking layers call."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from salvo.game.core.errors import (
    FleetLockedError,
    GameError,
    InvalidFleetError,
    NoLegalTargetsError,
)
from salvo.game.core.fleet import random_fleet, validate_fleet
from salvo.game.core.models import Coord, FleetPlacement
from salvo.game.session.events import (
    AttackResolved,
    GameFinished,
    GameStarted,
    OpponentLeft,
    TurnAssigned,
)
from salvo.game.session.participants import Automated, Human, Identity
from salvo.game.session.registry import SessionRegistry
from salvo.game.session.session import AttackOutcome, Session, SessionStatus
from salvo.game.session.turns import TurnScheduler
from salvo.runtime.events import EventBus

logger = logging.getLogger(__name__)

FleetValidator = Callable[[FleetPlacement, int], tuple[bool, str]]
FleetGenerator = Callable[[random.Random, int], FleetPlacement]


@dataclass(frozen=True, slots=True)
class FleetSubmission:
    ready: bool
    turn_owner: str | None = None


@dataclass(frozen=True, slots=True)
class DisconnectOutcome:
    session_id: str
    opponent_id: str
    reason: str = "opponent_left"


class GameEngine:
    """Drives sessions from pairing to teardown.

    Not thread-safe: every call, including the scheduler ticks that fire
    automated moves, must come from the single owning dispatcher thread.
    """

    def __init__(
        self,
        *,
        registry: SessionRegistry,
        turns: TurnScheduler,
        events: EventBus | None = None,
        rng: random.Random | None = None,
        validator: FleetValidator = validate_fleet,
        fleet_generator: FleetGenerator = random_fleet,
    ) -> None:
        self._registry = registry
        self._turns = turns
        self._events = events if events is not None else EventBus()
        self._rng = rng if rng is not None else random.Random()
        self._validator = validator
        self._fleet_generator = fleet_generator

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    @property
    def turns(self) -> TurnScheduler:
        return self._turns

    @property
    def events(self) -> EventBus:
        return self._events

    def create_session(self, first: Identity, second: Identity) -> str:
        """Seat two paired identities in a new FORMING session."""
        session = self._registry.create(first, second)
        for participant in session.participants:
            if participant.automated:
                self._auto_submit_fleet(session, participant.participant_id)
        return session.session_id

    def create_bot_session(self, human: Human, bot: Automated) -> str:
        """Single-player session; the bot's fleet is generated and ready at once."""
        return self.create_session(human, bot)

    def submit_fleet(
        self, session_id: str, participant_id: str, fleet: FleetPlacement
    ) -> FleetSubmission:
        session = self._registry.get(session_id)
        session.participant(participant_id)
        if session.status != SessionStatus.FORMING:
            raise FleetLockedError(session_id)
        valid, reason = self._validator(fleet, self._registry.board_size)
        if not valid:
            raise InvalidFleetError(reason)
        turn_owner = session.submit_fleet(participant_id, fleet, self._rng)
        logger.info(
            "fleet_submitted session=%s participant=%s ships=%d",
            session_id,
            participant_id,
            len(fleet.ships),
        )
        if turn_owner is None:
            return FleetSubmission(ready=False)
        self._on_started(session, turn_owner)
        return FleetSubmission(ready=True, turn_owner=turn_owner)

    def attack(self, session_id: str, participant_id: str, coord: Coord) -> AttackOutcome:
        session = self._registry.get(session_id)
        outcome = session.attack(participant_id, coord)
        self._after_attack(session, outcome)
        return outcome

    def random_attack(self, session_id: str, participant_id: str) -> AttackOutcome:
        """Attack a cell picked by the participant's own targeting choice."""
        session = self._registry.get(session_id)
        attacker = session.check_can_attack(participant_id)
        options = session.legal_targets(participant_id)
        if not options:
            raise NoLegalTargetsError(participant_id)
        coord = attacker.choose_target(options, self._rng)
        return self.attack(session_id, participant_id, coord)

    def disconnect(self, name: str) -> DisconnectOutcome | None:
        """Force-terminate the session a human is seated in, if any."""
        entry = self._registry.lookup(name)
        if entry is None:
            return None
        session = self._registry.find(entry.session_id)
        if session is None:
            self._registry.forget(name)
            return None
        opponent = session.opponent_of(entry.participant_id)
        session.terminate()
        self._teardown(session)
        logger.info(
            "session_abandoned session=%s departed=%s opponent=%s",
            session.session_id,
            name,
            opponent.participant_id,
        )
        self._events.publish(
            OpponentLeft(
                session_id=session.session_id,
                departed_name=name,
                opponent_id=opponent.participant_id,
            )
        )
        return DisconnectOutcome(session_id=session.session_id, opponent_id=opponent.participant_id)

    def _auto_submit_fleet(self, session: Session, participant_id: str) -> None:
        fleet = self._fleet_generator(self._rng, self._registry.board_size)
        turn_owner = session.submit_fleet(participant_id, fleet, self._rng)
        if turn_owner is not None:
            self._on_started(session, turn_owner)

    def _on_started(self, session: Session, turn_owner: str) -> None:
        logger.info("session_started session=%s first_turn=%s", session.session_id, turn_owner)
        self._events.publish(GameStarted(session_id=session.session_id, turn_owner=turn_owner))
        self._assign_turn(session)

    def _after_attack(self, session: Session, outcome: AttackOutcome) -> None:
        shooter = session.participant(outcome.shooter_id)
        if shooter.automated:
            shooter.notify_result(outcome.coord, outcome.status, outcome.contour)
        logger.debug(
            "attack_resolved session=%s shooter=%s x=%d y=%d status=%s contour=%d",
            session.session_id,
            outcome.shooter_id,
            outcome.coord.x,
            outcome.coord.y,
            outcome.status,
            len(outcome.contour),
        )
        self._events.publish(AttackResolved(session_id=session.session_id, outcome=outcome))

        if outcome.winner_id is not None:
            winner = session.participant(outcome.winner_id)
            self._teardown(session)
            logger.info(
                "session_finished session=%s winner=%s automated=%s",
                session.session_id,
                winner.participant_id,
                winner.automated,
            )
            self._events.publish(
                GameFinished(
                    session_id=session.session_id,
                    winner_id=winner.participant_id,
                    winner_name=winner.name,
                    winner_automated=winner.automated,
                )
            )
            return
        self._assign_turn(session)

    def _assign_turn(self, session: Session) -> None:
        turn_owner = session.turn_owner
        if turn_owner is None:
            raise RuntimeError(f"Session {session.session_id} is active without a turn owner.")
        current = session.participant(turn_owner)
        self._events.publish(
            TurnAssigned(
                session_id=session.session_id,
                turn_owner=turn_owner,
                automated=current.automated,
            )
        )
        if current.automated:
            session_id = session.session_id
            self._turns.arm(session_id, turn_owner, lambda: self._play_automated_turn(session_id, turn_owner))

    def _play_automated_turn(self, session_id: str, participant_id: str) -> None:
        session = self._registry.find(session_id)
        if session is None or session.status != SessionStatus.ACTIVE or session.turn_owner != participant_id:
            logger.debug("automated_turn_skipped session=%s participant=%s", session_id, participant_id)
            return
        try:
            self.random_attack(session_id, participant_id)
        except GameError:
            logger.warning(
                "automated_turn_failed session=%s participant=%s",
                session_id,
                participant_id,
                exc_info=True,
            )

    def _teardown(self, session: Session) -> None:
        self._registry.remove(session.session_id)
        cancelled = self._turns.cancel_session(session.session_id)
        if cancelled:
            logger.debug("session_timers_cancelled session=%s count=%d", session.session_id, cancelled)
