"""Participant identities and per-session seats."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

from salvo.game.ai.random_target import RandomTargetStrategy
from salvo.game.ai.strategy import StrategyFactory, TargetingStrategy
from salvo.game.core.board import BoardState, FiredCells
from salvo.game.core.models import BOARD_SIZE, AttackStatus, Coord, FleetPlacement


@dataclass(frozen=True, slots=True)
class Human:
    """A connected player. `connection` is opaque to the engine."""

    name: str
    connection: object | None = field(default=None, compare=False)

    @property
    def automated(self) -> bool:
        return False

    def new_targeting(self, rng: random.Random) -> TargetingStrategy:
        """Uniform picks, used when a human asks for a random attack."""
        return RandomTargetStrategy(rng)


@dataclass(frozen=True, slots=True)
class Automated:
    """A bot identity. Each seat it takes builds its own strategy from `strategy_factory`."""

    name: str
    strategy_factory: StrategyFactory = field(compare=False)

    @property
    def automated(self) -> bool:
        return True

    def new_targeting(self, rng: random.Random) -> TargetingStrategy:
        return self.strategy_factory(rng)


Identity: TypeAlias = Human | Automated


@dataclass(slots=True)
class Participant:
    """One seat in a session."""

    participant_id: str
    identity: Identity
    board_size: int = BOARD_SIZE
    fleet: FleetPlacement | None = None
    board: BoardState | None = None
    ready: bool = False
    fired: FiredCells = field(init=False)
    targeting: TargetingStrategy | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.fired = FiredCells(self.board_size)

    @property
    def name(self) -> str:
        return self.identity.name

    @property
    def automated(self) -> bool:
        return self.identity.automated

    def accept_fleet(self, fleet: FleetPlacement) -> None:
        """Freeze a validated fleet into this seat's board."""
        self.board = BoardState.from_placements(fleet.ships, size=self.board_size)
        self.fleet = fleet
        self.ready = True

    def choose_target(self, options: Sequence[Coord], rng: random.Random) -> Coord:
        """Pick a target with this seat's strategy, built on first use."""
        if self.targeting is None:
            self.targeting = self.identity.new_targeting(rng)
        return self.targeting.choose_target(options)

    def notify_result(self, coord: Coord, status: AttackStatus, contour: Sequence[Coord] = ()) -> None:
        if self.targeting is not None:
            self.targeting.notify_result(coord, status, contour)
