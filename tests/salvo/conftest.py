from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from functools import partial

import pytest

from salvo.game.core.fleet import validate_fleet
from salvo.game.core.models import Coord, FleetPlacement, Orientation, ShipPlacement, ShipType
from salvo.game.session.engine import GameEngine
from salvo.game.session.registry import SessionRegistry
from salvo.game.session.turns import TurnScheduler
from salvo.runtime.events import EventBus
from salvo.runtime.scheduler import Scheduler

THINK_DELAY = 0.7


def make_valid_fleet() -> FleetPlacement:
    return FleetPlacement(
        ships=[
            ShipPlacement(ShipType.HUGE, Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.LARGE, Coord(5, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.LARGE, Coord(0, 2), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.MEDIUM, Coord(4, 2), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.MEDIUM, Coord(7, 2), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.MEDIUM, Coord(0, 4), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.SMALL, Coord(3, 4), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.SMALL, Coord(5, 4), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.SMALL, Coord(7, 4), Orientation.HORIZONTAL),
            ShipPlacement(ShipType.SMALL, Coord(9, 4), Orientation.HORIZONTAL),
        ]
    )


@pytest.fixture
def valid_fleet() -> FleetPlacement:
    return make_valid_fleet()


@pytest.fixture
def single_ship_fleet() -> FleetPlacement:
    """One HUGE ship laid horizontally from (2, 2) to (5, 2)."""
    return FleetPlacement(ships=[ShipPlacement(ShipType.HUGE, Coord(2, 2), Orientation.HORIZONTAL)])


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def engine_factory(scheduler: Scheduler) -> Callable[..., GameEngine]:
    def _make(
        seed: int = 1337,
        roster: Sequence[ShipType] | None = None,
        board_size: int = 10,
    ) -> GameEngine:
        validator = validate_fleet if roster is None else partial(validate_fleet, roster=tuple(roster))
        return GameEngine(
            registry=SessionRegistry(board_size=board_size),
            turns=TurnScheduler(scheduler, think_delay_seconds=THINK_DELAY),
            events=EventBus(),
            rng=random.Random(seed),
            validator=validator,
        )

    return _make


@pytest.fixture
def engine(engine_factory: Callable[..., GameEngine]) -> GameEngine:
    return engine_factory()
