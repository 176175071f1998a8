import random

import pytest

from salvo.game.core.board import BoardState
from salvo.game.core.fleet import random_fleet, validate_fleet
from salvo.game.core.models import (
    DEFAULT_FLEET,
    Coord,
    FleetPlacement,
    Orientation,
    ShipPlacement,
    ShipType,
    cells_for_placement,
)


def _replace(fleet: FleetPlacement, index: int, placement: ShipPlacement) -> FleetPlacement:
    ships = list(fleet.ships)
    ships[index] = placement
    return FleetPlacement(ships=ships)


def test_valid_fleet_passes(valid_fleet: FleetPlacement) -> None:
    assert validate_fleet(valid_fleet) == (True, "")


def test_missing_and_extra_ships_are_reported(valid_fleet: FleetPlacement) -> None:
    short = FleetPlacement(ships=list(valid_fleet.ships[:-1]))
    ok, reason = validate_fleet(short)
    assert not ok
    assert reason.startswith("Missing ships")

    extra = FleetPlacement(ships=[*valid_fleet.ships, ShipPlacement(ShipType.SMALL, Coord(9, 9), Orientation.HORIZONTAL)])
    ok, reason = validate_fleet(extra)
    assert not ok
    assert reason.startswith("Unexpected ships")


def test_empty_fleet_is_rejected() -> None:
    ok, reason = validate_fleet(FleetPlacement(ships=[]))
    assert not ok
    assert "Missing ships" in reason


@pytest.mark.parametrize(
    ("placement", "fragment"),
    [
        (ShipPlacement(ShipType.SMALL, Coord(10, 9), Orientation.HORIZONTAL), "leaves the board"),
        (ShipPlacement(ShipType.SMALL, Coord(1, 0), Orientation.HORIZONTAL), "overlaps"),
        (ShipPlacement(ShipType.SMALL, Coord(4, 1), Orientation.HORIZONTAL), "touches"),
    ],
)
def test_geometry_violations(valid_fleet: FleetPlacement, placement: ShipPlacement, fragment: str) -> None:
    ok, reason = validate_fleet(_replace(valid_fleet, 9, placement))
    assert not ok
    assert fragment in reason


def test_custom_roster_and_board_size() -> None:
    fleet = FleetPlacement(ships=[ShipPlacement(ShipType.MEDIUM, Coord(0, 0), Orientation.VERTICAL)])
    assert validate_fleet(fleet, size=3, roster=(ShipType.MEDIUM,)) == (True, "")
    assert not validate_fleet(fleet)[0]


@pytest.mark.parametrize("seed", [0, 7, 1337])
def test_random_fleet_is_valid_and_non_touching(seed: int) -> None:
    fleet = random_fleet(random.Random(seed))

    assert validate_fleet(fleet) == (True, "")
    assert sorted(fleet.roster().elements(), key=lambda ship: ship.size) == sorted(DEFAULT_FLEET, key=lambda ship: ship.size)
    board = BoardState.from_placements(fleet.ships)
    assert int((board.owners > 0).sum()) == sum(len(cells_for_placement(p)) for p in fleet.ships)


def test_random_fleet_is_deterministic_per_seed() -> None:
    assert random_fleet(random.Random(5)) == random_fleet(random.Random(5))


def test_random_fleet_raises_when_board_cannot_fit() -> None:
    with pytest.raises(RuntimeError, match="Failed to place fleet"):
        random_fleet(random.Random(1), size=2, roster=(ShipType.SMALL, ShipType.SMALL))
