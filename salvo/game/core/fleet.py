"""Fleet placement validation and construction."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence

from salvo.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    FleetPlacement,
    Orientation,
    ShipPlacement,
    ShipType,
    cells_for_placement,
)


def validate_fleet(
    fleet: FleetPlacement,
    size: int = BOARD_SIZE,
    roster: Sequence[ShipType] = DEFAULT_FLEET,
) -> tuple[bool, str]:
    """Validate roster, bounds, overlap and the one-cell gap between ships."""
    expected = Counter(roster)
    actual = fleet.roster()
    if actual != expected:
        missing = expected - actual
        extra = actual - expected
        if missing:
            listed = ", ".join(f"{count}x {ship.value}" for ship, count in sorted(missing.items()))
            return False, f"Missing ships: {listed}."
        listed = ", ".join(f"{count}x {ship.value}" for ship, count in sorted(extra.items()))
        return False, f"Unexpected ships: {listed}."

    occupied: set[Coord] = set()
    for placement in fleet.ships:
        cells = cells_for_placement(placement)
        if not all(cell.in_bounds(size) for cell in cells):
            return False, f"{placement.ship_type.value} at {_describe(placement)} leaves the board."
        if any(cell in occupied for cell in cells):
            return False, f"{placement.ship_type.value} at {_describe(placement)} overlaps another ship."
        if _touches_existing(cells, occupied, size):
            return False, f"{placement.ship_type.value} at {_describe(placement)} touches another ship."
        occupied.update(cells)
    return True, ""


def random_fleet(
    rng: random.Random,
    size: int = BOARD_SIZE,
    roster: Sequence[ShipType] = DEFAULT_FLEET,
) -> FleetPlacement:
    """Generate a random valid fleet placement with non-touching ships."""
    for _ in range(400):
        generated = _generate_non_touching_fleet(rng, size, roster)
        if generated is not None:
            return generated
    raise RuntimeError(f"Failed to place fleet on a {size}x{size} board.")


def _generate_non_touching_fleet(
    rng: random.Random, size: int, roster: Sequence[ShipType]
) -> FleetPlacement | None:
    occupied: set[Coord] = set()
    placements: list[ShipPlacement] = []
    # Largest first keeps the retry rate low on the default board.
    for ship_type in sorted(roster, key=lambda ship: ship.size, reverse=True):
        candidates = _candidate_placements(ship_type, size, occupied)
        if not candidates:
            return None
        placement = rng.choice(candidates)
        placements.append(placement)
        occupied.update(cells_for_placement(placement))
    return FleetPlacement(ships=placements)


def _candidate_placements(
    ship_type: ShipType,
    size: int,
    occupied: set[Coord],
) -> list[ShipPlacement]:
    candidates: list[ShipPlacement] = []
    orientations = (Orientation.HORIZONTAL,) if ship_type.size == 1 else tuple(Orientation)
    for orientation in orientations:
        max_x = size - ship_type.size + 1 if orientation is Orientation.HORIZONTAL else size
        max_y = size if orientation is Orientation.HORIZONTAL else size - ship_type.size + 1
        for y in range(max_y):
            for x in range(max_x):
                placement = ShipPlacement(ship_type=ship_type, origin=Coord(x, y), orientation=orientation)
                cells = cells_for_placement(placement)
                if any(cell in occupied for cell in cells):
                    continue
                if _touches_existing(cells, occupied, size):
                    continue
                candidates.append(placement)
    return candidates


def _touches_existing(cells: list[Coord], occupied: set[Coord], size: int) -> bool:
    for cell in cells:
        for neighbor in cell.neighborhood():
            if neighbor.in_bounds(size) and neighbor in occupied:
                return True
    return False


def _describe(placement: ShipPlacement) -> str:
    return f"({placement.origin.x}, {placement.origin.y}) {placement.orientation.value.lower()}"
