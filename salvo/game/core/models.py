"""Core domain models used by game logic."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation. Horizontal ships grow along +x, vertical along +y."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShipType(StrEnum):
    """Ship size classes."""

    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"
    HUGE = "HUGE"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.SMALL: 1,
    ShipType.MEDIUM: 2,
    ShipType.LARGE: 3,
    ShipType.HUGE: 4,
}

DEFAULT_FLEET: tuple[ShipType, ...] = (
    ShipType.HUGE,
    ShipType.LARGE,
    ShipType.LARGE,
    ShipType.MEDIUM,
    ShipType.MEDIUM,
    ShipType.MEDIUM,
    ShipType.SMALL,
    ShipType.SMALL,
    ShipType.SMALL,
    ShipType.SMALL,
)


class AttackStatus(StrEnum):
    """Outcome of a single resolved attack."""

    MISS = "MISS"
    SHOT = "SHOT"
    KILLED = "KILLED"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    x: int
    y: int

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def neighborhood(self) -> Iterator[Coord]:
        """Yield the 8 surrounding cells, unclipped."""
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx or dy:
                    yield Coord(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    ship_type: ShipType
    origin: Coord
    orientation: Orientation


@dataclass(slots=True)
class FleetPlacement:
    """Collection of ship placements."""

    ships: list[ShipPlacement]

    def roster(self) -> Counter[ShipType]:
        """Count ships per type."""
        return Counter(ship.ship_type for ship in self.ships)


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    result: list[Coord] = []
    for i in range(placement.ship_type.size):
        if placement.orientation is Orientation.HORIZONTAL:
            result.append(Coord(placement.origin.x + i, placement.origin.y))
        else:
            result.append(Coord(placement.origin.x, placement.origin.y + i))
    return result
