"""Board state representation and shot bookkeeping."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from salvo.game.core.models import (
    BOARD_SIZE,
    Coord,
    ShipPlacement,
    ShipType,
    cells_for_placement,
)


@dataclass(slots=True)
class ShipState:
    """One ship's occupied cells and the subset of them already hit."""

    ship_id: int
    ship_type: ShipType
    cells: frozenset[Coord]
    hits: set[Coord] = field(default_factory=set)

    @property
    def is_sunk(self) -> bool:
        return self.hits == self.cells


@dataclass(slots=True)
class BoardState:
    """Grid index of one participant's fleet.

    `owners[y, x]` holds the owning ship id, or 0 for open water. Ship ids start
    at 1 in placement order. Built once from a finalized fleet; afterwards only
    `record_hit` mutates it.
    """

    size: int
    owners: np.ndarray
    ships: dict[int, ShipState] = field(default_factory=dict)
    sunk: set[int] = field(default_factory=set)

    @classmethod
    def from_placements(
        cls, placements: Iterable[ShipPlacement], size: int = BOARD_SIZE
    ) -> BoardState:
        """Build a board from placements that already passed fleet validation."""
        board = cls(size=size, owners=np.zeros((size, size), dtype=np.int16))
        for ship_id, placement in enumerate(placements, start=1):
            cells = cells_for_placement(placement)
            for cell in cells:
                if not cell.in_bounds(size):
                    raise ValueError(f"Ship {ship_id} leaves the board at ({cell.x}, {cell.y}).")
                if board.owners[cell.y, cell.x] != 0:
                    raise ValueError(f"Ship {ship_id} overlaps another ship at ({cell.x}, {cell.y}).")
                board.owners[cell.y, cell.x] = ship_id
            board.ships[ship_id] = ShipState(
                ship_id=ship_id, ship_type=placement.ship_type, cells=frozenset(cells)
            )
        return board

    @property
    def ship_ids(self) -> tuple[int, ...]:
        return tuple(self.ships)

    @property
    def sunk_ship_ids(self) -> frozenset[int]:
        return frozenset(self.sunk)

    def ship(self, ship_id: int) -> ShipState:
        return self.ships[ship_id]

    def ship_at(self, coord: Coord) -> int | None:
        """Return the id of the ship covering the cell, if any."""
        if not coord.in_bounds(self.size):
            return None
        ship_id = int(self.owners[coord.y, coord.x])
        return ship_id or None

    def record_hit(self, ship_id: int, coord: Coord) -> bool:
        """Record a hit on a ship and return whether it is now sunk.

        The caller guarantees `coord` was not recorded for this ship before.
        """
        ship = self.ships[ship_id]
        ship.hits.add(coord)
        if ship.is_sunk:
            self.sunk.add(ship_id)
            return True
        return False

    def is_fleet_destroyed(self) -> bool:
        """Return whether every ship has been sunk."""
        return len(self.sunk) == len(self.ships)


class FiredCells:
    """Cells one attacker has already fired at (or had marked by a kill contour)."""

    __slots__ = ("_grid", "_size")

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self._size = size
        self._grid = np.zeros((size, size), dtype=np.bool_)

    @property
    def size(self) -> int:
        return self._size

    def __contains__(self, coord: object) -> bool:
        if not isinstance(coord, Coord) or not coord.in_bounds(self._size):
            return False
        return bool(self._grid[coord.y, coord.x])

    def __len__(self) -> int:
        return int(np.count_nonzero(self._grid))

    def mark(self, coord: Coord) -> None:
        self._grid[coord.y, coord.x] = True

    def mark_all(self, coords: Iterable[Coord]) -> None:
        for coord in coords:
            self.mark(coord)

    def remaining(self) -> list[Coord]:
        """Return cells not fired at yet, row by row (y, then x)."""
        return [Coord(int(x), int(y)) for y, x in np.argwhere(~self._grid)]

    def remaining_count(self) -> int:
        return self._size * self._size - len(self)
