"""Attack resolution against one defender board."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from salvo.game.core.board import BoardState, FiredCells
from salvo.game.core.models import AttackStatus, Coord


@dataclass(frozen=True, slots=True)
class AttackResolution:
    """What one attack did to the defender board and the attacker's shot log."""

    status: AttackStatus
    coord: Coord
    ship_id: int | None = None
    contour: tuple[Coord, ...] = ()
    fleet_destroyed: bool = False


def contour_cells(cells: Iterable[Coord], size: int) -> list[Coord]:
    """Return the one-cell perimeter around `cells`, clipped to the board.

    The result is deduplicated, excludes the cells themselves, and is ordered by
    (y, x).
    """
    body = set(cells)
    ring = {
        neighbor
        for cell in body
        for neighbor in cell.neighborhood()
        if neighbor.in_bounds(size) and neighbor not in body
    }
    return sorted(ring, key=lambda coord: (coord.y, coord.x))


def resolve_attack(board: BoardState, fired: FiredCells, coord: Coord) -> AttackResolution:
    """Apply one attack at `coord`.

    Callers must already have checked bounds, turn ownership, session status and
    that `coord` is not in `fired`. Contour cells of a killed ship are marked as
    fired; placement rules keep them free of other ships.
    """
    fired.mark(coord)

    ship_id = board.ship_at(coord)
    if ship_id is None:
        return AttackResolution(status=AttackStatus.MISS, coord=coord)

    if not board.record_hit(ship_id, coord):
        return AttackResolution(status=AttackStatus.SHOT, coord=coord, ship_id=ship_id)

    contour = tuple(contour_cells(board.ship(ship_id).cells, board.size))
    fired.mark_all(contour)
    return AttackResolution(
        status=AttackStatus.KILLED,
        coord=coord,
        ship_id=ship_id,
        contour=contour,
        fleet_destroyed=board.is_fleet_destroyed(),
    )
