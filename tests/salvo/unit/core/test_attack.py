from salvo.game.core.attack import contour_cells, resolve_attack
from salvo.game.core.board import BoardState, FiredCells
from salvo.game.core.models import AttackStatus, Coord, FleetPlacement


def _setup(fleet: FleetPlacement) -> tuple[BoardState, FiredCells]:
    board = BoardState.from_placements(fleet.ships)
    return board, FiredCells(board.size)


def test_miss_marks_only_the_target(single_ship_fleet: FleetPlacement) -> None:
    board, fired = _setup(single_ship_fleet)

    result = resolve_attack(board, fired, Coord(9, 9))

    assert result.status is AttackStatus.MISS
    assert result.ship_id is None
    assert result.contour == ()
    assert len(fired) == 1


def test_hits_then_kill_with_contour(single_ship_fleet: FleetPlacement) -> None:
    board, fired = _setup(single_ship_fleet)

    statuses = [resolve_attack(board, fired, Coord(x, 2)).status for x in (2, 3, 4)]
    final = resolve_attack(board, fired, Coord(5, 2))

    assert statuses == [AttackStatus.SHOT] * 3
    assert final.status is AttackStatus.KILLED
    assert final.ship_id == 1
    assert final.fleet_destroyed
    assert len(final.contour) == 14
    assert final.contour[0] == Coord(1, 1)
    assert final.contour[-1] == Coord(6, 3)
    assert all(cell in fired for cell in final.contour)
    # 4 shots plus 14 contour cells
    assert len(fired) == 18


def test_contour_is_clipped_at_board_edge() -> None:
    corner = contour_cells([Coord(0, 0)], 10)
    assert corner == [Coord(1, 0), Coord(0, 1), Coord(1, 1)]

    vertical = contour_cells([Coord(9, 8), Coord(9, 9)], 10)
    assert vertical == [Coord(8, 7), Coord(9, 7), Coord(8, 8), Coord(8, 9)]


def test_kill_does_not_end_fleet_while_ships_remain(valid_fleet: FleetPlacement) -> None:
    board, fired = _setup(valid_fleet)

    result = resolve_attack(board, fired, Coord(9, 4))

    assert result.status is AttackStatus.KILLED
    assert not result.fleet_destroyed
    assert Coord(8, 3) in fired
    assert Coord(8, 5) in fired
