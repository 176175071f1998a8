"""Hunt/Target strategy with parity hunting."""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Sequence

from salvo.game.ai.strategy import TargetingStrategy
from salvo.game.core.models import AttackStatus, Coord


class HuntTargetStrategy(TargetingStrategy):
    """Chase neighbours of a damaged ship, otherwise hunt on a checkerboard."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self._target_queue: deque[Coord] = deque()
        self._active_hits: list[Coord] = []

    def choose_target(self, options: Sequence[Coord]) -> Coord:
        if not options:
            raise ValueError("options must not be empty")
        remaining = set(options)

        while self._target_queue:
            coord = self._target_queue.popleft()
            if coord in remaining:
                return coord

        parity = [coord for coord in options if (coord.x + coord.y) % 2 == 0]
        return self._rng.choice(parity or list(options))

    def notify_result(
        self, coord: Coord, status: AttackStatus, contour: Sequence[Coord] = ()
    ) -> None:
        if status is AttackStatus.SHOT:
            self._active_hits.append(coord)
            self._enqueue_target_neighbors(coord)
            self._narrow_queue_by_orientation()
        elif status is AttackStatus.KILLED:
            self._active_hits.clear()
            self._target_queue.clear()

    def _enqueue_target_neighbors(self, coord: Coord) -> None:
        # Bounds and repeats are filtered against the live options at choose time.
        self._target_queue.extend(
            (
                Coord(coord.x - 1, coord.y),
                Coord(coord.x + 1, coord.y),
                Coord(coord.x, coord.y - 1),
                Coord(coord.x, coord.y + 1),
            )
        )

    def _narrow_queue_by_orientation(self) -> None:
        if len(self._active_hits) < 2:
            return

        rows = {coord.y for coord in self._active_hits}
        cols = {coord.x for coord in self._active_hits}
        if len(rows) == 1:
            row = next(iter(rows))
            self._target_queue = deque(coord for coord in self._target_queue if coord.y == row)
        elif len(cols) == 1:
            col = next(iter(cols))
            self._target_queue = deque(coord for coord in self._target_queue if coord.x == col)
