"""Uniform random targeting."""

from __future__ import annotations

import random
from collections.abc import Sequence

from salvo.game.ai.strategy import TargetingStrategy
from salvo.game.core.models import Coord


class RandomTargetStrategy(TargetingStrategy):
    """Pick any untargeted cell with equal probability."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def choose_target(self, options: Sequence[Coord]) -> Coord:
        if not options:
            raise ValueError("options must not be empty")
        return self._rng.choice(options)
