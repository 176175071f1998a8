"""Targeting strategy interface and selection utilities."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from salvo.game.core.models import AttackStatus, Coord


class TargetingStrategy(ABC):
    """Picks the next cell for an automated participant."""

    @abstractmethod
    def choose_target(self, options: Sequence[Coord]) -> Coord:
        """Return one of `options`, which lists every cell not yet fired at."""

    def notify_result(
        self, coord: Coord, status: AttackStatus, contour: Sequence[Coord] = ()
    ) -> None:
        """Update strategy state with the outcome of its own attack."""


StrategyFactory = Callable[[random.Random], TargetingStrategy]


def strategy_names() -> tuple[str, ...]:
    return tuple(_registry())


def create_strategy(name: str, rng: random.Random) -> TargetingStrategy:
    """Build a named strategy bound to `rng`."""
    factories = _registry()
    try:
        factory = factories[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown targeting strategy {name!r}; expected one of {', '.join(factories)}."
        ) from None
    return factory(rng)


def _registry() -> dict[str, StrategyFactory]:
    from salvo.game.ai.hunt_target import HuntTargetStrategy
    from salvo.game.ai.random_target import RandomTargetStrategy

    return {"random": RandomTargetStrategy, "hunt": HuntTargetStrategy}
