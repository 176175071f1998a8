"""Targeting strategies for automated participants."""

from salvo.game.ai.hunt_target import HuntTargetStrategy
from salvo.game.ai.random_target import RandomTargetStrategy
from salvo.game.ai.strategy import TargetingStrategy, create_strategy, strategy_names

__all__ = [
    "HuntTargetStrategy",
    "RandomTargetStrategy",
    "TargetingStrategy",
    "create_strategy",
    "strategy_names",
]
