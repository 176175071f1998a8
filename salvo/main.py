"""Headless entry point: play automated matches through the full engine."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence
from functools import partial

from salvo.game.ai.strategy import create_strategy, strategy_names
from salvo.game.infra.config import EngineSettings, load_default_env_files, load_settings
from salvo.game.infra.logging import setup_logging
from salvo.game.session.engine import GameEngine
from salvo.game.session.events import AttackResolved, GameFinished
from salvo.game.session.participants import Automated
from salvo.game.session.registry import SessionRegistry
from salvo.game.session.turns import TurnScheduler
from salvo.runtime.dispatch import SerialDispatcher
from salvo.runtime.logging import shutdown_logging
from salvo.runtime.scheduler import Scheduler

logger = logging.getLogger(__name__)


def build_engine(settings: EngineSettings, rng: random.Random) -> tuple[GameEngine, SerialDispatcher]:
    """Wire an engine onto a virtual-clock scheduler and its dispatcher."""
    scheduler = Scheduler()
    engine = GameEngine(
        registry=SessionRegistry(board_size=settings.board_size),
        turns=TurnScheduler(scheduler, think_delay_seconds=settings.think_delay_seconds),
        rng=rng,
    )
    return engine, SerialDispatcher(scheduler, time_source=lambda: 0.0)


def play_match(
    engine: GameEngine,
    dispatcher: SerialDispatcher,
    *,
    index: int,
    strategies: tuple[str, str],
) -> tuple[GameFinished | None, int]:
    """Run one bot-vs-bot match to completion; return the finish event and attack count."""
    finished: list[GameFinished] = []
    attacks: list[AttackResolved] = []
    subscriptions = (
        engine.events.subscribe(GameFinished, finished.append),
        engine.events.subscribe(AttackResolved, attacks.append),
    )
    first = Automated(f"bot-{index}-{strategies[0]}", partial(create_strategy, strategies[0]))
    second = Automated(f"bot-{index}-{strategies[1]}", partial(create_strategy, strategies[1]))
    try:
        created = dispatcher.submit(lambda: engine.create_session(first, second))
        dispatcher.pump(dispatcher.scheduler.now_seconds)
        session_id = created.result()
        logger.debug("match_session index=%d session=%s", index, session_id)
        while not finished:
            due_seconds = dispatcher.scheduler.next_due_seconds()
            if due_seconds is None:
                break
            dispatcher.pump(due_seconds)
    finally:
        for subscription in subscriptions:
            engine.events.unsubscribe(subscription)
    return (finished[0] if finished else None), len(attacks)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play automated battleship matches headlessly.")
    parser.add_argument("--matches", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--strategy", choices=strategy_names(), default=None)
    parser.add_argument("--opponent", choices=strategy_names(), default=None)
    args = parser.parse_args(argv)

    load_default_env_files()
    setup_logging()
    settings = load_settings()
    seed = args.seed if args.seed is not None else settings.seed
    rng = random.Random(seed)
    strategy = args.strategy or settings.bot_strategy
    opponent = args.opponent or strategy

    engine, dispatcher = build_engine(settings, rng)
    logger.info(
        "matches_start count=%d seed=%s strategies=%s,%s board=%d",
        args.matches,
        seed,
        strategy,
        opponent,
        settings.board_size,
    )
    unfinished = 0
    try:
        for index in range(1, args.matches + 1):
            result, attack_count = play_match(
                engine, dispatcher, index=index, strategies=(strategy, opponent)
            )
            if result is None:
                unfinished += 1
                logger.warning("match_unfinished index=%d", index)
                continue
            logger.info(
                "match_result index=%d winner=%s attacks=%d virtual_seconds=%.1f",
                index,
                result.winner_name,
                attack_count,
                dispatcher.scheduler.now_seconds,
            )
    finally:
        shutdown_logging()
    return 1 if unfinished else 0


if __name__ == "__main__":
    raise SystemExit(main())
