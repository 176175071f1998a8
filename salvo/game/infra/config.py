"""Engine configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from salvo.game.core.models import BOARD_SIZE
from salvo.game.session.turns import DEFAULT_THINK_DELAY_SECONDS


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load `.env.salvo` then `.env.salvo.local`; later files win."""
    to_load = tuple(paths) if paths is not None else (".env.salvo", ".env.salvo.local")
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Runtime-tunable engine parameters."""

    board_size: int = BOARD_SIZE
    think_delay_seconds: float = DEFAULT_THINK_DELAY_SECONDS
    bot_strategy: str = "random"
    seed: int | None = None


def load_settings(environ: Mapping[str, str] | None = None) -> EngineSettings:
    """Read `SALVO_*` variables; malformed values fall back to defaults."""
    env = os.environ if environ is None else environ
    board_size = _int(env, "SALVO_BOARD_SIZE", BOARD_SIZE)
    think_delay_ms = _int(env, "SALVO_THINK_DELAY_MS", int(DEFAULT_THINK_DELAY_SECONDS * 1000))
    strategy = env.get("SALVO_BOT_STRATEGY", "random").strip().lower() or "random"
    seed_raw = env.get("SALVO_SEED", "").strip()
    return EngineSettings(
        board_size=board_size if board_size > 0 else BOARD_SIZE,
        think_delay_seconds=max(0, think_delay_ms) / 1000.0,
        bot_strategy=strategy,
        seed=_int(env, "SALVO_SEED", 0) if seed_raw else None,
    )


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default
