from __future__ import annotations

import os

import pytest

from salvo.game.infra.config import (
    EngineSettings,
    load_default_env_files,
    load_env_file,
    load_settings,
)


def test_load_env_file_parses_quotes_and_comments(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nSALVO_TEST_A=1\nSALVO_TEST_B='quoted value'\nnot a pair\n=orphan\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("SALVO_TEST_A", raising=False)
    monkeypatch.delenv("SALVO_TEST_B", raising=False)

    load_env_file(str(env_file))

    assert os.environ["SALVO_TEST_A"] == "1"
    assert os.environ["SALVO_TEST_B"] == "quoted value"


def test_load_env_file_can_keep_existing_values(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SALVO_TEST_KEEP=from_file\n", encoding="utf-8")
    monkeypatch.setenv("SALVO_TEST_KEEP", "from_shell")

    load_env_file(str(env_file), override_existing=False)
    assert os.environ["SALVO_TEST_KEEP"] == "from_shell"
    load_env_file(str(env_file))
    assert os.environ["SALVO_TEST_KEEP"] == "from_file"


def test_later_env_files_win(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    base = tmp_path / ".env.salvo"
    local = tmp_path / ".env.salvo.local"
    base.write_text("SALVO_TEST_LAYER=base\n", encoding="utf-8")
    local.write_text("SALVO_TEST_LAYER=local\n", encoding="utf-8")
    monkeypatch.delenv("SALVO_TEST_LAYER", raising=False)

    load_default_env_files(paths=(str(base), str(local), str(tmp_path / "missing")))
    assert os.environ["SALVO_TEST_LAYER"] == "local"


def test_load_settings_defaults() -> None:
    assert load_settings({}) == EngineSettings(
        board_size=10, think_delay_seconds=0.7, bot_strategy="random", seed=None
    )


def test_load_settings_reads_overrides() -> None:
    settings = load_settings(
        {
            "SALVO_BOARD_SIZE": "12",
            "SALVO_THINK_DELAY_MS": "250",
            "SALVO_BOT_STRATEGY": " Hunt ",
            "SALVO_SEED": "42",
        }
    )
    assert settings == EngineSettings(board_size=12, think_delay_seconds=0.25, bot_strategy="hunt", seed=42)


def test_load_settings_falls_back_on_malformed_values() -> None:
    settings = load_settings(
        {
            "SALVO_BOARD_SIZE": "-3",
            "SALVO_THINK_DELAY_MS": "soon",
            "SALVO_SEED": "abc",
        }
    )
    assert settings.board_size == 10
    assert settings.think_delay_seconds == 0.7
    assert settings.seed == 0
