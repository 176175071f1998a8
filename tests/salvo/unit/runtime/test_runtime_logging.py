from __future__ import annotations

import json
import logging
import sys

from salvo.runtime.logging import (
    JsonFormatter,
    LoggingConfig,
    configure_logging,
    shutdown_logging,
)


def test_json_formatter_includes_fields_and_message() -> None:
    logger = logging.getLogger("test.json.formatter")
    record = logger.makeRecord(
        name=logger.name,
        level=logging.INFO,
        fn=__file__,
        lno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
        extra={"session_id": "g-1"},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["fields"] == {"session_id": "g-1"}


def test_json_formatter_serializes_exceptions() -> None:
    logger = logging.getLogger("test.json.exc")
    try:
        raise RuntimeError("broken")
    except RuntimeError:
        record = logger.makeRecord(logger.name, logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: broken" in payload["exc_info"]


def test_configure_logging_console_only_sets_level() -> None:
    configure_logging(LoggingConfig(level_name="DEBUG", console_format="text"))
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_configure_logging_streams_to_json_file(tmp_path) -> None:
    log_file = tmp_path / "logs" / "run.jsonl"
    configure_logging(LoggingConfig(level_name="INFO", console_format="json", file_path=str(log_file)))
    logging.getLogger("test.logging.file").info("written %d", 3)
    shutdown_logging()

    lines = log_file.read_text(encoding="utf-8").strip().splitlines()
    assert json.loads(lines[-1])["msg"] == "written 3"
    configure_logging(LoggingConfig())
