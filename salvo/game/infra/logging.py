"""App-level logging policy over the runtime logging pipeline."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from salvo.runtime.logging import JsonFormatter, LoggingConfig, configure_logging

__all__ = ["JsonFormatter", "build_logging_config", "setup_logging"]


def build_logging_config() -> LoggingConfig:
    """Resolve logging config from `SALVO_LOG_LEVEL`/`LOG_LEVEL`, `LOG_FORMAT`, `SALVO_LOG_DIR`."""
    level_name = os.getenv("SALVO_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    console_format = os.getenv("LOG_FORMAT", "text").strip().lower()
    return LoggingConfig(
        level_name=level_name,
        console_format=console_format,
        file_path=_resolve_run_log_file_path(),
        file_format="json",
    )


def setup_logging() -> None:
    """Configure application logging."""
    config = build_logging_config()
    configure_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("logging_file=%s", config.file_path)


def _resolve_run_log_file_path() -> str | None:
    configured = os.getenv("SALVO_LOG_DIR", "").strip()
    if not configured:
        return None
    base_dir = Path(configured)
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
    return str(base_dir / f"salvo_run_{stamp}.jsonl")
