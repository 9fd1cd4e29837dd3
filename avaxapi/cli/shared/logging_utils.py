"""Loguru helpers for consistent logging in CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_SINK_IDS: dict[str, int] = {}

STDERR_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"


def log_dir() -> Path:
    return Path.home() / ".avaxapi" / "logs"


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Ensure a rotating log sink for the given command name."""
    log_path = log_dir() / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def configure_cli_logging(*, verbose: bool, file_enabled: bool = False, level: str = "INFO") -> None:
    """Route avaxapi logs to stderr (verbose) and/or a rotating file; silence them otherwise."""
    logger.remove()
    _SINK_IDS.clear()
    if not verbose and not file_enabled:
        logger.disable("avaxapi")
        return
    logger.enable("avaxapi")
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=STDERR_FORMAT)
    if file_enabled:
        ensure_rotating_log_file("avaxapi", level="DEBUG" if verbose else level)
