"""Service logging with Loguru, plus optional Slack alerts for errors.

Configured once at import. Every module gets a bound logger through
``get_logger(name)`` so the ``name`` field shows which component logged.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from app.core.config import settings

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[name]}:{function}:{line} | {message}"
LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}
KNOWN_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}

_logging_configured = False


class InterceptHandler(logging.Handler):
    """Route stdlib log records (uvicorn, asyncio) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_name == "emit":
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _slack_sink(message: Any) -> None:
    record = message.record
    text = (
        f"[{record['level'].name}] offer-normalizer {record['extra'].get('name', '-')}:"
        f"{record['function']}:{record['line']}\n{record['message']}"
    )
    try:
        httpx.post(settings.SLACK_WEBHOOK_URL, json={"text": text}, timeout=5.0)
    except httpx.HTTPError:
        # A failed alert must not recurse into the logger
        pass


def resolve_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    level = LEVEL_ALIASES.get(level, level)
    return level if level in KNOWN_LEVELS else "INFO"


def configure_logging() -> None:
    global _logging_configured
    if _logging_configured:
        return
    _logging_configured = True

    level = resolve_level(settings.effective_log_level)
    stream = sys.stderr if settings.LOG_STREAM == "stderr" else sys.stdout

    logger.remove()
    logger.configure(extra={"name": "offers"})
    logger.add(
        stream,
        level=level,
        format=LOG_FORMAT,
        serialize=settings.LOG_SERIALIZE,
        backtrace=False,
        diagnose=False,
    )

    if settings.LOG_FILE_ENABLED:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "offers.log",
            level=level,
            format=LOG_FORMAT,
            serialize=settings.LOG_SERIALIZE,
            rotation="10 MB",
            retention="14 days",
            enqueue=True,
            backtrace=False,
            diagnose=False,
        )

    if settings.SLACK_WEBHOOK_URL:
        logger.add(_slack_sink, level="ERROR", enqueue=True)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # uvicorn installs its own handlers; replace them so lines are not doubled
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def get_logger(name: str) -> logger.__class__:
    return logger.bind(name=name)


configure_logging()
