"""Structured logging for reranking runs."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

PACKAGE_LOGGERS = ("results", "recommenders", "reranking", "experiments")
LOG_FILENAME = "greedyrank.log"


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON line; ``extra_data`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        extra = getattr(record, "extra_data", None)
        if extra:
            payload.update(extra)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(log_dir: Optional[Path] = None, level: int = logging.INFO) -> logging.Handler:
    """Route the package loggers through one JSON handler and return it.

    Handlers installed by an earlier call are closed and replaced.
    """

    handler: logging.Handler
    if log_dir:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_dir / LOG_FILENAME, maxBytes=5_000_000, backupCount=5)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    previous = set()
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        previous.update(h for h in logger.handlers if isinstance(h.formatter, JsonFormatter))
        logger.handlers = [handler]
        logger.setLevel(level)
        logger.propagate = False
    for old in previous:
        old.close()
    return handler


__all__ = ["configure_logging", "JsonFormatter", "LOG_FILENAME", "PACKAGE_LOGGERS"]
