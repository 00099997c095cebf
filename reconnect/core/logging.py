"""Structured JSON logging for the service and the uvicorn server."""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from reconnect.core.config import Settings

SERVICE_NAME = "reconnect"

_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JSONLogFormatter(logging.Formatter):
    """Render a record as one JSON object per line.

    Values passed through ``extra=`` are grouped under ``context``.
    """

    def __init__(self, app_env: str, version: str) -> None:
        super().__init__()
        self.app_env = app_env
        self.version = version

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": SERVICE_NAME,
            "environment": self.app_env,
            "version": self.version,
        }

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        }
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(settings: Settings) -> None:
    """Route root and uvicorn loggers through a single JSON handler."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter(settings.app_env, settings.version))

    logging.basicConfig(level=level, handlers=[handler], force=True)

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False
        uvicorn_logger.setLevel(level)
