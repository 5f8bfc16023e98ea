"""
Logging setup.

``configure_logging()`` is called once by ``app.main`` (and by the scripts
and Alembic); everything else asks for a module logger with
``get_logger(__name__)``.
"""

import json
import logging
import sys

from app.core.config import settings

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries that log every request at INFO
_QUIET_LOGGERS = ("uvicorn.access", "httpx")


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers outside local development."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _build_formatter() -> logging.Formatter:
    if settings.ENVIRONMENT == "local":
        return logging.Formatter(PLAIN_FORMAT)
    return JsonFormatter()


def configure_logging() -> None:
    """Route all records to stdout at ``settings.LOG_LEVEL``.

    Safe to call more than once: the root logger ends up with exactly one
    handler.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
