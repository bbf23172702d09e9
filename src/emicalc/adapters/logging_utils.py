# src/emicalc/adapters/logging_utils.py
import json
import logging
import sys
import time

from .config import config


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line; `extra={"context": {...}}` is merged in."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": time.time(),
            "env": config.ENV,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            payload.update(ctx)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        # floats and query fields only; anything else is stringified
        return json.dumps(payload, default=str, ensure_ascii=False)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.setLevel(level or config.LOG_LEVEL)
        logger.propagate = False
    return logger
