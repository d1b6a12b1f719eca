"""
Logging configuration for the CLI.

Logs go to stderr so stdout stays reserved for JSON results.

Environment variables:
- BALLIE_LOG_FORMAT: "json" or "console" (default: console)
- BALLIE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level=None, fmt=None):
    """
    Install a single stderr handler on the ``ballie`` logger.

    Args:
        level: Level name; falls back to BALLIE_LOG_LEVEL, then WARNING
        fmt: "json" or "console"; falls back to BALLIE_LOG_FORMAT

    Returns:
        The configured logger
    """
    level = (level or os.environ.get("BALLIE_LOG_LEVEL") or "WARNING").upper()
    fmt = fmt or os.environ.get("BALLIE_LOG_FORMAT") or "console"

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("[{asctime}] {levelname} {name} {message}", style="{")
        )

    logger = logging.getLogger("ballie")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level, logging.WARNING))
    logger.propagate = False
    return logger
