"""Logging setup driven by NavsyncConfig.log_level / log_format."""

from __future__ import annotations

import json
import logging

from navsync.config.models import NavsyncConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(config: NavsyncConfig) -> None:
    """Install a single stream handler on the navsync logger."""
    handler = logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
        )
    logger = logging.getLogger("navsync")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(_LEVELS[config.log_level])
