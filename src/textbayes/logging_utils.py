"""Logging setup for the textbayes command line.

Library modules only call ``logging.getLogger(__name__)`` and so log under
the ``textbayes`` namespace. :func:`configure_logging` attaches one handler
to that namespace, built from :class:`~textbayes.config.Settings`, and
leaves the root logger and other libraries alone.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from .config import Settings, get_settings

PACKAGE_LOGGER = "textbayes"
HANDLER_NAME = "textbayes-handler"

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "module": record.module,
            "lineno": record.lineno,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def resolve_level(name: str) -> int:
    """Map a level name to its number; unknown names give WARNING."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def build_handler(settings: Settings) -> logging.Handler:
    """File handler when ``log_file`` is set, else stderr."""
    if settings.log_file:
        directory = os.path.dirname(settings.log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    if settings.log_format == "json":
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATEFMT))
    handler.set_name(HANDLER_NAME)
    return handler


def configure_logging(
    override_level: Optional[str] = None,
    force: bool = False,
    settings: Optional[Settings] = None,
) -> logging.Logger:
    """Configure the ``textbayes`` logger and return it.

    Args:
        override_level: Level name that wins over ``settings.log_level``.
        force: Replace a handler installed by an earlier call. Without it
            only the level is updated.
        settings: Settings to use; read from the environment when omitted.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolve_level(override_level or settings.log_level))

    installed = [h for h in logger.handlers if h.get_name() == HANDLER_NAME]
    if installed and not force:
        return logger

    for handler in installed:
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(build_handler(settings))
    return logger
