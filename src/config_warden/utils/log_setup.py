"""Logging setup for the command-line tool.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
CLI calls ``setup_logging`` once to attach handlers to the package logger.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from config_warden.utils.config import LoggingSettings

PACKAGE_LOGGER = "config_warden"


class JSONLineFormatter(logging.Formatter):
    """Format each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    settings: LoggingSettings,
    verbose: bool = False,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Args:
        settings: Logging settings.
        verbose: Lower the level to DEBUG. Only changes log detail.
        console: Console for the rich handler (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.DEBUG if verbose else logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logger.setLevel(level)

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    handler: logging.Handler
    if settings.format == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JSONLineFormatter())
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
    logger.addHandler(handler)

    if settings.file:
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setFormatter(JSONLineFormatter())
        logger.addHandler(file_handler)

    return logger
