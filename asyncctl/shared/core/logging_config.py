"""Logging setup shared by applications embedding asyncctl."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from .configuration import LoggingSettings

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def resolve_level(level: Optional[str]) -> int:
    """Map a level name (or ``LOG_LEVEL`` when omitted) to a logging constant."""
    name = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    return LOG_LEVEL_MAP.get(name, logging.WARNING)


def configure_logging(
    settings: Optional[LoggingSettings] = None,
    logger_name: str = "asyncctl",
) -> logging.Logger:
    """Attach console and optional rotating file handlers to ``logger_name``.

    The console handler only shows WARNING and above. When ``settings.log_file``
    is set, everything at the configured level also goes to a rotating file.
    Calling it again replaces the handlers instead of stacking duplicates.
    """
    settings = settings or LoggingSettings(level=os.getenv("LOG_LEVEL", "WARNING"))
    level = resolve_level(settings.level)

    target = logging.getLogger(logger_name)
    target.setLevel(level)
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    target.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        target.addHandler(file_handler)

    # observer errors during UI teardown are noise
    logging.getLogger("fletx.core.state").setLevel(logging.CRITICAL)

    target.debug(f"Logging configured: level={logging.getLevelName(level)}, file={settings.log_file}")
    return target
