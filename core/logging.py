"""
Logging configuration for the loader scripts
"""

import logging
import sys
from typing import Optional
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Per-statement, per-request and per-cursor chatter drowns out batch progress
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Send log records to stdout at ``level`` (default ``settings.LOG_LEVEL``).

    An unknown level name falls back to INFO. The root level is set even
    when handlers already exist, so calling this twice changes the level.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.getLogger().setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logging.getLogger(__name__).debug(f"Logging at {logging.getLevelName(log_level)}")
