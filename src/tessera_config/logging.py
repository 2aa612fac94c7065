"""Logging setup shared by the CLI and embedding services."""

import logging
import sys

from tessera_config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_OWN_LOGGERS = ("tessera_identity", "tessera_config")
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


def configure_logging(settings: Settings | None = None) -> None:
    """Send log records to stdout at the configured LOG_LEVEL.

    Driver and SQLAlchemy loggers stay at WARNING whatever the level is.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    for name in _OWN_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
