"""Async engine construction for PostgreSQL and SQLite."""

import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tessera_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_engine_from_settings(
    settings: Settings | None = None,
    database_url: str | None = None,
) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    PostgreSQL runs at READ COMMITTED with pre-ping on pooled connections.
    SQLite takes its write lock at BEGIN IMMEDIATE, so concurrent writers
    queue on the busy timeout instead of failing on lock upgrade.

    Parameters
    ----------
    settings
        Application settings (defaults to ``get_settings()``)
    database_url
        Overrides ``settings.database_url``

    Returns
    -------
    AsyncEngine instance
    """
    settings = settings or get_settings()
    url = database_url or settings.database_url

    if url.startswith("sqlite"):
        _ensure_sqlite_directory(url)
        engine = create_async_engine(
            url,
            echo=settings.database_echo,
            connect_args={"timeout": settings.sqlite_busy_timeout_seconds},
        )
        _enable_sqlite_immediate_transactions(engine)
        logger.debug("Created SQLite engine for %s", url)
        return engine

    engine = create_async_engine(
        url,
        echo=settings.database_echo,
        isolation_level="READ COMMITTED",
        pool_pre_ping=True,  # Verify connections before use
    )
    logger.debug("Created engine for %s", make_url(url).render_as_string(hide_password=True))
    return engine


def _ensure_sqlite_directory(url: str) -> None:
    database = make_url(url).database
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def _enable_sqlite_immediate_transactions(engine: AsyncEngine) -> None:
    # Take over transaction control from the sqlite3 driver so that BEGIN
    # is emitted by SQLAlchemy, see "Serializable isolation / Savepoints /
    # Transactional DDL" in the SQLAlchemy SQLite dialect docs.

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # NOQA: ARG001
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
