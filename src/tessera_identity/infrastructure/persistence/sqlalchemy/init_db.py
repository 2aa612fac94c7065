"""Create and drop the identity schema."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Registers the identity tables on Base.metadata
import tessera_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from tessera_identity.infrastructure.persistence.sqlalchemy.base import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Create missing identity tables and indexes. Existing tables are left alone."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Identity schema ready: %s", ", ".join(sorted(Base.metadata.tables)))


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop every identity table, rows included."""
    logger.warning("Dropping identity tables on %s", engine.url.render_as_string(hide_password=True))

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
