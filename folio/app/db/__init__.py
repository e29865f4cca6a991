import logging

from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


async def init_models(engine: AsyncEngine, drop: bool = False) -> None:
    """Create every table registered on Base.metadata."""
    # Import models so they register on the metadata
    from folio.app import models  # noqa: F401
    from folio.app.db.base import Base

    async with engine.begin() as conn:
        if drop:
            logger.warning("Dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables are ready")
