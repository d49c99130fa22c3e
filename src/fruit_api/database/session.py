import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from fruit_api.config.settings import Settings
from fruit_api.database.base import Base

logger = logging.getLogger(__name__)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the AsyncEngine (and its connection pool) for `settings.DATABASE_URL`.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_pre_ping=True,              # drop stale pooled connections
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: committed entities are serialized after the session closes
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """
    Create all tables registered on Base.metadata (no-op for existing tables).
    """
    # import for the side effect of registering the models on Base.metadata
    from fruit_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db.schema.created", extra={"tables": sorted(Base.metadata.tables)})
