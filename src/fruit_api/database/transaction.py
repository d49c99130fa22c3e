"""
Session scopes for the handler layer.

    async with transaction(session_factory, "Fruit") as session:
        ...  # unit of work

`transaction` commits when the block exits normally and rolls back on any
failure (including a failing commit) before the failure propagates, so a
unit of work is never partially written. `read_session` is the same without
the commit, for read-only operations.

Both map store errors to app-level exceptions through db_error_handler.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fruit_api.exceptions.mapper import db_error_handler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
    model_name: str | None = None,
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        logger.debug("transaction.open", extra={"model": model_name})
        async with db_error_handler(session, model_name):
            yield session
            await session.commit()
        logger.debug("transaction.commit", extra={"model": model_name})


@asynccontextmanager
async def read_session(
    session_factory: async_sessionmaker[AsyncSession],
    model_name: str | None = None,
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        async with db_error_handler(session, model_name):
            yield session
