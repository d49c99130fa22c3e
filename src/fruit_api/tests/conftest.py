"""
Core pytest configuration for the entire test suite.

Every test gets its own SQLite file under tmp_path, so tests never share rows
and no cleanup is needed. The handler opens its own sessions (one per unit of
work), which is why a per-test database is used instead of wrapping the test in
an outer transaction.

Domain-specific fixtures live in tests/test_fixtures/ and are imported at the
bottom of this module so they are available everywhere.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Iterator

# Silence noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "httpx",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fruit_api.config.settings import Settings
from fruit_api.core.logging.builder import setup_logging, stop_queue_logging
from fruit_api.database.session import create_engine_from_settings, create_schema, create_session_factory
from fruit_api.main import create_app
from fruit_api.services.fruit_handler import FruitHandler

from .test_fixtures.settings_fixtures import make_settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging(settings: Settings) -> Iterator[None]:
    """
    Install the application's logging config for each test and stop any queue
    listener a test may have started.
    """
    setup_logging(settings)
    yield
    stop_queue_logging()


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_engine_from_settings(settings)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(async_engine)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """
    A plain session on the test database. Nothing is committed unless the test does it.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def fruit_handler(session_factory: async_sessionmaker[AsyncSession]) -> FruitHandler:
    return FruitHandler(session_factory)


# ------------------------------------------------------------------------------------------------
# HTTP FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """
    TestClient running the app lifespan (schema creation, engine disposal).

    Failures are translated inside the app, so nothing reaches the client as
    an exception; a test that sees one has found an untranslated failure.
    """
    with TestClient(app) as test_client:
        yield test_client


# Domain fixtures
from .test_fixtures.fruit_fixtures import (  # noqa: E402
    fruit_repository,
    sample_fruit_names,
    create_fruit,
    seeded_fruits,
)
