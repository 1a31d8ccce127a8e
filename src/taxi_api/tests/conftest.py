"""
Core pytest configuration for the entire test suite.

Only the database setup and logging install live here. Domain fixtures are in:
- tests/test_fixtures/data_fixtures.py      (Faker payload factories)
- tests/test_fixtures/service_fixtures.py   (repositories, services, persisted records)
- tests/test_fixtures/api_fixtures.py       (FastAPI app + httpx client)
"""

from __future__ import annotations

import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Keep this block above the taxi_api imports so collection stays quiet.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
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
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)

from taxi_api.config.settings import Settings
from taxi_api.core.logging.builder import setup_logging
from taxi_api.database.base import Base
from taxi_api.database.session import enable_sqlite_foreign_keys
import taxi_api.models  # noqa: F401 – registers models with Base.metadata

logger = logging.getLogger(__name__)


def safe_log_db_url(db_url: str) -> str:
    """Drop credentials from a database URL before logging it."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. TEST_DATABASE_URL (CI, e.g. a throwaway Postgres)
    2. otherwise a private in-memory SQLite database per test
    """
    return os.getenv("TEST_DATABASE_URL") or "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings for the test session; no .env values leak in for the fields set here."""
    return Settings(
        ENV="testing",
        DATABASE_URI=TEST_DATABASE_URL,
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="json",
        LOG_TO_STDOUT=True,
        AUTO_CREATE_TABLES=False,
    )


@pytest.fixture(scope="session", autouse=True)
def configure_logging(test_settings: Settings):
    """
    Install the application's dictConfig once per session. pytest re-adds its
    capture handlers around every test phase, so caplog keeps working.
    """
    setup_logging(test_settings)
    logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    A fresh schema per test. Services commit, so isolation comes from a new
    database (SQLite) or drop_all on teardown (TEST_DATABASE_URL).
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        # StaticPool: every checkout shares the one in-memory connection
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
        await session.rollback()


# Shared fixtures, registered globally
from .test_fixtures.data_fixtures import (  # noqa: E402
    fake,
    passenger_payload,
    driver_payload,
)
from .test_fixtures.service_fixtures import (  # noqa: E402
    passenger_repository,
    driver_repository,
    passenger_service,
    driver_service,
    created_passenger,
    created_driver,
)
from .test_fixtures.api_fixtures import (  # noqa: E402
    app,
    client,
)
