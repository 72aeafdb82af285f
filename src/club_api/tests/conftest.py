"""
Core pytest configuration.

Only the database setup and logging installation live here. Domain fixtures
are in tests/test_fixtures/ and re-exported at the bottom of this module.

Every test gets its own in-memory SQLite database: StaticPool keeps the one
connection (and so the one database) alive for the engine's lifetime, and
build_engine() turns foreign keys on for it.
"""

import logging
from typing import AsyncGenerator

# Quiet noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from club_api.config.settings import Settings
from club_api.core.logging.builder import setup_logging
from club_api.database.session import build_session_factory, create_tables, drop_tables

from .test_fixtures.database import make_test_engine, make_test_settings


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return make_test_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest, test_settings: Settings):
    """
    Install the application's dictConfig once per session.

    dictConfig drops the handlers on the root logger, pytest's capture handler
    included; it is attached again so caplog keeps working.
    """
    setup_logging(test_settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = make_test_engine()
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """A session on the per-test database. Stores commit for real; the database is thrown away afterwards."""
    session_factory = build_session_factory(async_engine)
    async with session_factory() as session:
        yield session


from .test_fixtures.store_fixtures import (  # noqa: E402
    member_store,
    sport_store,
    subscription_store,
    member_payload,
    sport_payload,
)
from .test_fixtures.service_fixtures import (  # noqa: E402
    fake_clock,
    memory_cache,
    member_service,
    sport_service,
    subscription_service,
    create_member,
    create_sport,
)
from .test_fixtures.api_fixtures import client  # noqa: E402
