"""Plain helpers (not fixtures) shared by conftest.py and the fixture modules."""

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool

from club_api.config.settings import Settings
from club_api.database.session import build_engine

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def make_test_settings(**overrides) -> Settings:
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "WARNING",
        "LOG_FORMAT": "text",
        "LOG_TO_STDOUT": True,
        "CACHE_BACKEND": "memory",
        "CREATE_TABLES_ON_STARTUP": True,
    }
    values.update(overrides)
    # _env_file=None: a developer's .env must not leak into the tests
    return Settings(_env_file=None, **values)


def make_test_engine() -> AsyncEngine:
    # StaticPool: one connection, so every session sees the same in-memory database
    return build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
