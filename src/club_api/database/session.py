import logging

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from .base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement switched off per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, *, echo: bool = False, **engine_kwargs) -> AsyncEngine:
    """
    Create the AsyncEngine for `database_url`.

    SQLite URLs get a connect hook that turns on foreign key enforcement so
    dangling member/sport references fail the same way they do on PostgreSQL.
    """
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    if not is_sqlite:
        engine_kwargs.setdefault("pool_pre_ping", True)  # connection health checks

    engine = create_async_engine(database_url, echo=echo, **engine_kwargs)

    if is_sqlite:
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("database.engine.created", extra={"backend": url.get_backend_name()})
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows returned by the store stay readable after each commit.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (no migrations)."""
    # Import models so they register themselves with Base.metadata.
    from club_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(engine: AsyncEngine) -> None:
    from club_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
