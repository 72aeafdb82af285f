"""Fixtures for service tests: services on the per-test database, an in-memory cache and a fake clock."""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.cache.backends import MemoryCache
from club_api.services.member_service import MemberService
from club_api.services.sport_service import SportService
from club_api.services.subscription_service import SubscriptionService


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(fake_clock: FakeClock) -> MemoryCache:
    return MemoryCache(maxsize=16, timer=fake_clock)


@pytest.fixture
def member_service(db_session: AsyncSession) -> MemberService:
    return MemberService(db_session)


@pytest.fixture
def sport_service(db_session: AsyncSession, memory_cache: MemoryCache) -> SportService:
    return SportService(db_session, memory_cache, ttl=60)


@pytest.fixture
def subscription_service(db_session: AsyncSession) -> SubscriptionService:
    return SubscriptionService(db_session)


@pytest.fixture
def create_member(member_service: MemberService):
    """
    Factory creating members through the service.

    Usage:
        member = await create_member(first_name="Bob")
    """
    async def _create(**overrides) -> dict:
        data = {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "birthdate": date(1990, 12, 10),
            "gender": "female",
        }
        data.update(overrides)
        return await member_service.create_member(data)

    return _create


@pytest.fixture
def create_sport(sport_service: SportService):
    async def _create(**overrides) -> dict:
        data = {"name": "Tennis", "subscription_price": 50, "allowed_gender": "all"}
        data.update(overrides)
        return await sport_service.create_sport(data)

    return _create
