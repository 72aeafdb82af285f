"""
FastAPI dependencies.

The engine, session factory and cache live on app.state (created in the
lifespan, see main.py); these helpers hand them to the routes.
"""
from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.cache.backends import CacheBackend
from club_api.services.member_service import MemberService
from club_api.services.sport_service import SportService
from club_api.services.subscription_service import SubscriptionService


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """One AsyncSession per request, closed when the response is sent."""
    async with request.app.state.session_factory() as session:
        yield session


def get_cache(request: Request) -> CacheBackend:
    return request.app.state.cache


def get_member_service(db: AsyncSession = Depends(get_db_session)) -> MemberService:
    return MemberService(db)


def get_sport_service(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache),
) -> SportService:
    return SportService(db, cache, ttl=request.app.state.settings.SPORTS_CACHE_TTL)


def get_subscription_service(db: AsyncSession = Depends(get_db_session)) -> SubscriptionService:
    return SubscriptionService(db)
