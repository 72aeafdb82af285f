"""
Sports service.

The full sports list is read through the cache under one key ("sports"). Every
successful create, update or delete drops that key so the next read goes back
to the store. Lookups by id skip the cache.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from club_api.cache.backends import CacheBackend
from club_api.cache.cache_through import CachedCollection
from club_api.exceptions.base import ErrorKind
from club_api.models.sport import AllowedGender, Sport
from club_api.validators.field_validators import (
    require_choice,
    require_non_empty_string,
    require_non_negative_number,
    require_present,
)

from .base import BaseService, to_payload

logger = logging.getLogger(__name__)

CACHE_KEY = "sports"
CACHE_TTL = 60  # seconds
NAME_MAX_LENGTH = 100
ALLOWED_GENDERS = [g.value for g in AllowedGender]

PRICE_MESSAGE = "Subscription price must be a non-negative number"
ALLOWED_GENDER_MESSAGE = f"Allowed gender must be one of: {', '.join(ALLOWED_GENDERS)}"


class SportService(BaseService):
    model = Sport
    entity = "Sport"

    def __init__(self, db: AsyncSession, cache: CacheBackend, ttl: int = CACHE_TTL):
        super().__init__(db)
        self.sports_cache = CachedCollection(cache, CACHE_KEY, ttl, self._fetch_all)

    async def _fetch_all(self) -> list[dict[str, Any]]:
        result = await self.store.select()
        self.raise_for_failure(result, operation="fetch sports")
        return [sport.to_dict() for sport in result.data]

    def _validate(self, payload: dict[str, Any]) -> dict[str, Any]:
        if "name" in payload:
            require_non_empty_string(payload["name"], "name", max_length=NAME_MAX_LENGTH)
        if "subscription_price" in payload:
            require_non_negative_number(payload["subscription_price"], "subscription_price", PRICE_MESSAGE)
        if "allowed_gender" in payload:
            payload["allowed_gender"] = AllowedGender(
                require_choice(payload["allowed_gender"], ALLOWED_GENDERS, "allowed_gender", ALLOWED_GENDER_MESSAGE)
            )
        return payload

    @staticmethod
    def _write_messages(name: str | None) -> dict[ErrorKind, str]:
        messages = {ErrorKind.VALIDATION_FAILED: "Sport validation failed: check name, price and allowed gender"}
        if name is not None:
            messages[ErrorKind.CONFLICT] = f"Sport with name '{name}' already exists"
        return messages

    # =================================================================================================================
    # Writes (each one invalidates the cached list)
    # =================================================================================================================

    async def create_sport(self, data) -> dict[str, Any]:
        async with self.guard("create sport"):
            payload = to_payload(data)
            require_present(
                payload,
                ["name", "subscription_price", "allowed_gender"],
                "name, subscription_price and allowed_gender are required",
            )
            self._validate(payload)

            result = await self.store.insert_one(payload)
            self.raise_for_failure(
                result, operation="create sport", messages=self._write_messages(payload["name"])
            )

            await self.sports_cache.invalidate()
            sport = result.data.to_dict()
            logger.info("service.sport.created", extra={"sport_id": sport["id"], "sport_name": sport["name"]})
            return sport

    async def update_sport(self, sport_id: int, patch) -> dict[str, Any]:
        async with self.guard("update sport", sport_id=sport_id):
            payload = self.require_patch(to_payload(patch, partial=True))
            self._validate(payload)

            result = await self.store.update_by_id(sport_id, payload)
            self.raise_for_failure(
                result,
                operation="update sport",
                entity_id=sport_id,
                messages=self._write_messages(payload.get("name")),
            )

            sport = self.require_row(result, sport_id).to_dict()
            await self.sports_cache.invalidate()
            logger.info("service.sport.updated", extra={"sport_id": sport_id, "fields": sorted(payload.keys())})
            return sport

    async def delete_sport(self, sport_id: int) -> dict[str, Any]:
        async with self.guard("delete sport", sport_id=sport_id):
            result = await self.store.delete_by_id(sport_id)
            self.raise_for_failure(
                result,
                operation="delete sport",
                entity_id=sport_id,
                messages={ErrorKind.INVALID_REFERENCE: "Cannot delete sport: sport has active subscriptions"},
            )

            sport = self.require_row(result, sport_id).to_dict()
            await self.sports_cache.invalidate()
            logger.info("service.sport.deleted", extra={"sport_id": sport_id})
            return sport

    # =================================================================================================================
    # Reads
    # =================================================================================================================

    async def get_sports(self) -> list[dict[str, Any]]:
        """Every sport, served from the cache while the entry is fresh."""
        async with self.guard("get sports"):
            return await self.sports_cache.get()

    async def get_sport_by_id(self, sport_id: int) -> dict[str, Any]:
        async with self.guard("get sport", sport_id=sport_id):
            result = await self.store.select_one_by_id(sport_id)
            self.raise_for_failure(result, operation="get sport", entity_id=sport_id)
            return self.require_row(result, sport_id).to_dict()

    async def refresh_cache(self) -> list[dict[str, Any]]:
        async with self.guard("refresh sports cache"):
            sports = await self.sports_cache.refresh()
            logger.info("service.sport.cache_refreshed", extra={"count": len(sports)})
            return sports
