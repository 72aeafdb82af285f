import logging
from typing import Any

from club_api.exceptions.base import ErrorKind, validation_failed
from club_api.models.member import Gender, Member
from club_api.validators.field_validators import (
    require_choice,
    require_date,
    require_int,
    require_non_empty_string,
    require_present,
)

from .base import BaseService, to_payload

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100
GENDERS = [g.value for g in Gender]

_WRITE_MESSAGES = {
    ErrorKind.INVALID_REFERENCE: "Invalid central member reference",
    ErrorKind.VALIDATION_FAILED: "Invalid member data: check gender and other constraints",
}
_DELETE_MESSAGES = {
    ErrorKind.INVALID_REFERENCE: "Cannot delete member: member has active subscriptions or family relationships",
}


class MemberService(BaseService):
    """Create, read, update and delete club members. Nothing here is cached."""

    model = Member
    entity = "Member"

    def _validate(self, payload: dict[str, Any]) -> dict[str, Any]:
        # Checks only the keys present, so it serves both create and partial update
        for field in ("first_name", "last_name"):
            if field in payload:
                require_non_empty_string(payload[field], field, max_length=NAME_MAX_LENGTH)

        if "gender" in payload:
            payload["gender"] = Gender(require_choice(payload["gender"], GENDERS, "gender"))

        for field in ("birthdate", "subscription_date"):
            if field in payload:
                if payload[field] is None:
                    raise validation_failed(f"{field} cannot be null", fields=[field])
                require_date(payload[field], field)

        # None is allowed: it clears the family link
        if payload.get("central_member_id") is not None:
            require_int(payload["central_member_id"], "central_member_id")

        return payload

    async def create_member(self, data) -> dict[str, Any]:
        async with self.guard("create member"):
            payload = to_payload(data)
            require_present(
                payload,
                ["first_name", "last_name", "birthdate", "gender"],
                "first_name, last_name, birthdate and gender are required",
            )
            self._validate(payload)

            result = await self.store.insert_one(payload)
            self.raise_for_failure(result, operation="create member", messages=_WRITE_MESSAGES)

            member = result.data.to_dict()
            logger.info("service.member.created", extra={"member_id": member["id"]})
            return member

    async def get_member(self, member_id: int) -> dict[str, Any]:
        async with self.guard("get member", member_id=member_id):
            result = await self.store.select_one_by_id(member_id)
            self.raise_for_failure(result, operation="get member", entity_id=member_id)
            return self.require_row(result, member_id).to_dict()

    async def list_members(self) -> list[dict[str, Any]]:
        async with self.guard("list members"):
            result = await self.store.select()
            self.raise_for_failure(result, operation="list members")
            return [member.to_dict() for member in result.data]

    async def update_member(self, member_id: int, patch) -> dict[str, Any]:
        """Apply a partial update: fields the caller did not send keep their stored values."""
        async with self.guard("update member", member_id=member_id):
            payload = self.require_patch(to_payload(patch, partial=True))
            self._validate(payload)

            result = await self.store.update_by_id(member_id, payload)
            self.raise_for_failure(
                result, operation="update member", entity_id=member_id, messages=_WRITE_MESSAGES
            )

            member = self.require_row(result, member_id).to_dict()
            logger.info(
                "service.member.updated",
                extra={"member_id": member_id, "fields": sorted(payload.keys())},
            )
            return member

    async def delete_member(self, member_id: int) -> dict[str, Any]:
        async with self.guard("delete member", member_id=member_id):
            result = await self.store.delete_by_id(member_id)
            self.raise_for_failure(
                result, operation="delete member", entity_id=member_id, messages=_DELETE_MESSAGES
            )

            member = self.require_row(result, member_id).to_dict()
            logger.info("service.member.deleted", extra={"member_id": member_id})
            return member
