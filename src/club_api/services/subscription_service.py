import logging
from typing import Any

from club_api.exceptions.base import ErrorKind, not_found
from club_api.models.subscription import Subscription, SubscriptionType
from club_api.validators.field_validators import require_choice, require_int, require_present

from .base import BaseService, to_payload

logger = logging.getLogger(__name__)

SUBSCRIPTION_TYPES = [t.value for t in SubscriptionType]


class SubscriptionService(BaseService):
    """
    Subscribe members to sports and remove them again.

    A (member_id, sport_id) pair exists at most once; there is no update,
    changing the type means unsubscribing and subscribing again.
    """

    model = Subscription
    entity = "Subscription"

    @staticmethod
    def _require_ids(payload: dict[str, Any]) -> None:
        for field in ("member_id", "sport_id"):
            require_int(payload[field], field)

    async def subscribe(self, data) -> dict[str, Any]:
        async with self.guard("subscribe member"):
            payload = to_payload(data)
            require_present(payload, ["member_id", "sport_id", "type"], "member_id, sport_id, and type are required")
            self._require_ids(payload)
            payload["type"] = SubscriptionType(require_choice(payload["type"], SUBSCRIPTION_TYPES, "type"))

            member_id, sport_id = payload["member_id"], payload["sport_id"]
            result = await self.store.insert_one(payload)
            self.raise_for_failure(
                result,
                operation="subscribe member",
                messages={
                    ErrorKind.CONFLICT: f"Member '{member_id}' is already subscribed to sport '{sport_id}'",
                    ErrorKind.INVALID_REFERENCE: "Invalid member_id or sport_id",
                },
            )

            subscription = result.data.to_dict()
            logger.info(
                "service.subscription.created",
                extra={"member_id": member_id, "sport_id": sport_id, "subscription_type": subscription["type"]},
            )
            return subscription

    async def unsubscribe(self, data) -> dict[str, Any]:
        """Remove the subscription matching both ids exactly. NotFound when nothing matched."""
        async with self.guard("unsubscribe member"):
            payload = to_payload(data)
            require_present(payload, ["member_id", "sport_id"], "member_id and sport_id are required")
            self._require_ids(payload)

            member_id, sport_id = payload["member_id"], payload["sport_id"]
            result = await self.store.delete_where(member_id=member_id, sport_id=sport_id)
            self.raise_for_failure(result, operation="unsubscribe member")

            if not result.data:
                raise not_found(
                    f"Subscription not found for member '{member_id}' and sport '{sport_id}'",
                    member_id=member_id,
                    sport_id=sport_id,
                )

            logger.info("service.subscription.deleted", extra={"member_id": member_id, "sport_id": sport_id})
            return result.data[0].to_dict()

    async def list_subscriptions(self, member_id: int | None = None, sport_id: int | None = None) -> list[dict[str, Any]]:
        async with self.guard("list subscriptions"):
            filters = {}
            if member_id is not None:
                filters["member_id"] = member_id
            if sport_id is not None:
                filters["sport_id"] = sport_id

            result = await self.store.select(**filters)
            self.raise_for_failure(result, operation="list subscriptions")
            return [subscription.to_dict() for subscription in result.data]
