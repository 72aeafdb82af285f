from fastapi import APIRouter, Depends, status

from club_api.core.dependencies import get_subscription_service
from club_api.schemas.subscription import SubscriptionCreate, SubscriptionDelete, SubscriptionRead
from club_api.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("/subscribe", response_model=SubscriptionRead, status_code=status.HTTP_201_CREATED)
async def subscribe(payload: SubscriptionCreate, service: SubscriptionService = Depends(get_subscription_service)):
    return await service.subscribe(payload)


@router.delete("/unsubscribe", response_model=SubscriptionRead)
async def unsubscribe(payload: SubscriptionDelete, service: SubscriptionService = Depends(get_subscription_service)):
    return await service.unsubscribe(payload)


@router.get("", response_model=list[SubscriptionRead])
async def list_subscriptions(
    member_id: int | None = None,
    sport_id: int | None = None,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return await service.list_subscriptions(member_id=member_id, sport_id=sport_id)
