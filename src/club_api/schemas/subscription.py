from datetime import datetime

from pydantic import BaseModel, ConfigDict


# The ids are optional at the schema level so a missing one is reported
# with the service's message instead of a generic pydantic error.

class SubscriptionCreate(BaseModel):
    member_id: int | None = None
    sport_id: int | None = None
    type: str | None = None


class SubscriptionDelete(BaseModel):
    member_id: int | None = None
    sport_id: int | None = None


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    member_id: int
    sport_id: int
    type: str
    created_at: datetime | None = None
