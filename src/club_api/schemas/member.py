from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class MemberCreate(BaseModel):
    """
    Payload for POST /members/create.

    `gender` is a plain string here; the service checks it against the
    allowed values so the error carries the club's own message.
    """

    first_name: str
    last_name: str
    birthdate: date
    gender: str
    subscription_date: date | None = Field(default=None, description="Defaults to today in the store")
    central_member_id: int | None = None


class MemberUpdate(BaseModel):
    # Every field optional: only the ones the client sends end up in the patch
    first_name: str | None = None
    last_name: str | None = None
    birthdate: date | None = None
    gender: str | None = None
    subscription_date: date | None = None
    central_member_id: int | None = None


class MemberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    birthdate: date
    subscription_date: date
    gender: str
    central_member_id: int | None = None
