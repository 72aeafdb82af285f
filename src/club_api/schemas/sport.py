from pydantic import BaseModel, ConfigDict


class SportCreate(BaseModel):
    name: str
    subscription_price: float
    allowed_gender: str


class SportUpdate(BaseModel):
    name: str | None = None
    subscription_price: float | None = None
    allowed_gender: str | None = None


class SportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    subscription_price: float
    allowed_gender: str
