"""
Value types returned by TableStore.

A store call never raises for a database failure; it hands back a
StoreResult holding either the data or a StoreFailure.
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from club_api.exceptions.integrity_classifier import StoreErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class StoreFailure:
    code: StoreErrorCode
    message: str
    constraint: str | None = None


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    data: T | None = None
    failure: StoreFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, data: Any) -> "StoreResult":
        return cls(data=data)

    @classmethod
    def failed(cls, code: StoreErrorCode, message: str, constraint: str | None = None) -> "StoreResult":
        return cls(failure=StoreFailure(code=code, message=message, constraint=constraint))
