"""
Shared plumbing for the resource services.

A service operation validates input, makes one store call, maps a store
failure to a DomainError and returns plain dicts. `guard()` wraps the body
so anything that is not already a DomainError is logged with its stack trace
and reduced to Internal.
"""
import logging
from contextlib import asynccontextmanager
from typing import Any, Mapping

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.exceptions.base import DomainError, ErrorKind, entity_not_found, internal, validation_failed
from club_api.exceptions.mapper import map_store_failure
from club_api.repositories.base_repository import TableStore
from club_api.repositories.result import StoreResult

logger = logging.getLogger(__name__)

EMPTY_PATCH_MESSAGE = "At least one field must be provided for update"


def to_payload(data: BaseModel | Mapping[str, Any], *, partial: bool = False) -> dict[str, Any]:
    """
    Turn a request body into a store payload.

    - partial=False (create): fields left as None are dropped so store defaults apply.
    - partial=True (update): only fields the caller actually set are kept, None included.
    """
    if isinstance(data, BaseModel):
        if partial:
            return data.model_dump(exclude_unset=True)
        return data.model_dump(exclude_none=True)

    payload = dict(data)
    if partial:
        return payload
    return {k: v for k, v in payload.items() if v is not None}


class BaseService:
    """
    Base class for services over one TableStore.

    Subclasses set `model` and `entity` (the label used in messages).
    """

    model = None
    entity = "Record"

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = TableStore(self.model, db)

    @asynccontextmanager
    async def guard(self, operation: str, **log_ctx):
        """
        Usage:
            async with self.guard("update sport", id=sport_id):
                ...
        DomainErrors pass through; anything else becomes Internal("Failed to <operation>").
        """
        try:
            yield
        except DomainError:
            raise
        except Exception as exc:
            logger.exception(
                "service.unexpected_error",
                extra={"entity": self.entity, "operation": operation, **log_ctx},
            )
            raise internal(f"Failed to {operation}", operation=operation) from exc

    def raise_for_failure(
        self,
        result: StoreResult,
        *,
        operation: str,
        entity_id: Any = None,
        messages: Mapping[ErrorKind, str] | None = None,
    ) -> None:
        if result.ok:
            return
        raise map_store_failure(
            result.failure,
            operation=operation,
            entity=self.entity,
            entity_id=entity_id,
            messages=messages,
        )

    def require_row(self, result: StoreResult, entity_id: Any):
        """The row from a single-row result; NotFound when the store returned nothing."""
        if result.data is None:
            raise entity_not_found(self.entity, entity_id)
        return result.data

    @staticmethod
    def require_patch(patch: dict[str, Any]) -> dict[str, Any]:
        if not patch:
            raise validation_failed(EMPTY_PATCH_MESSAGE)
        return patch
