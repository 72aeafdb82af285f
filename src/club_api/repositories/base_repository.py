"""
Store adapter over one table.

`TableStore` wraps single-row and multi-row create/read/update/delete calls
against one SQLAlchemy model. Each call is its own unit of work: it commits on
success and rolls back on failure, so nothing is ever half applied.

Database failures do not raise. They come back as a `StoreResult` whose
`failure` carries a `StoreErrorCode` (see exceptions.integrity_classifier);
turning that into a domain error is the caller's job (exceptions.mapper).
"""
import time
import logging
from typing import Any, Awaitable, Callable, Generic, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.database.base import Base
from club_api.exceptions.integrity_classifier import StoreErrorCode, classify_store_error
from club_api.validators.field_validators import find_unknown_model_kwargs

from .result import StoreResult

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

NO_ROWS_MESSAGE = "The result contains 0 rows"


class _NoRows(Exception):
    """Raised inside a unit of work when a single-row request matched nothing."""


class TableStore(Generic[ModelType]):
    """
    Generic store adapter for one model.

    Type Parameters:
        ModelType: The SQLAlchemy model class this store manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Args:
            model: the model class itself (not an instance), e.g. Sport
            db: the AsyncSession for the current request
        """
        self.model = model
        self.db = db

    # =================================================================================================================
    # Unit of work
    # =================================================================================================================

    async def _run(self, operation: str, work: Callable[[], Awaitable[Any]], **log_ctx) -> StoreResult:
        """
        Run `work`, commit, and wrap the outcome.

        Logging:
        - DEBUG: start and success events with duration_ms.
        - INFO: single-row request that matched nothing.
        - WARNING: classified database failure (code + driver message).
        """
        model_name = self.model.__name__
        logger.debug(f"store.{operation}.start", extra={"model": model_name, "operation": operation, **log_ctx})
        start = time.perf_counter()

        try:
            data = await work()
            await self.db.commit()

        except _NoRows:
            await self._rollback(operation)
            logger.info(
                f"store.{operation}.no_rows",
                extra={"model": model_name, "operation": operation, **log_ctx},
            )
            return StoreResult.failed(StoreErrorCode.NO_ROWS, NO_ROWS_MESSAGE)

        except (SQLAlchemyError, OSError) as exc:
            # OSError: the driver could not reach the server at all
            await self._rollback(operation)
            code, constraint = classify_store_error(exc)
            message = str(getattr(exc, "orig", None) or exc)
            logger.warning(
                f"store.{operation}.failed",
                extra={
                    "model": model_name,
                    "operation": operation,
                    "store_code": code.value,
                    "constraint": constraint,
                    "error": message[:500],
                    **log_ctx,
                },
            )
            return StoreResult.failed(code, message, constraint)

        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.debug(
            f"store.{operation}.success",
            extra={"model": model_name, "operation": operation, "duration_ms": duration_ms, **log_ctx},
        )
        return StoreResult.success(data)

    async def _rollback(self, operation: str) -> None:
        try:
            await self.db.rollback()
        except Exception:
            # A failed rollback means the connection is gone; the original failure is still reported.
            logger.exception(
                f"store.{operation}.rollback_failed",
                extra={"model": self.model.__name__, "operation": operation},
            )

    def _check_columns(self, payload: dict[str, Any]) -> None:
        # Unknown keys are a caller bug, not a database failure
        unknown = find_unknown_model_kwargs(self.model, payload)
        if unknown:
            raise ValueError(f"Unknown field(s) for {self.model.__name__}: {', '.join(sorted(unknown))}")

    def _filtered_select(self, filters: dict[str, Any]):
        self._check_columns(filters)
        query = select(self.model)
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        return query.order_by(self.model.id)

    async def _load(self, entity_id: Any) -> ModelType:
        # populate_existing: rows already in the identity map are re-read, not served stale
        result = await self.db.execute(
            select(self.model)
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        entity = result.scalar_one_or_none()
        if entity is None:
            raise _NoRows()
        return entity

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def insert_one(self, payload: dict[str, Any]) -> StoreResult:
        """Insert one row and return it with server-generated fields loaded."""
        self._check_columns(payload)

        async def work():
            entity = self.model(**payload)
            self.db.add(entity)
            await self.db.flush()
            # server defaults (ids, dates, timestamps) are only known after a reload
            await self.db.refresh(entity)
            return entity

        return await self._run("insert_one", work, provided_keys=sorted(payload.keys()))

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def select(self, **filters) -> StoreResult:
        """All rows matching the equality filters, ordered by id. Empty list when none match."""
        query = self._filtered_select(filters)

        async def work():
            result = await self.db.execute(query.execution_options(populate_existing=True))
            return list(result.scalars().all())

        return await self._run("select", work, filters=sorted(filters.keys()))

    async def select_one_by_id(self, entity_id: Any) -> StoreResult:
        return await self._run("select_one_by_id", lambda: self._load(entity_id), id=entity_id)

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update_by_id(self, entity_id: Any, patch: dict[str, Any]) -> StoreResult:
        """
        Apply `patch` to one row. Only the keys present in `patch` are written;
        None is a real value here (it clears a nullable column).
        """
        self._check_columns(patch)

        async def work():
            entity = await self._load(entity_id)
            for field, value in patch.items():
                setattr(entity, field, value)
            await self.db.flush()
            return entity

        return await self._run("update_by_id", work, id=entity_id, patch_keys=sorted(patch.keys()))

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete_by_id(self, entity_id: Any) -> StoreResult:
        """Delete one row and return it as it was before deletion."""

        async def work():
            entity = await self._load(entity_id)
            await self.db.delete(entity)
            await self.db.flush()
            return entity

        return await self._run("delete_by_id", work, id=entity_id)

    async def delete_where(self, **filters) -> StoreResult:
        """Delete every row matching the equality filters and return them. Empty list when none match."""
        if not filters:
            raise ValueError("delete_where needs at least one filter")
        query = self._filtered_select(filters)

        async def work():
            result = await self.db.execute(query)
            entities = list(result.scalars().all())
            for entity in entities:
                await self.db.delete(entity)
            await self.db.flush()
            return entities

        return await self._run("delete_where", work, filters=sorted(filters.keys()))
