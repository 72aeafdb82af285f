"""
Map store failures to domain errors.

The lookup is fixed: each store code maps to exactly one ErrorKind and
unknown codes fall through to Internal. Callers pass per-kind messages so a
service keeps its own wording ("Sport with name 'X' already exists") while
the classification stays in one place.
"""
import re
import logging
from typing import Any, Mapping

from .base import DomainError, ErrorKind
from .integrity_classifier import StoreErrorCode

logger = logging.getLogger(__name__)


CODE_TO_KIND: dict[StoreErrorCode, ErrorKind] = {
    StoreErrorCode.UNIQUE_VIOLATION: ErrorKind.CONFLICT,
    StoreErrorCode.FOREIGN_KEY_VIOLATION: ErrorKind.INVALID_REFERENCE,
    StoreErrorCode.CHECK_VIOLATION: ErrorKind.VALIDATION_FAILED,
    StoreErrorCode.NOT_NULL_VIOLATION: ErrorKind.VALIDATION_FAILED,
    StoreErrorCode.NO_ROWS: ErrorKind.NOT_FOUND,
}

# Log level per kind: client-caused failures are INFO, the rest are ERROR.
_KIND_LOG_LEVEL = {
    ErrorKind.CONFLICT: logging.INFO,
    ErrorKind.INVALID_REFERENCE: logging.INFO,
    ErrorKind.VALIDATION_FAILED: logging.INFO,
    ErrorKind.NOT_FOUND: logging.INFO,
    ErrorKind.INTERNAL: logging.ERROR,
}


# -----------------------
# Column extraction helpers
# -----------------------

def _extract_columns_postgres(msg: str) -> list[str] | None:
    """
    Columns named in common Postgres messages:
      - 'null value in column "name" violates not-null constraint'
      - 'DETAIL:  Key (member_id, sport_id)=(1, 2) already exists.'
    """
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]

    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]

    return None


def _extract_columns_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: sports.name' / 'NOT NULL constraint failed: members.gender'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def extract_columns(message: str | None) -> list[str] | None:
    """Best-effort extraction of column names from a store message."""
    if not message:
        return None
    return _extract_columns_postgres(message) or _extract_columns_sqlite(message)


# -----------------------
# Mapper
# -----------------------

def kind_for_code(code: StoreErrorCode | str | None) -> ErrorKind:
    try:
        return CODE_TO_KIND.get(StoreErrorCode(code), ErrorKind.INTERNAL)
    except ValueError:
        return ErrorKind.INTERNAL


def map_store_failure(
    failure,
    *,
    operation: str,
    entity: str,
    entity_id: Any = None,
    messages: Mapping[ErrorKind, str] | None = None,
) -> DomainError:
    """
    Translate a StoreFailure into a DomainError and emit a diagnostic record.

    Args:
        failure: the StoreFailure returned by a TableStore call
        operation: short operation name for logs, e.g. "update sport"
        entity: entity label used in default messages, e.g. "Sport"
        entity_id: id involved in the call, when there is one
        messages: per-kind message overrides

    Returns:
        The DomainError to raise.
    """
    kind = kind_for_code(failure.code)
    fields = extract_columns(failure.message)

    log_extra = {
        "operation": operation,
        "entity": entity,
        "entity_id": entity_id,
        "store_code": getattr(failure.code, "value", failure.code),
        "store_message": failure.message,
        "fields": fields,
        "constraint": failure.constraint,
        "kind": kind.value,
    }
    logger.log(_KIND_LOG_LEVEL[kind], f"mapper.{kind.value}", extra=log_extra)

    message = (messages or {}).get(kind) or _default_message(kind, operation, entity, entity_id)
    context = {
        "operation": operation,
        "entity": entity,
        "store_code": log_extra["store_code"],
    }
    if entity_id is not None:
        context["entity_id"] = entity_id
    if fields:
        context["fields"] = fields
    if failure.constraint:
        context["constraint"] = failure.constraint

    return DomainError(kind, message, context=context)


def _default_message(kind: ErrorKind, operation: str, entity: str, entity_id: Any) -> str:
    if kind is ErrorKind.NOT_FOUND:
        if entity_id is not None:
            return f"{entity} with ID '{entity_id}' not found"
        return f"{entity} not found"
    if kind is ErrorKind.CONFLICT:
        return f"{entity} already exists"
    if kind is ErrorKind.INVALID_REFERENCE:
        return f"{entity} references a record that does not exist"
    if kind is ErrorKind.VALIDATION_FAILED:
        return f"{entity} data violates a database constraint"
    # Internal: never echo the raw store message to clients
    return f"Failed to {operation}"
