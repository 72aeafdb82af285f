"""
Domain error shared by every resource service.

One exception type carries a `kind` tag instead of a class per resource and
failure; resource-specific wording comes from the factory functions below.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_REFERENCE = "invalid_reference"
    INTERNAL = "internal"


class DomainError(Exception):
    """
    Tagged error raised by services and rendered by the HTTP layer.

    - kind: one of ErrorKind; drives the HTTP status
    - message: human-friendly message (safe to show to clients)
    - context: structured details for logs (ids, operation, store code); only the
      `fields` entry is ever exposed to clients
    """

    # Map error kind -> HTTP status.
    KIND_TO_STATUS = {
        ErrorKind.VALIDATION_FAILED: 400,
        ErrorKind.INVALID_REFERENCE: 400,
        ErrorKind.NOT_FOUND: 404,
        ErrorKind.CONFLICT: 409,
        ErrorKind.INTERNAL: 500,
    }

    def __init__(self, kind: ErrorKind, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.kind = ErrorKind(kind)
        self.message = message
        self.context = dict(context) if context else {}

    def __str__(self) -> str:
        return f"{self.message} (kind: {self.kind.value})"

    def __repr__(self) -> str:
        return f"DomainError(kind={self.kind.value!r}, message={self.message!r}, context={self.context!r})"

    def to_payload(self) -> dict:
        """
        JSON-serializable body for HTTP responses:
            {"detail": "...", "code": "not_found", "fields": ["name"]}
        Store messages and constraint names stay in the logs.
        """
        payload = {"detail": self.message, "code": self.kind.value}
        fields = self.context.get("fields")
        if fields:
            payload["fields"] = list(fields)
        return payload

    def http_status(self) -> int:
        return self.KIND_TO_STATUS.get(self.kind, 500)


# -----------------------
# Factories
# -----------------------

def validation_failed(message: str, **context: Any) -> DomainError:
    return DomainError(ErrorKind.VALIDATION_FAILED, message, context=context)


def not_found(message: str, **context: Any) -> DomainError:
    return DomainError(ErrorKind.NOT_FOUND, message, context=context)


def conflict(message: str, **context: Any) -> DomainError:
    return DomainError(ErrorKind.CONFLICT, message, context=context)


def invalid_reference(message: str, **context: Any) -> DomainError:
    return DomainError(ErrorKind.INVALID_REFERENCE, message, context=context)


def internal(message: str, **context: Any) -> DomainError:
    return DomainError(ErrorKind.INTERNAL, message, context=context)


def entity_not_found(entity: str, entity_id: Any) -> DomainError:
    """`<Entity> with ID '<id>' not found`."""
    return not_found(f"{entity} with ID '{entity_id}' not found", entity=entity, entity_id=entity_id)


__all__ = [
    "ErrorKind",
    "DomainError",
    "validation_failed",
    "not_found",
    "conflict",
    "invalid_reference",
    "internal",
    "entity_not_found",
]
