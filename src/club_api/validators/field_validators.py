"""
Small value checks shared by settings and services.

The domain checks raise DomainError(kind=validation_failed) so services can
call them before touching the store.
"""
from datetime import date, datetime
from typing import Any, Iterable

from sqlalchemy import inspect as sa_inspect

from ..exceptions.base import validation_failed


def to_uppercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.lower()


def _label(field: str) -> str:
    # "allowed_gender" -> "Allowed gender"
    return field.replace("_", " ").capitalize()


def _enum_value(value: Any) -> Any:
    # Accept both Enum members and raw strings
    return getattr(value, "value", value)


def require_non_empty_string(value: Any, field: str, *, max_length: int | None = None, message: str | None = None) -> str:
    """
    Ensure `value` is a string with visible characters and at most `max_length` long.
    Returns the value unchanged.
    """
    if not isinstance(value, str) or not value.strip():
        raise validation_failed(
            message or f"{_label(field)} is required and must be a non-empty string",
            fields=[field],
        )
    if max_length is not None and len(value) > max_length:
        raise validation_failed(
            f"{_label(field)} must be {max_length} characters or less",
            fields=[field],
        )
    return value


def require_non_negative_number(value: Any, field: str, message: str) -> float:
    # bool is an int subclass; True is not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise validation_failed(message, fields=[field])
    return value


def require_date(value: Any, field: str) -> date:
    # datetime is a date subclass; a timestamp is not a calendar date
    if isinstance(value, datetime) or not isinstance(value, date):
        raise validation_failed(f"{_label(field)} must be a valid date", fields=[field])
    return value


def require_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise validation_failed(f"{field} must be an integer", fields=[field])
    return value


def require_choice(value: Any, choices: Iterable[str], field: str, message: str | None = None) -> str:
    choices = list(choices)
    raw = _enum_value(value)
    if raw not in choices:
        raise validation_failed(
            message or f"{_label(field)} must be one of: {', '.join(choices)}",
            fields=[field],
        )
    return raw


def require_present(data: dict[str, Any], fields: Iterable[str], message: str) -> None:
    """Raise when any of `fields` is missing or None in `data`."""
    missing = [f for f in fields if data.get(f) is None]
    if missing:
        raise validation_failed(message, fields=missing)


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the keys of `kwargs` that are not mapped attributes of `model`.
    - model: the SQLAlchemy model class (not instance)
    """
    mapper = sa_inspect(model)
    allowed = {attr.key for attr in mapper.attrs}
    return [k for k in kwargs.keys() if k not in allowed]
