"""
Declarative base shared by every ORM model in the package.
Import this Base in any model module that defines ORM classes.
"""

from enum import Enum
from typing import Any

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):

    def to_dict(self) -> dict[str, Any]:
        """
        Plain-dict snapshot of the mapped columns.

        Services hand these dicts back to callers instead of live ORM objects,
        so enum members are flattened to their stored string values.
        """
        row: dict[str, Any] = {}
        for column in self.__table__.columns:
            value = getattr(self, column.key)
            row[column.key] = value.value if isinstance(value, Enum) else value
        return row


# Naming convention for constraints and indexes.
# Constraint names end up in driver error messages, so keep them predictable.
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
