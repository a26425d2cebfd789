"""
Base configurations and mixins for database models.

Provides the declarative base shared by every model, a ``to_dict`` helper
used by the API layer, and the id/timestamp mixins. Column names follow the
platform's existing relational schema, so an existing database maps onto
these models unchanged.
"""

import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, inspect
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


class CustomBase:
    """
    Custom base class for SQLAlchemy models with enhanced serialization.

    ``to_dict`` converts model instances to plain dictionaries, rendering
    datetimes as ISO strings. Columns listed in ``__private_fields__`` are
    never serialized.
    """

    __private_fields__: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        d = {}
        if not self:
            return d
        for column in inspect(self).mapper.column_attrs:
            if column.key in self.__private_fields__:
                continue
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                d[column.key] = value.isoformat()
            elif isinstance(value, enum.Enum):
                d[column.key] = value.value
            else:
                d[column.key] = value
        return d


Base = declarative_base(cls=CustomBase)


class IntegerIdMixin:
    """Auto-incrementing integer primary key."""

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Primary key",
    )


def created_at_column(comment: str) -> Column:
    """Creation timestamp column filled by the database on insert."""
    return Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment=comment,
    )


__all__ = ["Base", "IntegerIdMixin", "created_at_column"]
