"""Custom SQLAlchemy types for TENANTCAT.

These types encapsulate small, backend-aware behaviors while preserving clear
Python-side types for tooling.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import LargeBinary
from sqlalchemy.dialects.postgresql import BYTEA
from sqlalchemy.types import DateTime, TypeDecorator

from tenantcat.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["RAW_TENANT_KEY", "UTCDateTime", "as_utc"]


#: Four-byte raw tenant key (BYTEA on Postgres, BLOB on SQLite).
RAW_TENANT_KEY = LargeBinary(4).with_variant(BYTEA(), "postgresql")


def as_utc(value: datetime) -> datetime:
    """Return `value` as an aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """``tenants.last_updated`` column type: aware UTC in, aware UTC out.

    SQLite has no time zone support, so the value is stored there as naive UTC
    and re-labelled on the way back.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        stamp = as_utc(value)
        if dialect.name == DialectName.SQLITE.value:
            return stamp.replace(tzinfo=None)
        return stamp

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        return as_utc(value) if isinstance(value, datetime) else value

    process_literal_param = process_bind_param

    @property
    def python_type(self) -> type[datetime]:
        return datetime
