"""Unit tests for tenantcat.adapters.db.sa_types.

The custom types are exercised directly, without creating tables.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import pytest
from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect

from tenantcat.adapters.db.dialects import DialectName
from tenantcat.adapters.db.sa_types import RAW_TENANT_KEY, UTCDateTime, as_utc

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

DIALECTS = pytest.mark.parametrize(
    "dialect", [SQLiteDialect(), PostgresDialect()], ids=["sqlite", "postgres"]
)


def test_utcdatetime_python_type():
    assert UTCDateTime().python_type is datetime


@DIALECTS
def test_bind_none_returns_none(dialect: Dialect):
    assert UTCDateTime().process_bind_param(None, dialect) is None


@DIALECTS
def test_bind_aware_normalizes_to_utc(dialect: Dialect):
    aware = datetime(2024, 1, 1, 5, 0, 0, tzinfo=timezone(timedelta(hours=-7)))
    out = UTCDateTime().process_bind_param(aware, dialect)
    if dialect.name == DialectName.SQLITE.value:
        assert out.tzinfo is None and out == datetime(2024, 1, 1, 12, 0, 0)
    else:
        assert out == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@DIALECTS
def test_result_is_aware_utc(dialect: Dialect):
    out = UTCDateTime().process_result_value(datetime(2024, 1, 1, 12, 0, 0), dialect)
    assert out is not None
    assert out.tzinfo is timezone.utc
    assert out.isoformat().endswith("+00:00")


def test_raw_tenant_key_is_bytea_on_postgres_and_blob_on_sqlite():
    assert RAW_TENANT_KEY.compile(dialect=PostgresDialect()) == "BYTEA"
    assert RAW_TENANT_KEY.compile(dialect=SQLiteDialect()) == "BLOB"


def test_as_utc_labels_naive_values_and_converts_aware_ones():
    naive = datetime(2024, 1, 1, 12, 0, 0)
    eastern = datetime(2024, 1, 1, 7, 0, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert as_utc(naive) == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert as_utc(eastern) == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert as_utc(eastern).tzinfo is timezone.utc


@DIALECTS
def test_result_none_returns_none(dialect: Dialect):
    assert UTCDateTime().process_result_value(None, dialect) is None


def test_literal_rendering_uses_bind_rules():
    aware = datetime(2024, 1, 1, 13, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    out = UTCDateTime().process_literal_param(aware, SQLiteDialect())
    assert out == datetime(2024, 1, 1, 12, 0, 0)
