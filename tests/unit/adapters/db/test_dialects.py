"""Unit tests for database dialect handling."""

import pytest
from sqlalchemy.dialects import postgresql, sqlite

from tenantcat.adapters.catalog.schema import shard_mappings
from tenantcat.adapters.db.dialects import DialectName, UnsupportedDialect, upsert_insert

# pylint: disable=too-few-public-methods


@pytest.mark.parametrize(
    "input_str,expected",
    [
        ("postgresql", DialectName.POSTGRES),
        ("postgres", DialectName.POSTGRES),
        ("pg", DialectName.POSTGRES),
        ("postgresql+psycopg", DialectName.POSTGRES),
        ("sqlite", DialectName.SQLITE),
        ("SQLite+pysqlite", DialectName.SQLITE),
    ],
)
def test_from_string_aliases(input_str, expected):
    assert DialectName.from_string(input_str) is expected


@pytest.mark.parametrize("bad", [None, "", "  ", "mysql", "mssql+pyodbc"])
def test_from_string_rejects_unsupported(bad):
    with pytest.raises(UnsupportedDialect):
        DialectName.from_string(bad)


def test_from_sqlalchemy_reads_dialect_name(sqlite_engine_memory):
    assert DialectName.from_sqlalchemy(sqlite_engine_memory) is DialectName.SQLITE
    with sqlite_engine_memory.connect() as conn:
        assert DialectName.from_sqlalchemy(conn) is DialectName.SQLITE


def test_from_sqlalchemy_raises_when_missing_attribute():
    class NotAnEngine:
        """No .dialect.name here."""

    with pytest.raises(UnsupportedDialect):
        DialectName.from_sqlalchemy(NotAnEngine())  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "dialect_name,dialect",
    [(DialectName.POSTGRES, postgresql.dialect()), (DialectName.SQLITE, sqlite.dialect())],
    ids=["postgres", "sqlite"],
)
def test_upsert_insert_compiles_on_conflict_do_nothing(dialect_name, dialect):
    stmt = (
        upsert_insert(dialect_name, shard_mappings)
        .values(tenant_key=1, shard_id=1, status="online")
        .on_conflict_do_nothing()
    )
    sql = str(stmt.compile(dialect=dialect))
    assert "ON CONFLICT DO NOTHING" in sql
