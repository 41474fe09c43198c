"""Utility enums and helpers for database dialect handling.

This module defines the set of supported database dialect names used by
TENANTCAT and the dialect-specific ``INSERT`` constructs the catalog adapters
need for ``ON CONFLICT`` handling. Centralizing these avoids scattering string
literals (e.g., "postgresql", "sqlite") throughout the adapters.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.dialects.postgresql import Insert as PgInsert
    from sqlalchemy.dialects.sqlite import Insert as SqliteInsert


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Enumeration of supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize and convert an arbitrary dialect string to DialectName.

        Accepts common aliases and driver-qualified names (e.g., 'postgres',
        'postgresql+psycopg', 'sqlite', 'sqlite+pysqlite').

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """

        raw = (dialect_str or "").strip().lower()
        base = raw.split("+", 1)[0]

        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":
            return cls.SQLITE

        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the dialect is not recognized or supported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


def upsert_insert(dialect: DialectName, table: Table) -> PgInsert | SqliteInsert:
    """Return an ``INSERT`` for `table` supporting ``ON CONFLICT`` clauses.

    Both supported backends spell the clause the same way in SQLAlchemy
    (``on_conflict_do_nothing`` / ``on_conflict_do_update``), so callers can
    build one statement regardless of dialect.
    """
    if dialect is DialectName.POSTGRES:
        return pg_insert(table)
    if dialect is DialectName.SQLITE:
        return sqlite_insert(table)
    raise UnsupportedDialect(f"Unsupported dialect: {dialect!r}")  # pragma: no cover
