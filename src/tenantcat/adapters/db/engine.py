"""Database engine factory and helpers.

This module centralizes creation of SQLAlchemy Engines and applies
backend-specific tuning:

- **PostgreSQL**: TLS is required (``sslmode=require``) unless explicitly
  disabled, with a connect timeout and a server-side ``statement_timeout``.
- **SQLite**: adds connection PRAGMAs to enforce foreign keys, enable WAL and
  tune durability/temporary storage; the connect timeout becomes the busy
  timeout so concurrent writers wait instead of failing.

Use this module whenever you need an Engine so that all connections are
consistently configured.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url

from tenantcat.config import DEFAULT_CONNECT_TIMEOUT

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

    from tenantcat.config import CatalogSettings

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
MEMORY_DATABASES = {None, "", ":memory:"}


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    u = make_url(str(url)) if isinstance(url, str) else url
    return u.get_backend_name() in SQLITE_NAMES


def sqlite_database_path(url: str | URL) -> Path | None:
    """Return the file path of a file-backed SQLite URL.

    Returns:
        The database file path, or ``None`` for in-memory databases and for
        non-SQLite URLs.
    """
    u = make_url(str(url)) if isinstance(url, str) else url
    if u.get_backend_name() not in SQLITE_NAMES:
        return None
    if u.database in MEMORY_DATABASES or u.database.startswith("file:"):
        return None
    return Path(u.database)


def _postgres_connect_args(
    connect_timeout: int, statement_timeout: int | None, require_encryption: bool
) -> dict[str, Any]:
    args: dict[str, Any] = {"connect_timeout": connect_timeout}
    if require_encryption:
        args["sslmode"] = "require"
    if statement_timeout:
        args["options"] = f"-c statement_timeout={statement_timeout * 1000}"
    return args


def make_engine(
    url: str | URL,
    *,
    echo: bool = False,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    statement_timeout: int | None = None,
    require_encryption: bool = False,
) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.
        connect_timeout: Seconds to wait for a connection (SQLite: busy timeout).
        statement_timeout: Server-side statement limit in seconds (PostgreSQL only).
        require_encryption: Require TLS for network transports.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    if is_sqlite(url):
        engine = create_engine(
            url, echo=echo, connect_args={"timeout": connect_timeout}
        )

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute("PRAGMA temp_store=MEMORY;")
            cur.close()

        return engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=_postgres_connect_args(
            connect_timeout, statement_timeout, require_encryption
        ),
    )


def make_catalog_engine(settings: CatalogSettings, *, echo: bool = False) -> Engine:
    """Create the catalog Engine described by `settings`."""
    return make_engine(
        settings.url,
        echo=echo,
        connect_timeout=settings.connect_timeout,
        statement_timeout=settings.statement_timeout,
        require_encryption=settings.require_encryption,
    )
