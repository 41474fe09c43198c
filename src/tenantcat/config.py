"""Configuration utilities for TENANTCAT.

This module centralizes the environment-driven settings of the catalog (where
the catalog database lives, how to reach it and how hard to retry) and the
Alembic configuration used to bootstrap the catalog schema.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from importlib.resources import files
from typing import TextIO

from alembic.config import Config
from sqlalchemy.engine import URL

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate

CATALOG_URL_ENV = "TENANTCAT_CATALOG_URL"
REQUIRE_ENCRYPTION_ENV = "TENANTCAT_REQUIRE_ENCRYPTION"
CONNECT_TIMEOUT_ENV = "TENANTCAT_CONNECT_TIMEOUT"
STATEMENT_TIMEOUT_ENV = "TENANTCAT_STATEMENT_TIMEOUT"
RETRY_ATTEMPTS_ENV = "TENANTCAT_RETRY_ATTEMPTS"
RETRY_INITIAL_DELAY_ENV = "TENANTCAT_RETRY_INITIAL_DELAY"

DEFAULT_CONNECT_TIMEOUT = 30  # seconds
DEFAULT_STATEMENT_TIMEOUT = 60  # seconds
DEFAULT_RETRY_ATTEMPTS = 5
DEFAULT_RETRY_INITIAL_DELAY = 2.0  # seconds

_FALSY = {"0", "false", "no", "off"}


class CatalogUrlNotSetError(Exception):
    """Raised when the TENANTCAT_CATALOG_URL environment variable is not set."""


class InvalidSettingError(ValueError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        super().__init__(f"{name}={value!r} is invalid; expected {expected}.")
        self.name = name
        self.value = value


def get_catalog_url() -> str:
    """Get the catalog database URL from the environment.

    Returns:
        The value of the `TENANTCAT_CATALOG_URL` environment variable.

    Raises:
        CatalogUrlNotSetError: If `TENANTCAT_CATALOG_URL` is not set.
    """
    if not (url := os.environ.get(CATALOG_URL_ENV)):
        raise CatalogUrlNotSetError
    return url


def _env_number(name: str, default: float, cast: type) -> float:
    if not (raw := os.environ.get(name)):
        return default
    try:
        value = cast(raw)
    except ValueError as e:
        raise InvalidSettingError(name, raw, f"a {cast.__name__}") from e
    if value <= 0:
        raise InvalidSettingError(name, raw, "a positive number")
    return value


def _env_flag(name: str, default: bool) -> bool:
    if (raw := os.environ.get(name)) is None or not raw.strip():
        return default
    return raw.strip().lower() not in _FALSY


@dataclass(frozen=True)
class CatalogConnectionSettings:
    """Connection parameters for the catalog database.

    This is the remote-execution contract of the catalog: where the database is,
    which credentials to use and the connection/statement time limits.
    Encryption in transit is required unless explicitly disabled (e.g. for a
    local test container); it has no effect on SQLite, which has no network
    transport.
    """

    host: str
    database: str
    username: str | None = None
    password: str | None = None
    port: int | None = None
    driver: str = "postgresql+psycopg"
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    statement_timeout: int = DEFAULT_STATEMENT_TIMEOUT
    require_encryption: bool = True

    def to_url(self) -> URL:
        """Build the SQLAlchemy URL for these parameters."""
        return URL.create(
            self.driver,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


@dataclass(frozen=True)
class CatalogSettings:
    """Runtime settings of the catalog, usually read from the environment."""

    url: str
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT
    statement_timeout: int = DEFAULT_STATEMENT_TIMEOUT
    require_encryption: bool = True
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    retry_initial_delay: float = DEFAULT_RETRY_INITIAL_DELAY

    @classmethod
    def from_env(cls, url: str | None = None) -> CatalogSettings:
        """Read settings from ``TENANTCAT_*`` environment variables.

        Args:
            url: Catalog URL to use instead of `TENANTCAT_CATALOG_URL`.

        Raises:
            CatalogUrlNotSetError: If no URL is given and none is configured.
            InvalidSettingError: If a numeric variable cannot be parsed.
        """
        return cls(
            url=url or get_catalog_url(),
            connect_timeout=int(
                _env_number(CONNECT_TIMEOUT_ENV, DEFAULT_CONNECT_TIMEOUT, int)
            ),
            statement_timeout=int(
                _env_number(STATEMENT_TIMEOUT_ENV, DEFAULT_STATEMENT_TIMEOUT, int)
            ),
            require_encryption=_env_flag(REQUIRE_ENCRYPTION_ENV, True),
            retry_attempts=int(
                _env_number(RETRY_ATTEMPTS_ENV, DEFAULT_RETRY_ATTEMPTS, int)
            ),
            retry_initial_delay=_env_number(
                RETRY_INITIAL_DELAY_ENV, DEFAULT_RETRY_INITIAL_DELAY, float
            ),
        )

    @classmethod
    def from_connection(cls, connection: CatalogConnectionSettings) -> CatalogSettings:
        """Build settings from explicit connection parameters."""
        return cls(
            url=connection.to_url().render_as_string(hide_password=False),
            connect_timeout=connection.connect_timeout,
            statement_timeout=connection.statement_timeout,
            require_encryption=connection.require_encryption,
        )


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for the catalog migrations.

    Sets only Alembic "main" options:
    - `sqlalchemy.url` → the database URL you pass
    - `script_location` → TENANTCAT's packaged Alembic scripts

    Args:
        db_url: SQLAlchemy database URL. Can be `None` (default) only in
            contexts where Alembic won't need to connect to the DB, or when a
            live connection is handed over via ``config.attributes``.
        stdout: Text stream Alembic will write status lines to.

    Returns:
        An `alembic.config.Config` pointing to TENANTCAT's migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        # ConfigParser interpolation treats '%' specially
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url.replace("%", "%%"))
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("tenantcat.adapters.db.alembic")),
    )
    return cfg
