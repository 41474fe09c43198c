"""Open (and if needed initialize) a catalog database."""

from __future__ import annotations

import io
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from alembic import command
from sqlalchemy import inspect, text
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from tenantcat import config
from tenantcat.adapters.catalog.in_memory_adapters import InMemoryCatalogData
from tenantcat.adapters.db.engine import make_catalog_engine, sqlite_database_path
from tenantcat.adapters.redactor import Redactor
from tenantcat.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from tenantcat.interfaces.redactor import RedactorMode
from tenantcat.service_layer.catalog import Catalog
from tenantcat.service_layer.errors import CatalogBootstrapError
from tenantcat.service_layer.retry import RetryPolicy

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

CATALOG_TABLES = frozenset({"shards", "shard_mappings", "tenants"})
ALEMBIC_VERSION_TABLE = "alembic_version"


def _migrate(connection: Connection) -> None:
    """Bring the catalog schema to head on `connection`.

    Creates the catalog tables when they are absent. Tables created outside
    Alembic (e.g. with ``metadata.create_all``) are stamped rather than
    recreated.
    """
    cfg = config.build_alembic_config(stdout=io.StringIO())
    cfg.attributes["connection"] = connection

    existing = set(inspect(connection).get_table_names())
    if CATALOG_TABLES <= existing and ALEMBIC_VERSION_TABLE not in existing:
        logger.info("Catalog tables found without version history; stamping head")
        command.stamp(cfg, "head")
    else:
        if not CATALOG_TABLES & existing:
            logger.info("Catalog tables are absent; creating an empty catalog")
        command.upgrade(cfg, "head")


def _open_engine(settings: config.CatalogSettings, redactor: Redactor) -> Engine:
    display_url = redactor.sanitize_db_url(settings.url)
    try:
        path = sqlite_database_path(settings.url)
    except ArgumentError as e:
        raise CatalogBootstrapError(display_url, "invalid catalog URL") from e
    if path is not None and not path.exists():
        raise CatalogBootstrapError(display_url, f"database file {path} does not exist")

    try:
        engine = make_catalog_engine(settings)
    except SQLAlchemyError as e:
        reason = redactor.sanitize_text(str(e))
        raise CatalogBootstrapError(display_url, f"invalid catalog URL ({reason})") from e

    try:
        with engine.begin() as connection:
            connection.execute(text("SELECT 1"))
            _migrate(connection)
    except SQLAlchemyError as e:
        engine.dispose()
        raise CatalogBootstrapError(
            display_url, redactor.sanitize_text(str(e).splitlines()[0])
        ) from e
    return engine


def open_or_bootstrap_catalog(
    url: str | None = None,
    *,
    settings: config.CatalogSettings | None = None,
    redactor_mode: RedactorMode = RedactorMode.LENIENT,
    sleep: Callable[[float], None] = time.sleep,
) -> Catalog:
    """Open the catalog at `url`, creating its tables if they are missing.

    Failing to reach the catalog database is a deployment problem, not a
    transient fault: it is reported immediately and never retried.

    Args:
        url: Catalog database URL. Defaults to `TENANTCAT_CATALOG_URL`.
        settings: Full settings; takes precedence over `url`.
        redactor_mode: How much of the URL to hide in logs and errors.
        sleep: Wait function used between retries of catalog operations.

    Returns:
        A ready-to-use `Catalog`.

    Raises:
        CatalogUrlNotSetError: If no URL is given or configured.
        CatalogBootstrapError: If the catalog database is missing or unreachable.
    """
    settings = settings or config.CatalogSettings.from_env(url)
    redactor = Redactor(redactor_mode)
    display_url = redactor.sanitize_db_url(settings.url)

    logger.debug("Opening catalog at %s", display_url)
    engine = _open_engine(settings, redactor)
    logger.info("Catalog at %s is ready", display_url)

    return Catalog(
        uow=SqlAlchemyUnitOfWork(engine),
        retry_policy=RetryPolicy(
            max_attempts=settings.retry_attempts,
            initial_delay=settings.retry_initial_delay,
        ),
        sleep=sleep,
        name=display_url,
    )


def build_in_memory_catalog(
    data: InMemoryCatalogData | None = None,
    *,
    retry_policy: RetryPolicy | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Catalog:
    """Build a catalog backed by in-process memory (tests, dry runs)."""
    return Catalog(
        uow=InMemoryUnitOfWork(data),
        retry_policy=retry_policy or RetryPolicy(),
        sleep=sleep,
        name="memory",
    )
