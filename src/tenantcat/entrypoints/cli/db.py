"""TENANTCAT DB CLI: forward-only Alembic wrappers for the catalog schema.

There is no ``downgrade``: the catalog is the directory every tenant lookup
depends on, and dropping its tables is never an operator shortcut.

Behavior
- Migrations run on a connection from the catalog engine, so the same TLS and
  timeout settings apply as for catalog operations.
- Human-oriented notices go to **stderr**; Alembic output to **stdout**.
- ``upgrade`` prompts for confirmation unless ``--force`` is given.
"""

from __future__ import annotations

import sys

import click
import click_extra as clickx
from alembic import command
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, OperationalError

from tenantcat import config
from tenantcat.adapters.db.engine import make_catalog_engine
from tenantcat.adapters.redactor import Redactor

from .catalog_access import MISSING_CATALOG_URL_MSG, redactor_mode
from .helpers import success, warn

INVALID_URL_FORMAT_MSG = (
    "The value of TENANTCAT_CATALOG_URL is not a valid SQLAlchemy database URL."
)

CANNOT_CONNECT_MSG = (
    "TENANTCAT_CATALOG_URL is set, but the catalog database is not reachable.\n"
    "Please ensure the database is running and the URL is correct."
)

UPGRADE_SCHEMA_WARNING = (
    "This will upgrade the catalog schema to the latest version.\n"
    "Please ensure you have a backup before proceeding."
)


def _settings() -> config.CatalogSettings:
    try:
        return config.CatalogSettings.from_env()
    except config.CatalogUrlNotSetError as e:
        raise click.ClickException(MISSING_CATALOG_URL_MSG) from e
    except config.InvalidSettingError as e:
        raise click.ClickException(str(e)) from e


def _run_alembic(settings: config.CatalogSettings, action) -> None:
    """Run `action(cfg)` with a live catalog connection handed to Alembic."""
    try:
        engine = make_catalog_engine(settings)
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_FORMAT_MSG) from e
    try:
        with engine.begin() as connection:
            connection.execute(text("SELECT 1"))  # pragma: no mutate
            cfg = config.build_alembic_config(stdout=sys.stdout)
            cfg.attributes["connection"] = connection
            action(cfg)
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    finally:
        engine.dispose()


@click.group(cls=clickx.ExtraGroup)
def db() -> None:
    """Catalog schema management commands."""


@db.command()
@click.option(
    "--verbose", "-v", "verbose", is_flag=True, help="Show alembic's more verbose output."
)
def current(verbose: bool) -> None:
    """Show the catalog's current schema revision."""
    _run_alembic(_settings(), lambda cfg: command.current(cfg, verbose=verbose))


@db.command()
@click.option(
    "--verbose", "-v", "verbose", is_flag=True, help="Show alembic's more verbose output."
)
def heads(verbose: bool) -> None:
    """Show available head revisions."""
    cfg = config.build_alembic_config(stdout=sys.stdout)
    command.heads(cfg, verbose=verbose)


@db.command()
@click.option("--force", is_flag=True, help="Upgrade without confirmation.")
@click.pass_context
def upgrade(ctx: click.Context, force: bool) -> None:
    """Upgrade the catalog schema to the head revision."""
    settings = _settings()
    if not force:
        display_url = Redactor(redactor_mode(ctx)).sanitize_db_url(settings.url)
        warn(UPGRADE_SCHEMA_WARNING)
        click.secho(f"catalog: {click.style(display_url, underline=True)}", err=True)
        click.confirm("Are you sure you want to proceed?", abort=True)
    _run_alembic(settings, lambda cfg: command.upgrade(cfg, "head"))
    success("Upgrade complete!")
