"""TENANTCAT tenant and shard commands.

``tenantcat tenants`` registers tenants and looks them up by name;
``tenantcat shards`` lists the tenant databases known to the catalog.
Results go to stdout, one item per line, so they can be piped; notices go to
stderr.
"""

from __future__ import annotations

import click
import click_extra as clickx

from tenantcat.domain.tenant_key import derive_key, raw_key_encoding
from tenantcat.domain.value_objects import MappingStatus, Shard, TenantRecord
from tenantcat.service_layer import catalog as svc

from .catalog_access import catalog_errors, open_catalog
from .helpers import success, warn

TENANT_NAME = click.argument("name")


def _row(record: TenantRecord) -> str:
    """Render `record` as one tab-separated line: key, id, name, shard, status."""
    return "\t".join(
        [
            str(record.tenant_key),
            record.tenant_id_hex,
            record.tenant_name or "-",
            str(record.shard),
            record.status.value,
        ]
    )


@click.group(cls=clickx.ExtraGroup)
def tenants() -> None:
    """Register tenants and find their databases."""


@tenants.command()
@TENANT_NAME
@click.option("--server", "-s", required=True, help="Server hosting the tenant database.")
@click.option("--database", "-d", required=True, help="Name of the tenant database.")
@click.pass_context
def register(ctx: click.Context, name: str, server: str, database: str) -> None:
    """Register the database of tenant NAME.

    Safe to repeat: registering the same tenant on the same database again
    changes nothing.
    """
    catalog = open_catalog(ctx)
    with catalog_errors():
        key = svc.register_tenant(catalog, name, Shard(server, database))
    success(f"Registered '{name}' (key {key}, id {raw_key_encoding(key)}) on {server}/{database}")


@tenants.command()
@TENANT_NAME
@click.pass_context
def locate(ctx: click.Context, name: str) -> None:
    """Print the server/database serving tenant NAME."""
    catalog = open_catalog(ctx)
    key = derive_key(name)
    with catalog_errors():
        record = svc.get_tenant(catalog, key)
    if record is None:
        raise click.ClickException(f"Tenant '{name}' (key {key}) is not registered.")
    if record.status is MappingStatus.OFFLINE:
        warn(f"Tenant '{name}' is offline.")
    click.echo(str(record.shard))


@tenants.command()
@TENANT_NAME
@click.pass_context
def exists(ctx: click.Context, name: str) -> None:
    """Exit with status 0 if tenant NAME is registered, 1 otherwise."""
    catalog = open_catalog(ctx)
    with catalog_errors():
        registered = svc.tenant_key_registered(catalog, derive_key(name))
    click.echo("yes" if registered else "no")
    ctx.exit(0 if registered else 1)


@tenants.command(name="list")
@click.pass_context
def list_(ctx: click.Context) -> None:
    """List every registered tenant."""
    catalog = open_catalog(ctx)
    with catalog_errors():
        records = svc.list_tenants(catalog)
    for record in records:
        click.echo(_row(record))


@tenants.command()
@TENANT_NAME
@click.pass_context
def find(ctx: click.Context, name: str) -> None:
    """Look tenant NAME up by its registered name, ignoring case."""
    catalog = open_catalog(ctx)
    with catalog_errors():
        record = svc.find_tenant_by_name(catalog, name)
    if record is None:
        raise click.ClickException(f"No tenant is registered under the name '{name}'.")
    click.echo(_row(record))


@tenants.command()
@TENANT_NAME
@click.pass_context
def offline(ctx: click.Context, name: str) -> None:
    """Mark tenant NAME offline (its mapping is kept)."""
    catalog = open_catalog(ctx)
    with catalog_errors():
        svc.set_tenant_offline(catalog, derive_key(name))
    success(f"Tenant '{name}' is offline.")


@tenants.command()
@TENANT_NAME
@click.pass_context
def online(ctx: click.Context, name: str) -> None:
    """Bring tenant NAME back online."""
    catalog = open_catalog(ctx)
    with catalog_errors():
        svc.set_tenant_online(catalog, derive_key(name))
    success(f"Tenant '{name}' is online.")


@click.group(cls=clickx.ExtraGroup)
def shards() -> None:
    """Inspect the tenant databases known to the catalog."""


@shards.command(name="list")
@click.pass_context
def list_shards(ctx: click.Context) -> None:
    """List every registered shard as server/database."""
    catalog = open_catalog(ctx)
    with catalog_errors():
        registered = svc.list_shards(catalog)
    for shard in registered:
        click.echo(str(shard))
