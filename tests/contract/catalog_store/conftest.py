"""Backend fixtures for the shard registry and tenant metadata contracts."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tenantcat.adapters.catalog.in_memory_adapters import (
    InMemoryCatalogData,
    InMemoryShardRegistry,
    InMemoryTenantMetadataStore,
)
from tenantcat.adapters.catalog.sqlalchemy_adapters import (
    SqlAlchemyShardRegistry,
    SqlAlchemyTenantMetadataStore,
)
from tenantcat.interfaces.shard_registry import ShardRegistry
from tenantcat.interfaces.tenant_metadata import TenantMetadataStore

BACKENDS = ["memory", "sql_memory", "sql_file", "postgres"]

ENGINE_FIXTURES = {
    "sql_memory": "sqlite_engine_memory",
    "sql_file": "sqlite_engine_file",
    "postgres": "postgres_engine",
}


@pytest.fixture(params=BACKENDS)
def shard_registry(request: pytest.FixtureRequest) -> Iterator[ShardRegistry]:
    """Return a fresh, empty ShardRegistry for each backend.

    SQL registries share one connection for the whole test; its transaction
    is rolled back when the connection closes.
    """
    if request.param == "memory":
        yield InMemoryShardRegistry(InMemoryCatalogData())
        return
    engine = request.getfixturevalue(ENGINE_FIXTURES[request.param])
    with engine.connect() as conn:
        yield SqlAlchemyShardRegistry(conn)


@pytest.fixture(params=BACKENDS)
def metadata_store(request: pytest.FixtureRequest) -> Iterator[TenantMetadataStore]:
    """Return a fresh, empty TenantMetadataStore for each backend."""
    if request.param == "memory":
        yield InMemoryTenantMetadataStore(InMemoryCatalogData())
        return
    engine = request.getfixturevalue(ENGINE_FIXTURES[request.param])
    with engine.connect() as conn:
        yield SqlAlchemyTenantMetadataStore(conn)
