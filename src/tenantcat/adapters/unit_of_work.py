"""Unit of Work implementations for TENANTCAT.

Provides a context-managed UnitOfWork over a SQLAlchemy Engine (one connection
and one transaction per ``with`` block) and an in-memory variant that snapshots
its data on entry so that rollback restores it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tenantcat.adapters.catalog.in_memory_adapters import (
    InMemoryCatalogData,
    InMemoryShardRegistry,
    InMemoryTenantMetadataStore,
)
from tenantcat.adapters.catalog.sqlalchemy_adapters import (
    SqlAlchemyShardRegistry,
    SqlAlchemyTenantMetadataStore,
)
from tenantcat.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        self.connection = self.engine.connect()
        self.shards = SqlAlchemyShardRegistry(self.connection)
        self.tenants = SqlAlchemyTenantMetadataStore(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()

    def close(self) -> None:
        self.engine.dispose()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """In-memory Unit of Work; uncommitted changes are discarded on exit."""

    def __init__(self, data: InMemoryCatalogData | None = None):
        self.data = data if data is not None else InMemoryCatalogData()
        self.shards = InMemoryShardRegistry(self.data)
        self.tenants = InMemoryTenantMetadataStore(self.data)
        self._committed = self.data.snapshot()

    def __enter__(self):
        self._committed = self.data.snapshot()
        return super().__enter__()

    def commit(self):
        self._committed = self.data.snapshot()

    def rollback(self):
        self.data.restore(self._committed)
