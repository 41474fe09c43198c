"""Implementation of ShardRegistry using SQLAlchemy Core."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select, update

from tenantcat.adapters.catalog.schema import shard_mappings, shards
from tenantcat.adapters.db.dialects import DialectName, upsert_insert
from tenantcat.domain.value_objects import MappingStatus, Shard, ShardMapping
from tenantcat.interfaces.shard_registry import (
    MappingConflict,
    MappingNotFound,
    ShardNotRegistered,
    ShardRegistry,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row

logger = logging.getLogger(__name__)


class SqlAlchemyShardRegistry(ShardRegistry):
    """ShardRegistry implementation that supports both Postgres and SQLite.

    All writes are no-throw inserts (``ON CONFLICT DO NOTHING``); the outcome of
    a conflicting insert is decided by reading the authoritative row back, so
    the database's unique constraints arbitrate concurrent writers.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- shards ---

    def add_shard(self, shard: Shard) -> None:
        stmt = (
            upsert_insert(self.dialect, shards)
            .values(server_name=shard.server, database_name=shard.database)
            .on_conflict_do_nothing()
        )
        if self.connection.execute(stmt).rowcount == 1:
            logger.info("Registered shard %s", shard)
        else:
            logger.debug("Shard %s already registered", shard)

    def list_shards(self) -> list[Shard]:
        stmt = select(shards.c.server_name, shards.c.database_name).order_by(
            shards.c.server_name, shards.c.database_name
        )
        return [
            Shard(row.server_name, row.database_name)
            for row in self.connection.execute(stmt)
        ]

    def _shard_id(self, shard: Shard) -> int | None:
        stmt = select(shards.c.shard_id).where(
            shards.c.server_name == shard.server,
            shards.c.database_name == shard.database,
        )
        return self.connection.execute(stmt).scalar_one_or_none()

    # --- mappings ---

    def add_mapping(self, tenant_key: int, shard: Shard) -> None:
        if (shard_id := self._shard_id(shard)) is None:
            raise ShardNotRegistered(shard)

        stmt = (
            upsert_insert(self.dialect, shard_mappings)
            .values(
                tenant_key=tenant_key,
                shard_id=shard_id,
                status=MappingStatus.ONLINE.value,
            )
            .on_conflict_do_nothing()
        )
        if self.connection.execute(stmt).rowcount == 1:
            logger.info("Mapped tenant key %s to shard %s", tenant_key, shard)
            return

        # Not inserted: the key is already mapped. Decide by reading it back.
        existing = self.get_mapping(tenant_key)
        if existing is None:  # pragma: no cover
            msg = "add_mapping(): insert failed but no conflicting row found"
            raise RuntimeError(msg)
        if existing.shard == shard:
            logger.debug("Tenant key %s already mapped to %s", tenant_key, shard)
            return
        raise MappingConflict(tenant_key, existing=existing.shard, requested=shard)

    def _mapping_query(self):
        return select(
            shard_mappings.c.tenant_key,
            shard_mappings.c.status,
            shards.c.server_name,
            shards.c.database_name,
        ).join(shards, shard_mappings.c.shard_id == shards.c.shard_id)

    @staticmethod
    def _to_mapping(row: Row) -> ShardMapping:
        return ShardMapping(
            tenant_key=int(row.tenant_key),
            shard=Shard(row.server_name, row.database_name),
            status=MappingStatus(row.status),
        )

    def get_mapping(self, tenant_key: int) -> ShardMapping | None:
        stmt = self._mapping_query().where(shard_mappings.c.tenant_key == tenant_key)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return self._to_mapping(row)

    def lookup_shard(self, tenant_key: int) -> Shard | None:
        if (mapping := self.get_mapping(tenant_key)) is None:
            return None
        return mapping.shard

    def list_mappings(self) -> list[ShardMapping]:
        stmt = self._mapping_query().order_by(shard_mappings.c.tenant_key)
        return [self._to_mapping(row) for row in self.connection.execute(stmt)]

    def key_exists(self, tenant_key: int) -> bool:
        stmt = select(shard_mappings.c.tenant_key).where(
            shard_mappings.c.tenant_key == tenant_key
        )
        return self.connection.execute(stmt).first() is not None

    def set_mapping_status(self, tenant_key: int, status: MappingStatus) -> None:
        result = self.connection.execute(
            update(shard_mappings)
            .where(shard_mappings.c.tenant_key == tenant_key)
            .values(status=status.value)
        )
        if result.rowcount == 0:
            raise MappingNotFound(tenant_key)
        logger.info("Tenant key %s is now %s", tenant_key, status.value)
