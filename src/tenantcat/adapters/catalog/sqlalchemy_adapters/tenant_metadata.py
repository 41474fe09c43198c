"""Implementation of TenantMetadataStore using SQLAlchemy Core."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from tenantcat.adapters.catalog.schema import tenants
from tenantcat.adapters.db.dialects import DialectName, upsert_insert
from tenantcat.domain.value_objects import TenantMetadata
from tenantcat.interfaces.tenant_metadata import TenantMetadataStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row

logger = logging.getLogger(__name__)


class SqlAlchemyTenantMetadataStore(TenantMetadataStore):
    """TenantMetadataStore backed by the ``tenants`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    def upsert_tenant_name(self, tenant_id: bytes, tenant_name: str) -> None:
        now = datetime.now(timezone.utc)
        insert = upsert_insert(self.dialect, tenants).values(
            tenant_id=tenant_id, tenant_name=tenant_name, last_updated=now
        )
        stmt = insert.on_conflict_do_update(
            index_elements=[tenants.c.tenant_id],
            set_={
                "tenant_name": insert.excluded.tenant_name,
                "last_updated": insert.excluded.last_updated,
            },
        )
        self.connection.execute(stmt)
        logger.debug("Upserted tenant 0x%s as %r", tenant_id.hex().upper(), tenant_name)

    @staticmethod
    def _to_metadata(row: Row) -> TenantMetadata:
        return TenantMetadata(
            tenant_id=bytes(row.tenant_id),
            tenant_name=row.tenant_name,
            last_updated=row.last_updated,
        )

    def get(self, tenant_id: bytes) -> TenantMetadata | None:
        stmt = select(tenants).where(tenants.c.tenant_id == tenant_id)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return self._to_metadata(row)

    def list_tenants(self) -> list[TenantMetadata]:
        stmt = select(tenants).order_by(tenants.c.tenant_name, tenants.c.tenant_id)
        return [self._to_metadata(row) for row in self.connection.execute(stmt)]

    def find_by_name(self, tenant_name: str) -> TenantMetadata | None:
        stmt = (
            select(tenants)
            .where(func.lower(tenants.c.tenant_name) == tenant_name.lower())
            .order_by(tenants.c.tenant_id)
        )
        if not (row := self.connection.execute(stmt).first()):
            return None
        return self._to_metadata(row)
