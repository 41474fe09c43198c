"""In-memory TenantMetadataStore implementation for testing purposes."""

from datetime import datetime, timezone

from tenantcat.domain.value_objects import TenantMetadata
from tenantcat.interfaces.tenant_metadata import TenantMetadataStore

from .store import InMemoryCatalogData


class InMemoryTenantMetadataStore(TenantMetadataStore):
    """Dictionary-backed tenant metadata, keyed by raw tenant key."""

    def __init__(self, data: InMemoryCatalogData):
        self._data = data

    def upsert_tenant_name(self, tenant_id: bytes, tenant_name: str) -> None:
        self._data.tenants[bytes(tenant_id)] = TenantMetadata(
            tenant_id=bytes(tenant_id),
            tenant_name=tenant_name,
            last_updated=datetime.now(timezone.utc),
        )

    def get(self, tenant_id: bytes) -> TenantMetadata | None:
        return self._data.tenants.get(bytes(tenant_id))

    def list_tenants(self) -> list[TenantMetadata]:
        return sorted(
            self._data.tenants.values(), key=lambda t: (t.tenant_name, t.tenant_id)
        )

    def find_by_name(self, tenant_name: str) -> TenantMetadata | None:
        wanted = tenant_name.lower()
        matches = [
            t for t in self._data.tenants.values() if t.tenant_name.lower() == wanted
        ]
        return min(matches, key=lambda t: t.tenant_id, default=None)
