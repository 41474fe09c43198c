"""Interface for the tenant metadata store.

Tenant metadata rows are keyed by the raw encoding of the tenant key (see
`tenantcat.domain.tenant_key.raw_key_bytes`) and carry the tenant's display name.
Rows are upserted on every registration and never deleted by the catalog.
"""

from __future__ import annotations

import abc

from tenantcat.domain.value_objects import TenantMetadata


class TenantMetadataStore(abc.ABC):
    """Persistence for tenant id -> tenant name records."""

    @abc.abstractmethod
    def upsert_tenant_name(self, tenant_id: bytes, tenant_name: str) -> None:
        """Insert or update the name of a tenant in one atomic merge.

        Inserts a new row if `tenant_id` is unseen, otherwise updates only the
        name (and its timestamp) of the existing row. Repeating the call with
        the same name is a no-op in effect; a changed name wins.

        Args:
            tenant_id: Raw tenant key bytes.
            tenant_name: The tenant's display name.
        """

    @abc.abstractmethod
    def get(self, tenant_id: bytes) -> TenantMetadata | None:
        """Return the metadata row for `tenant_id`, or ``None``."""

    @abc.abstractmethod
    def list_tenants(self) -> list[TenantMetadata]:
        """Return every metadata row, ordered by tenant name."""

    @abc.abstractmethod
    def find_by_name(self, tenant_name: str) -> TenantMetadata | None:
        """Return the row whose name matches `tenant_name` case-insensitively."""
