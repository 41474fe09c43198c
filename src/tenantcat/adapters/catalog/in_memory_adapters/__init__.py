"""In-memory implementations of the catalog ports, for tests and dry runs."""

from .shard_registry import InMemoryShardRegistry
from .store import InMemoryCatalogData
from .tenant_metadata import InMemoryTenantMetadataStore

__all__ = [
    "InMemoryCatalogData",
    "InMemoryShardRegistry",
    "InMemoryTenantMetadataStore",
]
