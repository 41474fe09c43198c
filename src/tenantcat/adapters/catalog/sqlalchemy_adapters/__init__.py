"""SQLAlchemy implementations of the catalog ports."""

from .shard_registry import SqlAlchemyShardRegistry
from .tenant_metadata import SqlAlchemyTenantMetadataStore

__all__ = ["SqlAlchemyShardRegistry", "SqlAlchemyTenantMetadataStore"]
