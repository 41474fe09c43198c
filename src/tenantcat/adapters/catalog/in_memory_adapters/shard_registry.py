"""In-memory ShardRegistry implementation for testing purposes."""

from dataclasses import replace

from tenantcat.domain.value_objects import MappingStatus, Shard, ShardMapping
from tenantcat.interfaces.shard_registry import (
    MappingConflict,
    MappingNotFound,
    ShardNotRegistered,
    ShardRegistry,
)

from .store import InMemoryCatalogData


class InMemoryShardRegistry(ShardRegistry):
    """In-memory ShardRegistry implementation for testing purposes.

    Note: This implementation is not thread-safe and is intended
    solely for use in single-threaded test scenarios
    """

    def __init__(self, data: InMemoryCatalogData):
        self._data = data

    # --- shards ---

    def add_shard(self, shard: Shard) -> None:
        if shard not in self._data.shards:
            self._data.shards.append(shard)

    def list_shards(self) -> list[Shard]:
        return sorted(self._data.shards)

    # --- mappings ---

    def add_mapping(self, tenant_key: int, shard: Shard) -> None:
        if shard not in self._data.shards:
            raise ShardNotRegistered(shard)

        if (existing := self._data.mappings.get(tenant_key)) is not None:
            if existing.shard == shard:
                return  # idempotent
            raise MappingConflict(tenant_key, existing=existing.shard, requested=shard)

        self._data.mappings[tenant_key] = ShardMapping(tenant_key, shard)

    def get_mapping(self, tenant_key: int) -> ShardMapping | None:
        return self._data.mappings.get(tenant_key)

    def lookup_shard(self, tenant_key: int) -> Shard | None:
        if (mapping := self.get_mapping(tenant_key)) is None:
            return None
        return mapping.shard

    def list_mappings(self) -> list[ShardMapping]:
        return [self._data.mappings[key] for key in sorted(self._data.mappings)]

    def set_mapping_status(self, tenant_key: int, status: MappingStatus) -> None:
        if (mapping := self._data.mappings.get(tenant_key)) is None:
            raise MappingNotFound(tenant_key)
        self._data.mappings[tenant_key] = replace(mapping, status=status)
