"""In-memory shared data store for catalog adapters."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from tenantcat.domain.value_objects import Shard, ShardMapping, TenantMetadata


@dataclass(slots=True)
class InMemoryCatalogData:
    """Shared in-memory backing store for the in-memory catalog adapters.

    A single instance is shared by the in-memory shard registry and metadata
    store so that mappings can check shard registration. `snapshot` and
    `restore` give the in-memory unit of work its rollback behavior.
    """

    # registration order is preserved; listing sorts
    shards: list[Shard] = field(default_factory=list)

    # keyed by tenant key
    mappings: dict[int, ShardMapping] = field(default_factory=dict)

    # keyed by raw tenant key
    tenants: dict[bytes, TenantMetadata] = field(default_factory=dict)

    def snapshot(self) -> InMemoryCatalogData:
        """Return a copy that is independent of later changes."""
        return copy.deepcopy(self)

    def restore(self, snapshot: InMemoryCatalogData) -> None:
        """Replace the current contents with those of `snapshot`."""
        self.shards = list(snapshot.shards)
        self.mappings = dict(snapshot.mappings)
        self.tenants = dict(snapshot.tenants)
