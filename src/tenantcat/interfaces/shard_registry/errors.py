"""Exceptions for shard registry operations."""

from tenantcat.domain.errors import CatalogError
from tenantcat.domain.value_objects import Shard


class ShardRegistryError(CatalogError):
    """Base class for shard registry errors."""


class MappingConflict(ShardRegistryError):
    """Conflict: tenant key already maps to a different shard.

    Attributes:
        tenant_key (int): The tenant key that is already mapped.
        existing (Shard): The shard the key is mapped to.
        requested (Shard): The shard the caller tried to map it to.
    """

    def __init__(self, tenant_key: int, existing: Shard, requested: Shard):
        super().__init__(
            f"Tenant key {tenant_key} is already mapped to shard '{existing}'; "
            f"refusing to map it to '{requested}'."
        )
        self.tenant_key = tenant_key
        self.existing = existing
        self.requested = requested


class ShardNotRegistered(ShardRegistryError):
    """Raised when a mapping targets a shard that was never added.

    Attributes:
        shard (Shard): The unknown shard.
    """

    def __init__(self, shard: Shard):
        super().__init__(f"Shard '{shard}' is not registered in the catalog.")
        self.shard = shard


class MappingNotFound(ShardRegistryError):
    """Raised when changing the state of a mapping that does not exist.

    Attributes:
        tenant_key (int): The tenant key with no mapping.
    """

    def __init__(self, tenant_key: int):
        super().__init__(f"No mapping exists for tenant key {tenant_key}.")
        self.tenant_key = tenant_key
