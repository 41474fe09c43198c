"""Interfaces for the shard registry.

Defines the `ShardRegistry` abstraction that owns the list of shards (server and
database pairs) and the tenant-key -> shard mapping table. A tenant key maps to
at most one shard; mappings are appended or left unchanged, never silently
overwritten.
"""

from __future__ import annotations

import abc

from tenantcat.domain.value_objects import MappingStatus, Shard, ShardMapping


class ShardRegistry(abc.ABC):
    """Shard list and tenant-key mappings with idempotent registration."""

    @abc.abstractmethod
    def add_shard(self, shard: Shard) -> None:
        """Register a shard.

        Adding a (server, database) pair that is already registered is a no-op.

        Args:
            shard: The shard to register.
        """

    @abc.abstractmethod
    def add_mapping(self, tenant_key: int, shard: Shard) -> None:
        """Map a tenant key to a registered shard.

        Creates the mapping if the key is unmapped. If the key already maps to
        the same shard, the call is idempotent. If it maps to a different shard
        the call is rejected and the existing mapping is left untouched.

        Args:
            tenant_key: The tenant key to map.
            shard: The target shard; must have been added with `add_shard`.

        Raises:
            MappingConflict: If the key already maps to a different shard.
            ShardNotRegistered: If the shard has not been added.
        """

    @abc.abstractmethod
    def list_shards(self) -> list[Shard]:
        """Return every registered shard, ordered by server then database."""

    @abc.abstractmethod
    def lookup_shard(self, tenant_key: int) -> Shard | None:
        """Resolve a tenant key to its shard.

        Returns:
            The shard if the key is mapped, otherwise ``None``. The mapping's
            status does not affect the result.
        """

    @abc.abstractmethod
    def get_mapping(self, tenant_key: int) -> ShardMapping | None:
        """Return the full mapping (shard and status) for a key, or ``None``."""

    @abc.abstractmethod
    def list_mappings(self) -> list[ShardMapping]:
        """Return every mapping, ordered by tenant key."""

    @abc.abstractmethod
    def set_mapping_status(self, tenant_key: int, status: MappingStatus) -> None:
        """Change the administrative status of an existing mapping.

        Setting the current status again is a no-op.

        Raises:
            MappingNotFound: If the key has no mapping.
        """

    def key_exists(self, tenant_key: int) -> bool:
        """Return True if the key is mapped, whatever the mapping's status."""
        return self.get_mapping(tenant_key) is not None
