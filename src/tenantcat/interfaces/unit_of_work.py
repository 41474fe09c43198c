"""Unit of Work interface for TENANTCAT.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the shard registry and tenant metadata store bound to one transaction,
with abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .shard_registry import ShardRegistry
from .tenant_metadata import TenantMetadataStore


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    shards: ShardRegistry
    tenants: TenantMetadataStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""

    def close(self) -> None:
        """Release long-lived resources (e.g. connection pools).

        The default implementation holds none.
        """
