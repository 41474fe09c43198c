"""Catalog service: the operations callers use to register and find tenants.

Every function takes the `Catalog` it works on explicitly. Each store call runs
in its own unit of work (one transaction) and goes through the retrying
executor, so a transient failure only repeats that one step.

Registering a tenant walks through four idempotent steps, in order:

    Unregistered -> ShardAdded -> MappingAdded -> MetadataSet (registered)

A crash between any two of them leaves a valid intermediate state, and running
the registration again resumes from there without side effects.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from tenantcat.domain import names
from tenantcat.domain.errors import CatalogError
from tenantcat.domain.tenant_key import derive_key, key_from_raw, raw_key_bytes
from tenantcat.domain.value_objects import MappingStatus, Shard, TenantRecord

from .errors import StoreUnavailable
from .retry import (
    DEFAULT_RETRY_POLICY,
    RetryPolicy,
    execute_with_retry,
    is_transient_error,
)

if TYPE_CHECKING:
    from tenantcat.interfaces.unit_of_work import AbstractUnitOfWork

__all__ = [
    "Catalog",
    "find_tenant_by_name",
    "get_tenant",
    "list_shards",
    "list_tenants",
    "locate_tenant",
    "register_tenant",
    "register_tenant_database",
    "set_tenant_offline",
    "set_tenant_online",
    "tenant_key_registered",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Catalog:
    """Handle on one catalog database.

    Attributes:
        uow: Unit of work giving transactional access to the shard registry
            and tenant metadata store.
        retry_policy: Attempt limit and backoff for store calls.
        should_retry: Predicate deciding which errors are retried.
        sleep: Function used to wait between attempts.
        name: Display name (e.g. the redacted URL) used in log messages.
    """

    uow: AbstractUnitOfWork
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    should_retry: Callable[[Exception], bool] = is_transient_error
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)
    name: str = "catalog"

    def close(self) -> None:
        """Release the resources held by the catalog's unit of work."""
        self.uow.close()

    def __enter__(self) -> Catalog:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _run(
    catalog: Catalog,
    description: str,
    work: Callable[[AbstractUnitOfWork], T],
    *,
    write: bool = False,
) -> T:
    """Run `work` in a fresh unit of work, retrying transient failures.

    Raises:
        CatalogError: Deterministic faults raised by `work`, unchanged.
        StoreUnavailable: If the store still fails after the last attempt.
        Exception: Any other error `catalog.should_retry` rejects, unchanged.
    """

    def attempt() -> T:
        with catalog.uow as uow:
            result = work(uow)
            if write:
                uow.commit()
            return result

    try:
        return execute_with_retry(
            attempt,
            policy=catalog.retry_policy,
            should_retry=catalog.should_retry,
            sleep=catalog.sleep,
            description=f"{catalog.name}: {description}",
        )
    except CatalogError:
        raise
    except Exception as exc:
        # errors the predicate rejects were raised by their only attempt
        if not catalog.should_retry(exc):
            raise
        raise StoreUnavailable(description, catalog.retry_policy.max_attempts) from exc


# ============================================================================
#                               Registration
# ============================================================================


def register_tenant_database(
    catalog: Catalog, tenant_name: str, tenant_key: int, shard: Shard
) -> None:
    """Register `shard` as the database of the tenant `tenant_key`.

    Runs, in order: name and shard validation, shard registration, mapping
    registration and tenant metadata upsert. Every step is idempotent, so the whole call may
    be repeated after a partial failure.

    Args:
        catalog: The catalog to register in.
        tenant_name: Display name of the tenant; must be a legal name.
        tenant_key: The tenant key, normally ``derive_key(tenant_name)``.
        shard: The tenant's database.

    Raises:
        NameValidationError: If `tenant_name` is not a legal name.
        InvalidShardError: If the shard's server or database name is empty or
            too long to store.
        ValueError: If `tenant_key` is not a 32-bit integer.
        MappingConflict: If the key is already mapped to another shard.
        StoreUnavailable: If the catalog store keeps failing.
    """
    names.validate_legal_name(tenant_name)
    shard.validate()
    tenant_id = raw_key_bytes(tenant_key)

    _run(catalog, "add_shard", lambda uow: uow.shards.add_shard(shard), write=True)
    _run(
        catalog,
        "add_mapping",
        lambda uow: uow.shards.add_mapping(tenant_key, shard),
        write=True,
    )
    _run(
        catalog,
        "upsert_tenant_name",
        lambda uow: uow.tenants.upsert_tenant_name(tenant_id, tenant_name),
        write=True,
    )
    logger.info(
        "Registered tenant %r (key %s) on shard %s", tenant_name, tenant_key, shard
    )


def register_tenant(catalog: Catalog, tenant_name: str, shard: Shard) -> int:
    """Derive the tenant's key from its name and register its database.

    Returns:
        The tenant key.
    """
    tenant_key = derive_key(tenant_name)
    register_tenant_database(catalog, tenant_name, tenant_key, shard)
    return tenant_key


# ============================================================================
#                                 Lookups
# ============================================================================


def locate_tenant(catalog: Catalog, tenant_key: int) -> Shard | None:
    """Return the shard serving `tenant_key`, or ``None`` if it is unmapped."""
    return _run(
        catalog, "lookup_shard", lambda uow: uow.shards.lookup_shard(tenant_key)
    )


def tenant_key_registered(catalog: Catalog, tenant_key: int) -> bool:
    """Return True if `tenant_key` is mapped, online or not."""
    return _run(catalog, "key_exists", lambda uow: uow.shards.key_exists(tenant_key))


def list_shards(catalog: Catalog) -> list[Shard]:
    """Return every shard registered in the catalog."""
    return _run(catalog, "list_shards", lambda uow: uow.shards.list_shards())


def get_tenant(catalog: Catalog, tenant_key: int) -> TenantRecord | None:
    """Return what the catalog knows about `tenant_key`, or ``None``."""

    def _get(uow: AbstractUnitOfWork) -> TenantRecord | None:
        if (mapping := uow.shards.get_mapping(tenant_key)) is None:
            return None
        metadata = uow.tenants.get(raw_key_bytes(tenant_key))
        return TenantRecord(
            tenant_key=tenant_key,
            tenant_name=metadata.tenant_name if metadata else None,
            shard=mapping.shard,
            status=mapping.status,
        )

    return _run(catalog, "get_tenant", _get)


def list_tenants(catalog: Catalog) -> list[TenantRecord]:
    """Return every mapped tenant, ordered by tenant key."""

    def _list(uow: AbstractUnitOfWork) -> list[TenantRecord]:
        tenant_names = {
            key_from_raw(t.tenant_id): t.tenant_name
            for t in uow.tenants.list_tenants()
        }
        return [
            TenantRecord(
                tenant_key=m.tenant_key,
                tenant_name=tenant_names.get(m.tenant_key),
                shard=m.shard,
                status=m.status,
            )
            for m in uow.shards.list_mappings()
        ]

    return _run(catalog, "list_tenants", _list)


def find_tenant_by_name(catalog: Catalog, tenant_name: str) -> TenantRecord | None:
    """Return the tenant whose stored name matches `tenant_name`, ignoring case.

    Unlike a lookup by derived key, this only finds tenants whose metadata was
    written, and matches the name exactly as registered (spaces included).
    """

    def _find(uow: AbstractUnitOfWork) -> TenantRecord | None:
        if (metadata := uow.tenants.find_by_name(tenant_name)) is None:
            return None
        tenant_key = key_from_raw(metadata.tenant_id)
        if (mapping := uow.shards.get_mapping(tenant_key)) is None:
            return None
        return TenantRecord(
            tenant_key=tenant_key,
            tenant_name=metadata.tenant_name,
            shard=mapping.shard,
            status=mapping.status,
        )

    return _run(catalog, "find_by_name", _find)


# ============================================================================
#                              Status changes
# ============================================================================


def _set_status(catalog: Catalog, tenant_key: int, status: MappingStatus) -> None:
    _run(
        catalog,
        "set_mapping_status",
        lambda uow: uow.shards.set_mapping_status(tenant_key, status),
        write=True,
    )


def set_tenant_offline(catalog: Catalog, tenant_key: int) -> None:
    """Mark the tenant's mapping offline. The mapping itself is kept.

    Raises:
        MappingNotFound: If the tenant is not registered.
    """
    _set_status(catalog, tenant_key, MappingStatus.OFFLINE)


def set_tenant_online(catalog: Catalog, tenant_key: int) -> None:
    """Mark the tenant's mapping online again.

    Raises:
        MappingNotFound: If the tenant is not registered.
    """
    _set_status(catalog, tenant_key, MappingStatus.ONLINE)
