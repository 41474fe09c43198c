"""Value objects used across the domain layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .errors import InvalidShardError
from .names import MAX_NAME_LENGTH
from .tenant_key import raw_key_encoding


class MappingStatus(Enum):
    """Administrative state of a tenant mapping."""

    ONLINE = "online"
    OFFLINE = "offline"


@dataclass(frozen=True, order=True)
class Shard:
    """A tenant database, identified by server address and database name."""

    server: str
    database: str

    def __str__(self) -> str:
        return f"{self.server}/{self.database}"

    def validate(self) -> None:
        """Check that both parts are non-empty and fit the catalog columns.

        Raises:
            InvalidShardError: For the first part that does not.
        """
        for field, value in (("server", self.server), ("database", self.database)):
            if not value or value.isspace():
                raise InvalidShardError(field, value, "must not be empty")
            if len(value) > MAX_NAME_LENGTH:
                raise InvalidShardError(
                    field, value, f"longer than {MAX_NAME_LENGTH} characters"
                )


@dataclass(frozen=True)
class ShardMapping:
    """Binding from a tenant key to the shard that serves it."""

    tenant_key: int
    shard: Shard
    status: MappingStatus = MappingStatus.ONLINE


@dataclass(frozen=True)
class TenantMetadata:
    """Catalog row describing a tenant, keyed by the raw tenant key."""

    tenant_id: bytes
    tenant_name: str
    last_updated: datetime | None = None

    @property
    def tenant_id_hex(self) -> str:
        """The tenant id as an uppercase ``0x`` literal."""
        return "0x" + self.tenant_id.hex().upper()


@dataclass(frozen=True)
class TenantRecord:
    """Read model joining a tenant's mapping with its metadata."""

    tenant_key: int
    tenant_name: str | None
    shard: Shard
    status: MappingStatus

    @property
    def tenant_id_hex(self) -> str:
        """The raw tenant key as an uppercase ``0x`` literal."""
        return raw_key_encoding(self.tenant_key)
