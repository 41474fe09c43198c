"""Catalog schema.

Defines the three catalog tables:

- ``shards``: one row per tenant database (server + database name).
- ``shard_mappings``: tenant key -> shard, at most one row per key.
- ``tenants``: tenant metadata keyed by the raw tenant key.

Constraints (enforced here):

| Constraint                                | Purpose                          |
|-------------------------------------------|----------------------------------|
| UNIQUE(server_name, database_name)        | a shard is registered once       |
| PRIMARY KEY(tenant_key)                   | one key, one shard               |
| FOREIGN KEY(shard_id) -> shards           | mappings point at known shards   |
| CHECK(status IN ('online', 'offline'))    | mapping status domain            |
| PRIMARY KEY(tenant_id)                    | one metadata row per tenant      |

The primary key on ``shard_mappings`` is what arbitrates concurrent
registrations of the same tenant key.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Identity,
    Integer,
    String,
    Table,
    UniqueConstraint,
)

from tenantcat.adapters.db.metadata import metadata
from tenantcat.adapters.db.sa_types import RAW_TENANT_KEY, UTCDateTime
from tenantcat.domain.names import MAX_NAME_LENGTH

__all__ = ["shards", "shard_mappings", "tenants"]

NAME_LENGTH = MAX_NAME_LENGTH

shards = Table(
    "shards",
    metadata,
    Column(
        "shard_id",
        Integer,
        Identity(start=1),
        primary_key=True,
        comment="Surrogate key of the shard.",
    ),
    Column(
        "server_name",
        String(NAME_LENGTH),
        nullable=False,
        comment="Address of the server hosting the tenant database.",
    ),
    Column(
        "database_name",
        String(NAME_LENGTH),
        nullable=False,
        comment="Name of the tenant database on that server.",
    ),
    UniqueConstraint("server_name", "database_name"),
    comment="Registered tenant databases.",
)

shard_mappings = Table(
    "shard_mappings",
    metadata,
    Column(
        "tenant_key",
        Integer,
        primary_key=True,
        autoincrement=False,
        comment="Signed 32-bit tenant key.",
    ),
    Column(
        "shard_id",
        Integer,
        ForeignKey("shards.shard_id"),
        nullable=False,
        comment="Shard serving this tenant.",
    ),
    Column(
        "status",
        String(16),
        nullable=False,
        server_default="online",
        comment="Administrative status: 'online' or 'offline'.",
    ),
    CheckConstraint("status IN ('online', 'offline')", name="valid_status"),
    comment="Tenant key -> shard mapping (list mapping, one shard per key).",
)

tenants = Table(
    "tenants",
    metadata,
    Column(
        "tenant_id",
        RAW_TENANT_KEY,
        primary_key=True,
        comment="Raw (normalized, big-endian) encoding of the tenant key.",
    ),
    Column(
        "tenant_name",
        String(NAME_LENGTH),
        nullable=False,
        comment="Display name of the tenant.",
    ),
    Column(
        "last_updated",
        UTCDateTime(),
        nullable=True,
        comment="UTC time of the last upsert.",
    ),
    comment="Tenant metadata, one row per tenant.",
)
