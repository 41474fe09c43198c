"""create catalog tables

Revision ID: 5c1f0d7a2b9e
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from tenantcat.adapters.db.sa_types import RAW_TENANT_KEY, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "5c1f0d7a2b9e"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "shards",
        sa.Column(
            "shard_id",
            sa.Integer(),
            sa.Identity(always=False, start=1),
            nullable=False,
            comment="Surrogate key of the shard.",
        ),
        sa.Column(
            "server_name",
            sa.String(length=128),
            nullable=False,
            comment="Address of the server hosting the tenant database.",
        ),
        sa.Column(
            "database_name",
            sa.String(length=128),
            nullable=False,
            comment="Name of the tenant database on that server.",
        ),
        sa.PrimaryKeyConstraint("shard_id", name=op.f("pk_shards")),
        sa.UniqueConstraint(
            "server_name",
            "database_name",
            name=op.f("uq_shards_server_name_database_name"),
        ),
        comment="Registered tenant databases.",
    )

    op.create_table(
        "shard_mappings",
        sa.Column(
            "tenant_key",
            sa.Integer(),
            autoincrement=False,
            nullable=False,
            comment="Signed 32-bit tenant key.",
        ),
        sa.Column(
            "shard_id",
            sa.Integer(),
            nullable=False,
            comment="Shard serving this tenant.",
        ),
        sa.Column(
            "status",
            sa.String(length=16),
            server_default="online",
            nullable=False,
            comment="Administrative status: 'online' or 'offline'.",
        ),
        sa.CheckConstraint(
            "status IN ('online', 'offline')",
            name=op.f("ck_shard_mappings_valid_status"),
        ),
        sa.ForeignKeyConstraint(
            ["shard_id"],
            ["shards.shard_id"],
            name=op.f("fk_shard_mappings_shard_id_shards"),
        ),
        sa.PrimaryKeyConstraint("tenant_key", name=op.f("pk_shard_mappings")),
        comment="Tenant key -> shard mapping (list mapping, one shard per key).",
    )

    op.create_table(
        "tenants",
        sa.Column(
            "tenant_id",
            RAW_TENANT_KEY,
            nullable=False,
            comment="Raw (normalized, big-endian) encoding of the tenant key.",
        ),
        sa.Column(
            "tenant_name",
            sa.String(length=128),
            nullable=False,
            comment="Display name of the tenant.",
        ),
        sa.Column(
            "last_updated",
            UTCDateTime(),
            nullable=True,
            comment="UTC time of the last upsert.",
        ),
        sa.PrimaryKeyConstraint("tenant_id", name=op.f("pk_tenants")),
        comment="Tenant metadata, one row per tenant.",
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_table("tenants")
    op.drop_table("shard_mappings")
    op.drop_table("shards")
