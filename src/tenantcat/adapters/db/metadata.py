"""The `MetaData` shared by the catalog tables and the Alembic environment.

The naming convention gives every constraint a stable name (``pk_shards``,
``uq_shards_server_name_database_name``, ``fk_shard_mappings_shard_id_shards``,
``ck_shard_mappings_valid_status``), so migrations can refer to them by name
on both PostgreSQL and SQLite.
"""

from sqlalchemy import MetaData

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)
