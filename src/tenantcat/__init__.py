"""TENANTCAT

A tenant catalog for horizontally-partitioned multi-tenant services.
It maps each tenant to the database ("shard") holding its data, keeps
human-readable tenant metadata, and validates names before provisioning.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
