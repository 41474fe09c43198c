"""Adapters (infrastructure) for TENANTCAT.

Provide concrete implementations of the catalog ports (SQL and in-memory shard
registries and metadata stores), plus persistence mapping and related wiring
(engines, metadata, migrations) and the URL redactor.

Dependency rule: may import `tenantcat.domain` and `tenantcat.interfaces`; the
domain must not import this package.
"""
