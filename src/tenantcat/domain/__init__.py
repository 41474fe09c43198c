"""Domain layer for TENANTCAT.

Contains the pure catalog rules: name validation, tenant-key derivation and the
value objects describing shards, mappings and tenant metadata. This package is
deliberately technology-agnostic.

Dependency rule: do not import from `tenantcat.adapters` or
`tenantcat.entrypoints`.
"""
