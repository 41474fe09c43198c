"""Service layer for TENANTCAT.

Implements the catalog use-cases: tenant registration, lookups and status
changes, each run as its own transaction through the retrying executor.

Dependency rule: may import `tenantcat.domain` and `tenantcat.interfaces`, but
not `tenantcat.adapters` or `tenantcat.entrypoints`.
"""
