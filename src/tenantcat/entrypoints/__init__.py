"""Entrypoints (inbound adapters) for TENANTCAT.

Expose the catalog to operators: parse and validate command-line input, call
the service layer through a catalog obtained from `tenantcat.bootstrap`, and
present the results.

Dependency rule: may import `tenantcat.bootstrap`, `tenantcat.service_layer`
and `tenantcat.domain`; avoid importing `tenantcat.adapters` directly.
"""
